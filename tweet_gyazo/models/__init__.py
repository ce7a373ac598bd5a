from .relay_models import MediaItem, TweetStatus, UploadRequest, GyazoUpload, RelayResult

__all__ = ['MediaItem', 'TweetStatus', 'UploadRequest', 'GyazoUpload', 'RelayResult']

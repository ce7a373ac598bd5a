"""
Core relay functionality.

The pipeline itself lives in ``tweet_gyazo.core.relay``; it depends on
the platform clients, which in turn depend on the names exported here.
"""

from .errors import RelayError, ValidationError, FetchError, ParseError, DownloadError, UploadError
from .oauth1 import OAuth1Signer

__all__ = [
    'RelayError',
    'ValidationError',
    'FetchError',
    'ParseError',
    'DownloadError',
    'UploadError',
    'OAuth1Signer',
]

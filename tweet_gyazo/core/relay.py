from typing import Optional
from urllib.parse import urlparse
import asyncio
import aiohttp
from ..config import Settings
from .errors import DownloadError, UploadError
from .oauth1 import OAuth1Signer
from ..models.relay_models import GyazoUpload, MediaItem, RelayResult, UploadRequest
from ..platforms.gyazo import GyazoClient
from ..platforms.twitter import TwitterClient
from ..utils.logger import get_logger

logger = get_logger(__name__)

def status_id_from_link(link: str) -> str:
    """
    Get the status id from a tweet link.

    The id is the last non-empty path segment, so trailing slashes,
    query strings (``?s=20``) and fragments are ignored. A bare id is
    returned as is. No other validation is done.
    """
    path = urlparse(link.strip()).path
    segments = [segment for segment in path.split('/') if segment]
    return segments[-1] if segments else ''

def strip_hashtags(text: str) -> str:
    """Remove every '#' so Gyazo does not turn words into hashtags."""
    return text.replace('#', '')

async def relay_media(session: aiohttp.ClientSession, item: MediaItem, text: str,
                      gyazo: GyazoClient) -> GyazoUpload:
    """
    Download one photo and stream it into a Gyazo upload.

    Nothing is uploaded if the download does not succeed. A download that
    breaks off while its stream is being uploaded is reported as a
    DownloadError, not an UploadError.
    """
    upload_request = UploadRequest(
        referer_url=item.expanded_url,
        title='',
        desc=strip_hashtags(text),
    )

    try:
        async with session.get(item.media_url) as img_res:
            if not img_res.ok:
                raise DownloadError(f"Failed to download image {item.media_url}",
                                    upstream_status=img_res.status)

            content_type = img_res.headers.get('Content-Type', 'image/jpeg')
            filename = urlparse(item.media_url).path.rsplit('/', 1)[-1] or 'image.jpg'
            try:
                return await gyazo.upload(img_res.content, upload_request,
                                          content_type=content_type, filename=filename)
            except UploadError as e:
                # The download is read while the upload body is written
                stream_error = img_res.content.exception()
                if stream_error is not None:
                    raise DownloadError(f"Image stream broke for {item.media_url}: {str(stream_error)}") from e
                raise
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise DownloadError(f"Image connection error for {item.media_url}: {str(e)}")

async def relay_status(link: str, settings: Settings,
                       session: Optional[aiohttp.ClientSession] = None) -> RelayResult:
    """
    Relay every photo of a tweet to Gyazo.

    All photos are downloaded and uploaded concurrently. Every relay runs
    to completion even when another one fails; afterwards each failure is
    logged and the first one is raised.

    Args:
        link: Link to the tweet, e.g. https://twitter.com/user/status/123
        settings: Credentials and endpoints
        session: Optional session to reuse; one is created otherwise

    Returns:
        RelayResult with one GyazoUpload per photo
    """
    logger.info(f"linkToTweet: {link}")
    status_id = status_id_from_link(link)
    logger.info(f"status_id: {status_id}")

    if session is None:
        timeout = aiohttp.ClientTimeout(total=settings.HTTP_TIMEOUT)
        async with aiohttp.ClientSession(timeout=timeout) as own_session:
            return await _relay_status(own_session, status_id, settings)
    return await _relay_status(session, status_id, settings)

async def _relay_status(session: aiohttp.ClientSession, status_id: str,
                        settings: Settings) -> RelayResult:
    twitter = TwitterClient(
        OAuth1Signer.from_settings(settings),
        settings.TWITTER_STATUS_SHOW_URL,
        session=session,
    )
    gyazo = GyazoClient(
        settings.GYAZO_TOKEN.get_secret_value(),
        settings.GYAZO_UPLOAD_URL,
        session=session,
    )

    status = await twitter.get_status(status_id)

    results = await asyncio.gather(
        *(relay_media(session, item, status.text, gyazo) for item in status.media),
        return_exceptions=True,
    )

    failures = [r for r in results if isinstance(r, BaseException)]
    for item, result in zip(status.media, results):
        if isinstance(result, BaseException):
            logger.error(f"Relay failed for {item.media_url}: {str(result)}")

    if failures:
        logger.error(f"{len(failures)} of {len(results)} images failed for status {status_id}")
        raise failures[0]

    return RelayResult(status_id=status_id, text=status.text, uploads=list(results))

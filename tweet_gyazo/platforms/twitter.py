from typing import Dict, Optional
from urllib.parse import urlencode
import asyncio
import json
import aiohttp
from pydantic import ValidationError as ModelValidationError
from ..core.errors import FetchError, ParseError
from ..core.oauth1 import OAuth1Signer
from ..models.relay_models import MediaItem, TweetStatus
from ..utils.logger import get_logger

logger = get_logger(__name__)

def parse_status(data: Dict) -> TweetStatus:
    """
    Extract caption and photo attachments from a v1.1 status object.

    Only ``extended_entities.media`` entries of type ``photo`` are kept;
    videos and animated GIFs are dropped. A status without
    ``extended_entities`` has no photos, which is not an error.

    Args:
        data: Decoded JSON body of ``statuses/show``

    Returns:
        TweetStatus with the caption and (expanded_url, media_url_https) pairs
    """
    if not isinstance(data, dict) or not isinstance(data.get('text'), str):
        raise ParseError("Status response has no text field")

    media = (data.get('extended_entities') or {}).get('media') or []
    try:
        # make sure to use https urls
        photos = tuple(
            MediaItem(expanded_url=obj['expanded_url'], media_url=obj['media_url_https'])
            for obj in media
            if obj.get('type') == 'photo'
        )
    except (KeyError, TypeError, AttributeError, ModelValidationError) as e:
        raise ParseError(f"Malformed media entry in status response: {str(e)}")

    return TweetStatus(text=data['text'], media=photos)

class TwitterClient:
    """Read-only client for the Twitter v1.1 status lookup."""

    def __init__(self, signer: OAuth1Signer, status_show_url: str,
                 session: Optional[aiohttp.ClientSession] = None):
        self.signer = signer
        self.status_show_url = status_show_url
        self.session = session

    async def get_status(self, status_id: str) -> TweetStatus:
        """
        Fetch one status with an OAuth 1.0a signed request.

        Args:
            status_id: Tweet id, the last path segment of the tweet link

        Returns:
            Parsed TweetStatus
        """
        url = f"{self.status_show_url}?{urlencode({'id': status_id})}"
        headers = self.signer.sign(url, method="GET")

        if self.session is None:
            async with aiohttp.ClientSession() as session:
                return await self._get_status(session, url, headers)
        return await self._get_status(self.session, url, headers)

    async def _get_status(self, session: aiohttp.ClientSession, url: str, headers: Dict) -> TweetStatus:
        try:
            async with session.get(url, headers=headers) as response:
                response_text = await response.text()
                if not response.ok:
                    logger.error(f"Status lookup failed with status {response.status}: {response_text}")
                    raise FetchError("Status lookup failed from twitter", upstream_status=response.status)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Twitter connection error: {str(e)}")

        try:
            data = json.loads(response_text)
        except json.JSONDecodeError as e:
            raise ParseError(f"JSON parse fail msg: {str(e)}")

        status = parse_status(data)
        logger.info(f"text: {status.text}")
        logger.info(f"found {len(status.media)} medias")
        return status

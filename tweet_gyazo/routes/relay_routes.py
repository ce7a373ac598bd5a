from typing import Optional
from fastapi import APIRouter, Depends, Request, Response
from ..config import Settings, get_settings
from ..core.errors import ValidationError
from ..core import relay
from ..utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()

# Every method is routed here so the validator, not the router, answers 405
RELAY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

def validate_request(method: str, content_type: Optional[str]) -> None:
    """Only POST with a text/plain body is accepted."""
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if method.upper() != "POST" or media_type != "text/plain":
        raise ValidationError(f"not a valid request: {method} {content_type or '<no content-type>'}")

@router.api_route("/", methods=RELAY_METHODS)
async def relay_tweet(request: Request, settings: Settings = Depends(get_settings)):
    """
    Get tweet and upload its photos to Gyazo.

    Example:
        curl -X POST "http://localhost:8000/" -H "Content-Type:text/plain" --data 'LINK_TO_TWEET'
    """
    validate_request(request.method, request.headers.get("content-type"))

    body = await request.body()
    link = body.decode("utf-8", errors="replace")

    result = await relay.relay_status(link, settings)
    logger.info(f"Relayed {len(result.uploads)} images for status {result.status_id}")
    return Response(status_code=200)

from typing import Dict
from oauthlib.oauth1 import Client, SIGNATURE_HMAC, SIGNATURE_TYPE_AUTH_HEADER
from ..utils.logger import get_logger

logger = get_logger(__name__)

class OAuth1Signer:
    """Signs requests with OAuth 1.0a (HMAC-SHA1) user-context credentials.

    This is the signing engine behind ``requests_oauthlib.OAuth1``, used
    directly so the resulting header can be sent with aiohttp.
    """

    def __init__(self, consumer_key: str, consumer_secret: str,
                 access_token: str, access_token_secret: str):
        self._client = Client(
            consumer_key,
            client_secret=consumer_secret,
            resource_owner_key=access_token,
            resource_owner_secret=access_token_secret,
            signature_method=SIGNATURE_HMAC,
            signature_type=SIGNATURE_TYPE_AUTH_HEADER,
        )

    @classmethod
    def from_settings(cls, settings) -> "OAuth1Signer":
        return cls(**settings.twitter_credentials)

    def sign(self, url: str, method: str = "GET") -> Dict[str, str]:
        """
        Build the Authorization header for a request.

        Query parameters in ``url`` are part of the signature base string,
        so the request must be sent to exactly this URL.

        Args:
            url: Full request URL including query string
            method: HTTP method

        Returns:
            Headers to attach to the request
        """
        _, headers, _ = self._client.sign(url, http_method=method)
        logger.debug(f"Signed {method} request to {url.split('?')[0]}")
        return {"Authorization": headers["Authorization"]}

from typing import Optional, Union
import asyncio
import json
import aiohttp
from pydantic import ValidationError as ModelValidationError
from ..core.errors import UploadError
from ..models.relay_models import GyazoUpload, UploadRequest
from ..utils.logger import get_logger

logger = get_logger(__name__)

ImageSource = Union[bytes, aiohttp.StreamReader]

class GyazoClient:
    """Uploads images to Gyazo through the multipart upload API."""

    def __init__(self, access_token: str, upload_url: str,
                 session: Optional[aiohttp.ClientSession] = None):
        self._access_token = access_token
        self.upload_url = upload_url
        self.session = session

    def build_form(self, image: ImageSource, upload_request: UploadRequest,
                   content_type: str = "image/jpeg", filename: str = "image.jpg") -> aiohttp.FormData:
        """
        Build the multipart body for one upload.

        A ``StreamReader`` is written to the body as it is read, so a
        download can be piped through without buffering it in memory.
        """
        form = aiohttp.FormData()
        form.add_field('access_token', self._access_token)
        form.add_field('imagedata', image, filename=filename, content_type=content_type)
        for name, value in upload_request.form_fields().items():
            form.add_field(name, value)
        return form

    async def upload(self, image: ImageSource, upload_request: UploadRequest,
                     content_type: str = "image/jpeg", filename: str = "image.jpg") -> GyazoUpload:
        """
        Upload one image.

        Args:
            image: Raw bytes or a response stream of the image
            upload_request: referer_url, title and desc for the image
            content_type: MIME type of the image part
            filename: Filename of the image part

        Returns:
            GyazoUpload with the permalink of the new image
        """
        form = self.build_form(image, upload_request, content_type=content_type, filename=filename)

        if self.session is None:
            async with aiohttp.ClientSession() as session:
                return await self._post(session, form)
        return await self._post(self.session, form)

    async def _post(self, session: aiohttp.ClientSession, form: aiohttp.FormData) -> GyazoUpload:
        try:
            async with session.post(self.upload_url, data=form) as response:
                response_text = await response.text()
                if not response.ok:
                    logger.error(f"Upload failed with status {response.status}: {response_text}")
                    raise UploadError("Upload rejected from gyazo", upstream_status=response.status)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UploadError(f"Uploading gyazo failed msg: {str(e)}")

        try:
            upload = GyazoUpload.model_validate(json.loads(response_text))
        except (json.JSONDecodeError, ModelValidationError) as e:
            raise UploadError(f"Unexpected response from gyazo: {str(e)}")

        logger.info(f"uploaded to gyazo: {upload.permalink_url}")
        return upload

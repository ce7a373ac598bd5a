from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Tuple, Dict


class MediaItem(BaseModel):
    """One photo attached to a tweet."""
    model_config = ConfigDict(frozen=True)

    expanded_url: str
    media_url: str


class TweetStatus(BaseModel):
    """Caption and photos of a tweet."""
    model_config = ConfigDict(frozen=True)

    text: str
    media: Tuple[MediaItem, ...] = ()


class UploadRequest(BaseModel):
    """Metadata sent to Gyazo alongside one image."""
    model_config = ConfigDict(frozen=True)

    referer_url: str
    title: str = ""
    desc: str = ""

    def form_fields(self) -> Dict[str, str]:
        """Text fields of the multipart body, in upload order."""
        return {
            "referer_url": self.referer_url,
            "title": self.title,
            "desc": self.desc,
        }


class GyazoUpload(BaseModel):
    """Response model for a Gyazo upload."""
    permalink_url: str
    image_id: Optional[str] = None
    url: Optional[str] = None
    thumb_url: Optional[str] = None
    type: Optional[str] = None


class RelayResult(BaseModel):
    """Outcome of relaying every photo of one tweet."""
    status_id: str
    text: str
    uploads: List[GyazoUpload] = Field(default_factory=list)

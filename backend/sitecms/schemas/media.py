from typing import List, Optional

from pydantic import Field

from .base import RequestModel


class UploadImageInput(RequestModel):
    image: Optional[str] = None
    folder: Optional[str] = None


class UploadImagesInput(RequestModel):
    images: List[str] = Field(default_factory=list)
    folder: Optional[str] = None


class ImageUrlInput(RequestModel):
    url: Optional[str] = None
    folder: Optional[str] = None


class DeleteImageInput(RequestModel):
    public_id: Optional[str] = None
    url: Optional[str] = None

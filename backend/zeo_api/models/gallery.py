from typing import Optional
from pydantic import BaseModel
from .base import RecordModel


class GalleryPhoto(RecordModel):
    order: int = 0
    isActive: bool = True


class GalleryMetadata(BaseModel):
    totalPhotos: int = 0
    lastUpdated: Optional[str] = None
    pageTitle: str = "Kailash Mansarovar"
    pageSubtitle: str = "Sacred Journey Gallery"

"""Gallery schemas"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ...schemas import ORMModel, RequestModel


class GalleryItemCreate(RequestModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: str = Field(min_length=1)


class GalleryItemResponse(ORMModel):
    id: int
    title: str
    description: Optional[str] = None
    image_url: str
    created_at: Optional[datetime] = None

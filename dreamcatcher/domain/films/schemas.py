"""Film showcase schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...schemas import ORMModel, RequestModel


class FilmCreate(RequestModel):
    youtube_url: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class FilmUpdate(RequestModel):
    youtube_url: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None


class FilmResponse(ORMModel):
    id: int
    youtube_url: str
    title: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    sort_order: int
    created_at: Optional[datetime] = None


class FilmsPage(BaseModel):
    """Public films page: the showcase plus page settings without their key prefix"""

    films: list[FilmResponse]
    settings: dict[str, Optional[str]]

from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import Field

from .base import CamelModel, PartialUpdate


class YoutubeVideoBase(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    video_url: str = Field(min_length=1)
    thumbnail_url: Optional[str] = None


class YoutubeVideoCreate(YoutubeVideoBase):
    pass


class YoutubeVideoUpdate(PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("title", "description", "video_url")

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    video_url: Optional[str] = Field(default=None, min_length=1)
    thumbnail_url: Optional[str] = None


class YoutubeVideo(YoutubeVideoBase):
    id: int
    created_at: datetime

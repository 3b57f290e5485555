from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import Field

from .base import CamelModel, PartialUpdate


class BlogPostBase(CamelModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    excerpt: str = Field(min_length=1)
    image_url: Optional[str] = None
    category: str = Field(min_length=1)


class BlogPostCreate(BlogPostBase):
    pass


class BlogPostUpdate(PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("title", "content", "excerpt", "category")

    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    excerpt: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1)


class BlogPost(BlogPostBase):
    id: int
    created_at: datetime
    updated_at: datetime

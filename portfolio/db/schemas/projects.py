from datetime import datetime
from typing import ClassVar, List, Optional, Tuple

from pydantic import Field

from .base import CamelModel, PartialUpdate


class ProjectBase(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("title", "description", "technologies")

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    technologies: Optional[List[str]] = None


class Project(ProjectBase):
    id: int
    created_at: datetime

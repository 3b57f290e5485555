from typing import ClassVar, Optional, Tuple

from pydantic import Field

from .base import CamelModel, PartialUpdate

# Categories the public site renders; others are stored as given.
SKILL_CATEGORIES = ("frontend", "backend", "additional")


class SkillBase(CamelModel):
    name: str = Field(min_length=1)
    percentage: int = Field(ge=0, le=100)
    category: str = Field(min_length=1)


class SkillCreate(SkillBase):
    pass


class SkillUpdate(PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "percentage", "category")

    name: Optional[str] = Field(default=None, min_length=1)
    percentage: Optional[int] = Field(default=None, ge=0, le=100)
    category: Optional[str] = Field(default=None, min_length=1)


class Skill(SkillBase):
    id: int

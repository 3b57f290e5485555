"""
Domain-split Pydantic schemas with a flat re-export.

Routes and repositories import everything from ``portfolio.db.schemas``.
"""

from .base import CamelModel, PartialUpdate
from .users import UserCreate, User, UserPublic, LoginRequest
from .projects import ProjectBase, ProjectCreate, ProjectUpdate, Project
from .blog_posts import BlogPostBase, BlogPostCreate, BlogPostUpdate, BlogPost
from .videos import YoutubeVideoBase, YoutubeVideoCreate, YoutubeVideoUpdate, YoutubeVideo
from .skills import SKILL_CATEGORIES, SkillBase, SkillCreate, SkillUpdate, Skill
from .contacts import ContactCreate, Contact
from .dashboard import DashboardStats

__all__ = [
    # base
    "CamelModel",
    "PartialUpdate",
    # users
    "UserCreate",
    "User",
    "UserPublic",
    "LoginRequest",
    # content
    "ProjectBase",
    "ProjectCreate",
    "ProjectUpdate",
    "Project",
    "BlogPostBase",
    "BlogPostCreate",
    "BlogPostUpdate",
    "BlogPost",
    "YoutubeVideoBase",
    "YoutubeVideoCreate",
    "YoutubeVideoUpdate",
    "YoutubeVideo",
    "SKILL_CATEGORIES",
    "SkillBase",
    "SkillCreate",
    "SkillUpdate",
    "Skill",
    # messages
    "ContactCreate",
    "Contact",
    "DashboardStats",
]

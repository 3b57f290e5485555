"""
SQLAlchemy models for the SQL storage backend.

Exposes ``Base``, ``now_utc`` and all ORM classes from one import path.
"""

from .base import Base, now_utc  # re-export

from .users import User
from .content import Project, BlogPost, YoutubeVideo, Skill
from .contacts import Contact

__all__ = [
    # base
    "Base",
    "now_utc",
    # users
    "User",
    # content
    "Project",
    "BlogPost",
    "YoutubeVideo",
    "Skill",
    # messages
    "Contact",
]

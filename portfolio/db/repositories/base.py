"""
Content repository contract.

Every storage backend implements this interface. Ids passed in and returned are
the application's positive integers; how they map onto native storage keys is
the backend's concern. Absence is reported as ``None``/``False``; storage
failures surface as ``PersistenceError``.
"""
from __future__ import annotations

import abc
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from portfolio.db import schemas
from portfolio.db.models.base import now_utc

Clock = Callable[[], datetime]

# Fields an update may never touch, whatever the payload says
PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at", "is_read"})


def clean_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Drop server-managed keys from a partial update."""
    return {key: value for key, value in (changes or {}).items() if key not in PROTECTED_FIELDS}


class ContentRepository(abc.ABC):
    """CRUD for users, portfolio content and contact messages."""

    backend_name: str = "abstract"

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock or now_utc

    def now(self) -> datetime:
        return self._clock()

    # Users
    @abc.abstractmethod
    def get_user(self, user_id: int) -> Optional[schemas.User]: ...

    @abc.abstractmethod
    def get_user_by_username(self, username: str) -> Optional[schemas.User]: ...

    @abc.abstractmethod
    def create_user(self, user: schemas.UserCreate) -> schemas.User: ...

    @abc.abstractmethod
    def update_user_password(
        self, user_id: int, password_hash: str, *, is_admin: Optional[bool] = None
    ) -> Optional[schemas.User]: ...

    # Projects
    @abc.abstractmethod
    def list_projects(self) -> List[schemas.Project]: ...

    @abc.abstractmethod
    def get_project(self, project_id: int) -> Optional[schemas.Project]: ...

    @abc.abstractmethod
    def create_project(self, project: schemas.ProjectCreate) -> schemas.Project: ...

    @abc.abstractmethod
    def update_project(self, project_id: int, changes: Dict[str, Any]) -> Optional[schemas.Project]: ...

    @abc.abstractmethod
    def delete_project(self, project_id: int) -> bool: ...

    # Blog posts
    @abc.abstractmethod
    def list_blog_posts(self) -> List[schemas.BlogPost]: ...

    @abc.abstractmethod
    def get_blog_post(self, post_id: int) -> Optional[schemas.BlogPost]: ...

    @abc.abstractmethod
    def create_blog_post(self, post: schemas.BlogPostCreate) -> schemas.BlogPost: ...

    @abc.abstractmethod
    def update_blog_post(self, post_id: int, changes: Dict[str, Any]) -> Optional[schemas.BlogPost]:
        """Merge ``changes``; ``updated_at`` is refreshed even when empty."""

    @abc.abstractmethod
    def delete_blog_post(self, post_id: int) -> bool: ...

    # YouTube videos
    @abc.abstractmethod
    def list_youtube_videos(self) -> List[schemas.YoutubeVideo]: ...

    @abc.abstractmethod
    def get_youtube_video(self, video_id: int) -> Optional[schemas.YoutubeVideo]: ...

    @abc.abstractmethod
    def create_youtube_video(self, video: schemas.YoutubeVideoCreate) -> schemas.YoutubeVideo: ...

    @abc.abstractmethod
    def update_youtube_video(self, video_id: int, changes: Dict[str, Any]) -> Optional[schemas.YoutubeVideo]: ...

    @abc.abstractmethod
    def delete_youtube_video(self, video_id: int) -> bool: ...

    # Skills
    @abc.abstractmethod
    def list_skills(self, category: Optional[str] = None) -> List[schemas.Skill]: ...

    @abc.abstractmethod
    def get_skill(self, skill_id: int) -> Optional[schemas.Skill]: ...

    @abc.abstractmethod
    def create_skill(self, skill: schemas.SkillCreate) -> schemas.Skill: ...

    @abc.abstractmethod
    def update_skill(self, skill_id: int, changes: Dict[str, Any]) -> Optional[schemas.Skill]: ...

    @abc.abstractmethod
    def delete_skill(self, skill_id: int) -> bool: ...

    # Contact messages
    @abc.abstractmethod
    def list_contacts(self) -> List[schemas.Contact]: ...

    @abc.abstractmethod
    def get_contact(self, contact_id: int) -> Optional[schemas.Contact]: ...

    @abc.abstractmethod
    def create_contact(self, contact: schemas.ContactCreate) -> schemas.Contact:
        """Store a new message; ``is_read`` always starts False."""

    @abc.abstractmethod
    def mark_contact_read(self, contact_id: int) -> bool: ...

    @abc.abstractmethod
    def delete_contact(self, contact_id: int) -> bool: ...

    # Aggregates
    @abc.abstractmethod
    def get_dashboard_stats(self) -> schemas.DashboardStats:
        """Four independent counts; not a point-in-time snapshot."""

    # Lifecycle
    def prepare_storage(self) -> Dict[str, Any]:
        """Bring storage up to the layout this code expects. Returns a report."""
        return {}

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        return None

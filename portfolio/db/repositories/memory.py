"""
In-process repository backed by dictionaries.

Used for tests and local development. Ids come from per-kind counters and are
never reused within a process. Every returned object is a copy, so callers
cannot mutate stored state.
"""
from __future__ import annotations

import threading
from typing import Any, Dict, Iterable, List, Optional, TypeVar

from pydantic import BaseModel

from portfolio.db import schemas
from portfolio.db.repositories.base import Clock, ContentRepository, clean_changes
from portfolio.errors import DuplicateUserError

M = TypeVar("M", bound=BaseModel)


def _newest_first(items: Iterable[M]) -> List[M]:
    return sorted(items, key=lambda item: (item.created_at, item.id), reverse=True)


class _Table:
    """One entity kind: rows keyed by id plus the next id to hand out."""

    def __init__(self) -> None:
        self.rows: Dict[int, BaseModel] = {}
        self.next_id = 1

    def allocate_id(self) -> int:
        new_id = self.next_id
        self.next_id += 1
        return new_id


class MemoryContentRepository(ContentRepository):
    backend_name = "memory"

    def __init__(self, clock: Optional[Clock] = None) -> None:
        super().__init__(clock)
        self._lock = threading.RLock()
        self._users = _Table()
        self._projects = _Table()
        self._blog_posts = _Table()
        self._videos = _Table()
        self._skills = _Table()
        self._contacts = _Table()

    # Generic helpers
    def _get(self, table: _Table, item_id: int):
        with self._lock:
            row = table.rows.get(item_id)
            return row.model_copy(deep=True) if row is not None else None

    def _insert(self, table: _Table, model_cls, data: Dict[str, Any]):
        with self._lock:
            row = model_cls(id=table.allocate_id(), **data)
            table.rows[row.id] = row
            return row.model_copy(deep=True)

    def _update(self, table: _Table, item_id: int, changes: Dict[str, Any]):
        with self._lock:
            existing = table.rows.get(item_id)
            if existing is None:
                return None
            merged = existing.model_copy(update=changes, deep=True)
            table.rows[item_id] = merged
            return merged.model_copy(deep=True)

    def _delete(self, table: _Table, item_id: int) -> bool:
        with self._lock:
            return table.rows.pop(item_id, None) is not None

    def _all(self, table: _Table) -> List[Any]:
        with self._lock:
            return [row.model_copy(deep=True) for row in table.rows.values()]

    # Users
    def get_user(self, user_id: int) -> Optional[schemas.User]:
        return self._get(self._users, user_id)

    def get_user_by_username(self, username: str) -> Optional[schemas.User]:
        with self._lock:
            for user in self._users.rows.values():
                if user.username == username:
                    return user.model_copy(deep=True)
        return None

    def create_user(self, user: schemas.UserCreate) -> schemas.User:
        with self._lock:
            if any(existing.username == user.username for existing in self._users.rows.values()):
                raise DuplicateUserError(user.username)
            return self._insert(self._users, schemas.User, user.model_dump())

    def update_user_password(
        self, user_id: int, password_hash: str, *, is_admin: Optional[bool] = None
    ) -> Optional[schemas.User]:
        changes: Dict[str, Any] = {"password": password_hash}
        if is_admin is not None:
            changes["is_admin"] = is_admin
        return self._update(self._users, user_id, changes)

    # Projects
    def list_projects(self) -> List[schemas.Project]:
        return _newest_first(self._all(self._projects))

    def get_project(self, project_id: int) -> Optional[schemas.Project]:
        return self._get(self._projects, project_id)

    def create_project(self, project: schemas.ProjectCreate) -> schemas.Project:
        return self._insert(self._projects, schemas.Project, {**project.model_dump(), "created_at": self.now()})

    def update_project(self, project_id: int, changes: Dict[str, Any]) -> Optional[schemas.Project]:
        return self._update(self._projects, project_id, clean_changes(changes))

    def delete_project(self, project_id: int) -> bool:
        return self._delete(self._projects, project_id)

    # Blog posts
    def list_blog_posts(self) -> List[schemas.BlogPost]:
        return _newest_first(self._all(self._blog_posts))

    def get_blog_post(self, post_id: int) -> Optional[schemas.BlogPost]:
        return self._get(self._blog_posts, post_id)

    def create_blog_post(self, post: schemas.BlogPostCreate) -> schemas.BlogPost:
        now = self.now()
        return self._insert(
            self._blog_posts,
            schemas.BlogPost,
            {**post.model_dump(), "created_at": now, "updated_at": now},
        )

    def update_blog_post(self, post_id: int, changes: Dict[str, Any]) -> Optional[schemas.BlogPost]:
        return self._update(self._blog_posts, post_id, {**clean_changes(changes), "updated_at": self.now()})

    def delete_blog_post(self, post_id: int) -> bool:
        return self._delete(self._blog_posts, post_id)

    # YouTube videos
    def list_youtube_videos(self) -> List[schemas.YoutubeVideo]:
        return _newest_first(self._all(self._videos))

    def get_youtube_video(self, video_id: int) -> Optional[schemas.YoutubeVideo]:
        return self._get(self._videos, video_id)

    def create_youtube_video(self, video: schemas.YoutubeVideoCreate) -> schemas.YoutubeVideo:
        return self._insert(self._videos, schemas.YoutubeVideo, {**video.model_dump(), "created_at": self.now()})

    def update_youtube_video(self, video_id: int, changes: Dict[str, Any]) -> Optional[schemas.YoutubeVideo]:
        return self._update(self._videos, video_id, clean_changes(changes))

    def delete_youtube_video(self, video_id: int) -> bool:
        return self._delete(self._videos, video_id)

    # Skills
    def list_skills(self, category: Optional[str] = None) -> List[schemas.Skill]:
        skills = sorted(self._all(self._skills), key=lambda skill: skill.id)
        if category is not None:
            skills = [skill for skill in skills if skill.category == category]
        return skills

    def get_skill(self, skill_id: int) -> Optional[schemas.Skill]:
        return self._get(self._skills, skill_id)

    def create_skill(self, skill: schemas.SkillCreate) -> schemas.Skill:
        return self._insert(self._skills, schemas.Skill, skill.model_dump())

    def update_skill(self, skill_id: int, changes: Dict[str, Any]) -> Optional[schemas.Skill]:
        return self._update(self._skills, skill_id, clean_changes(changes))

    def delete_skill(self, skill_id: int) -> bool:
        return self._delete(self._skills, skill_id)

    # Contact messages
    def list_contacts(self) -> List[schemas.Contact]:
        return _newest_first(self._all(self._contacts))

    def get_contact(self, contact_id: int) -> Optional[schemas.Contact]:
        return self._get(self._contacts, contact_id)

    def create_contact(self, contact: schemas.ContactCreate) -> schemas.Contact:
        return self._insert(
            self._contacts,
            schemas.Contact,
            {**contact.model_dump(), "created_at": self.now(), "is_read": False},
        )

    def mark_contact_read(self, contact_id: int) -> bool:
        return self._update(self._contacts, contact_id, {"is_read": True}) is not None

    def delete_contact(self, contact_id: int) -> bool:
        return self._delete(self._contacts, contact_id)

    # Aggregates
    def get_dashboard_stats(self) -> schemas.DashboardStats:
        with self._lock:
            return schemas.DashboardStats(
                project_count=len(self._projects.rows),
                blog_post_count=len(self._blog_posts.rows),
                video_count=len(self._videos.rows),
                unread_contact_count=sum(1 for c in self._contacts.rows.values() if not c.is_read),
            )

"""
SQLAlchemy repository.

Integer auto-increment primary keys are the public ids, so no id translation
happens here. Each public method runs in its own session and commits before
returning; storage errors are logged and re-raised as ``PersistenceError``.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio.db import database, models, schemas
from portfolio.db.repositories.base import Clock, ContentRepository, clean_changes
from portfolio.errors import DuplicateUserError, PersistenceError

logger = logging.getLogger(__name__)


class SqlContentRepository(ContentRepository):
    backend_name = "sql"

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        engine: Optional[Engine] = None,
        clock: Optional[Clock] = None,
        create_schema: Optional[bool] = None,
    ) -> None:
        super().__init__(clock)
        if engine is None:
            if not url:
                raise ValueError("SqlContentRepository requires a database URL or an engine")
            engine = database.create_db_engine(url)
        self._engine = engine
        self._session_factory = database.create_session_factory(engine)
        # Non-SQLite databases are migrated with Alembic
        if create_schema is None:
            create_schema = database.is_sqlite(engine)
        if create_schema:
            models.Base.metadata.create_all(bind=engine)

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("sql_storage_error: %s", exc.__class__.__name__)
            raise PersistenceError("SQL storage operation failed") from exc
        finally:
            db.close()

    # Generic helpers
    def _get(self, model, schema, item_id: int):
        with self._session() as db:
            row = db.get(model, item_id)
            return schema.model_validate(row) if row is not None else None

    def _insert(self, model, schema, data: Dict[str, Any]):
        with self._session() as db:
            row = model(**data)
            db.add(row)
            db.flush()
            db.refresh(row)
            return schema.model_validate(row)

    def _update(self, model, schema, item_id: int, changes: Dict[str, Any]):
        with self._session() as db:
            row = db.get(model, item_id)
            if row is None:
                return None
            for key, value in changes.items():
                setattr(row, key, value)
            db.flush()
            db.refresh(row)
            return schema.model_validate(row)

    def _delete(self, model, item_id: int) -> bool:
        with self._session() as db:
            row = db.get(model, item_id)
            if row is None:
                return False
            db.delete(row)
            return True

    def _list_newest_first(self, model, schema) -> List[Any]:
        with self._session() as db:
            rows = db.query(model).order_by(model.created_at.desc(), model.id.desc()).all()
            return [schema.model_validate(row) for row in rows]

    # Users
    def get_user(self, user_id: int) -> Optional[schemas.User]:
        return self._get(models.User, schemas.User, user_id)

    def get_user_by_username(self, username: str) -> Optional[schemas.User]:
        with self._session() as db:
            row = db.query(models.User).filter(models.User.username == username).first()
            return schemas.User.model_validate(row) if row is not None else None

    def create_user(self, user: schemas.UserCreate) -> schemas.User:
        if self.get_user_by_username(user.username) is not None:
            raise DuplicateUserError(user.username)
        try:
            return self._insert(models.User, schemas.User, user.model_dump())
        except PersistenceError as exc:
            # Lost a race with a concurrent insert of the same username
            if isinstance(exc.__cause__, IntegrityError):
                raise DuplicateUserError(user.username) from exc
            raise

    def update_user_password(
        self, user_id: int, password_hash: str, *, is_admin: Optional[bool] = None
    ) -> Optional[schemas.User]:
        changes: Dict[str, Any] = {"password": password_hash}
        if is_admin is not None:
            changes["is_admin"] = is_admin
        return self._update(models.User, schemas.User, user_id, changes)

    # Projects
    def list_projects(self) -> List[schemas.Project]:
        return self._list_newest_first(models.Project, schemas.Project)

    def get_project(self, project_id: int) -> Optional[schemas.Project]:
        return self._get(models.Project, schemas.Project, project_id)

    def create_project(self, project: schemas.ProjectCreate) -> schemas.Project:
        return self._insert(
            models.Project, schemas.Project, {**project.model_dump(), "created_at": self.now()}
        )

    def update_project(self, project_id: int, changes: Dict[str, Any]) -> Optional[schemas.Project]:
        return self._update(models.Project, schemas.Project, project_id, clean_changes(changes))

    def delete_project(self, project_id: int) -> bool:
        return self._delete(models.Project, project_id)

    # Blog posts
    def list_blog_posts(self) -> List[schemas.BlogPost]:
        return self._list_newest_first(models.BlogPost, schemas.BlogPost)

    def get_blog_post(self, post_id: int) -> Optional[schemas.BlogPost]:
        return self._get(models.BlogPost, schemas.BlogPost, post_id)

    def create_blog_post(self, post: schemas.BlogPostCreate) -> schemas.BlogPost:
        now = self.now()
        return self._insert(
            models.BlogPost,
            schemas.BlogPost,
            {**post.model_dump(), "created_at": now, "updated_at": now},
        )

    def update_blog_post(self, post_id: int, changes: Dict[str, Any]) -> Optional[schemas.BlogPost]:
        return self._update(
            models.BlogPost,
            schemas.BlogPost,
            post_id,
            {**clean_changes(changes), "updated_at": self.now()},
        )

    def delete_blog_post(self, post_id: int) -> bool:
        return self._delete(models.BlogPost, post_id)

    # YouTube videos
    def list_youtube_videos(self) -> List[schemas.YoutubeVideo]:
        return self._list_newest_first(models.YoutubeVideo, schemas.YoutubeVideo)

    def get_youtube_video(self, video_id: int) -> Optional[schemas.YoutubeVideo]:
        return self._get(models.YoutubeVideo, schemas.YoutubeVideo, video_id)

    def create_youtube_video(self, video: schemas.YoutubeVideoCreate) -> schemas.YoutubeVideo:
        return self._insert(
            models.YoutubeVideo, schemas.YoutubeVideo, {**video.model_dump(), "created_at": self.now()}
        )

    def update_youtube_video(self, video_id: int, changes: Dict[str, Any]) -> Optional[schemas.YoutubeVideo]:
        return self._update(models.YoutubeVideo, schemas.YoutubeVideo, video_id, clean_changes(changes))

    def delete_youtube_video(self, video_id: int) -> bool:
        return self._delete(models.YoutubeVideo, video_id)

    # Skills
    def list_skills(self, category: Optional[str] = None) -> List[schemas.Skill]:
        with self._session() as db:
            q = db.query(models.Skill)
            if category is not None:
                q = q.filter(models.Skill.category == category)
            return [schemas.Skill.model_validate(row) for row in q.order_by(models.Skill.id).all()]

    def get_skill(self, skill_id: int) -> Optional[schemas.Skill]:
        return self._get(models.Skill, schemas.Skill, skill_id)

    def create_skill(self, skill: schemas.SkillCreate) -> schemas.Skill:
        return self._insert(models.Skill, schemas.Skill, skill.model_dump())

    def update_skill(self, skill_id: int, changes: Dict[str, Any]) -> Optional[schemas.Skill]:
        return self._update(models.Skill, schemas.Skill, skill_id, clean_changes(changes))

    def delete_skill(self, skill_id: int) -> bool:
        return self._delete(models.Skill, skill_id)

    # Contact messages
    def list_contacts(self) -> List[schemas.Contact]:
        return self._list_newest_first(models.Contact, schemas.Contact)

    def get_contact(self, contact_id: int) -> Optional[schemas.Contact]:
        return self._get(models.Contact, schemas.Contact, contact_id)

    def create_contact(self, contact: schemas.ContactCreate) -> schemas.Contact:
        return self._insert(
            models.Contact,
            schemas.Contact,
            {**contact.model_dump(), "created_at": self.now(), "is_read": False},
        )

    def mark_contact_read(self, contact_id: int) -> bool:
        return self._update(models.Contact, schemas.Contact, contact_id, {"is_read": True}) is not None

    def delete_contact(self, contact_id: int) -> bool:
        return self._delete(models.Contact, contact_id)

    # Aggregates
    def get_dashboard_stats(self) -> schemas.DashboardStats:
        with self._session() as db:
            return schemas.DashboardStats(
                project_count=db.query(func.count(models.Project.id)).scalar() or 0,
                blog_post_count=db.query(func.count(models.BlogPost.id)).scalar() or 0,
                video_count=db.query(func.count(models.YoutubeVideo.id)).scalar() or 0,
                unread_contact_count=(
                    db.query(func.count(models.Contact.id))
                    .filter(models.Contact.is_read.is_(False))
                    .scalar()
                    or 0
                ),
            )

    # Lifecycle
    def ping(self) -> bool:
        try:
            return database.ping(self._engine)
        except SQLAlchemyError:
            logger.warning("sql_ping_failed", exc_info=True)
            return False

    def close(self) -> None:
        self._engine.dispose()

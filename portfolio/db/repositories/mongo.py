"""
MongoDB repository.

Documents keep their native ``_id`` (ObjectId) and carry an application id in
``seq``, handed out at insert time from a per-collection counter in the
``counters`` collection. ``seq`` has a unique index, so every lookup by public
id is a single indexed query. Field names are stored camelCase, matching the
documents written by the previous deployment.

Documents written before ``seq`` existed are adopted by
``import_legacy_documents``: they keep their old derived id where it is
collision-free and get a fresh counter value otherwise.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from pydantic.alias_generators import to_camel
from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from portfolio.db import schemas
from portfolio.db.identifiers import find_legacy_id_collisions, legacy_numeric_id
from portfolio.db.repositories.base import Clock, ContentRepository, clean_changes
from portfolio.errors import DuplicateUserError, PersistenceError

logger = logging.getLogger(__name__)

# Collection names follow the previous deployment so its data is picked up as is
USERS = "users"
PROJECTS = "projects"
BLOG_POSTS = "blogposts"
YOUTUBE_VIDEOS = "youtubevideos"
SKILLS = "skills"
CONTACTS = "contacts"
COUNTERS = "counters"

CONTENT_COLLECTIONS = (USERS, PROJECTS, BLOG_POSTS, YOUTUBE_VIDEOS, SKILLS, CONTACTS)
TIMESTAMPED_COLLECTIONS = (PROJECTS, BLOG_POSTS, YOUTUBE_VIDEOS, CONTACTS)

DEFAULT_DB_NAME = "portfolio"

_INTERNAL_KEYS = ("_id", "seq", "legacyId")
_ADOPTED = {"seq": {"$exists": True}}


def _to_document_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {to_camel(key): value for key, value in data.items()}


def _as_utc(value):
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _millisecond_precision(value: datetime) -> datetime:
    # BSON dates carry milliseconds; trim so returned objects equal stored ones
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


class MongoContentRepository(ContentRepository):
    backend_name = "mongo"

    def __init__(
        self,
        uri: Optional[str] = None,
        *,
        db_name: Optional[str] = None,
        client: Optional[MongoClient] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        super().__init__(clock)
        if client is None:
            if not uri:
                raise ValueError("MongoContentRepository requires a MongoDB URI or a client")
            client = MongoClient(uri, tz_aware=True, serverSelectionTimeoutMS=5000)
        self._client = client
        if db_name:
            self._db: Database = client[db_name]
        else:
            # Database named in the URI path, if any
            self._db = client.get_default_database(default=DEFAULT_DB_NAME)

    def now(self) -> datetime:
        return _millisecond_precision(super().now())

    @contextmanager
    def _guard(self) -> Iterator[None]:
        try:
            yield
        except DuplicateKeyError:
            raise
        except PyMongoError as exc:
            logger.exception("mongo_storage_error: %s", exc.__class__.__name__)
            raise PersistenceError("Document storage operation failed") from exc

    # Storage preparation
    def prepare_storage(self) -> Dict[str, Dict[str, Any]]:
        """Create indexes and adopt legacy documents. Safe to run repeatedly."""
        with self._guard():
            for name in CONTENT_COLLECTIONS:
                self._db[name].create_index([("seq", ASCENDING)], unique=True, sparse=True)
            self._db[USERS].create_index([("username", ASCENDING)], unique=True)
            self._db[SKILLS].create_index([("category", ASCENDING)])
            self._db[CONTACTS].create_index([("isRead", ASCENDING)])
            for name in TIMESTAMPED_COLLECTIONS:
                self._db[name].create_index([("createdAt", DESCENDING)])
        return {name: self.import_legacy_documents(name) for name in CONTENT_COLLECTIONS}

    def import_legacy_documents(self, collection: str) -> Dict[str, Any]:
        """Assign ``seq`` to documents that lack one.

        A document keeps its legacy derived id when no other legacy document
        maps to the same value and no current document already uses it.
        Everything else gets the next counter value, which is first raised
        above every id in use.
        """
        coll = self._db[collection]
        with self._guard():
            pending = list(coll.find({"seq": {"$exists": False}}, {"_id": 1}).sort("_id", ASCENDING))
            if not pending:
                return {"preserved": 0, "assigned": 0, "collisions": {}}
            used = {doc["seq"] for doc in coll.find(_ADOPTED, {"seq": 1})}

            collisions = find_legacy_id_collisions(str(doc["_id"]) for doc in pending)
            preserved = 0
            fresh = []
            for doc in pending:
                try:
                    legacy = legacy_numeric_id(doc["_id"])
                except ValueError:
                    fresh.append(doc)
                    continue
                if legacy <= 0 or legacy in collisions or legacy in used:
                    fresh.append(doc)
                    continue
                coll.update_one({"_id": doc["_id"]}, {"$set": {"seq": legacy, "legacyId": legacy}})
                used.add(legacy)
                preserved += 1

            if used:
                self._db[COUNTERS].update_one(
                    {"_id": collection}, {"$max": {"value": max(used)}}, upsert=True
                )
            for doc in fresh:
                coll.update_one({"_id": doc["_id"]}, {"$set": {"seq": self._next_seq(collection)}})

        if collisions:
            logger.warning(
                "legacy_id_collisions: collection=%s groups=%d", collection, len(collisions)
            )
        logger.info(
            "legacy_import: collection=%s preserved=%d assigned=%d",
            collection,
            preserved,
            len(fresh),
        )
        return {"preserved": preserved, "assigned": len(fresh), "collisions": collisions}

    def _next_seq(self, collection: str) -> int:
        counter = self._db[COUNTERS].find_one_and_update(
            {"_id": collection},
            {"$inc": {"value": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(counter["value"])

    # Generic helpers
    def _from_doc(self, schema, doc: Optional[Dict[str, Any]]):
        if doc is None:
            return None
        data = {key: _as_utc(value) for key, value in doc.items() if key not in _INTERNAL_KEYS}
        data["id"] = doc["seq"]
        return schema.model_validate(data)

    def _get(self, collection: str, schema, item_id: int):
        with self._guard():
            return self._from_doc(schema, self._db[collection].find_one({"seq": item_id}))

    def _insert(self, collection: str, schema, data: Dict[str, Any]):
        with self._guard():
            doc = _to_document_fields(data)
            doc["seq"] = self._next_seq(collection)
            self._db[collection].insert_one(doc)
            return self._from_doc(schema, doc)

    def _update(self, collection: str, schema, item_id: int, changes: Dict[str, Any]):
        with self._guard():
            coll = self._db[collection]
            if not changes:
                return self._from_doc(schema, coll.find_one({"seq": item_id}))
            doc = coll.find_one_and_update(
                {"seq": item_id},
                {"$set": _to_document_fields(changes)},
                return_document=ReturnDocument.AFTER,
            )
            return self._from_doc(schema, doc)

    def _delete(self, collection: str, item_id: int) -> bool:
        with self._guard():
            return self._db[collection].delete_one({"seq": item_id}).deleted_count > 0

    def _list(self, collection: str, schema, query=None, sort=None) -> List[Any]:
        with self._guard():
            cursor = self._db[collection].find(query or _ADOPTED)
            cursor = cursor.sort(sort or [("createdAt", DESCENDING), ("seq", DESCENDING)])
            return [self._from_doc(schema, doc) for doc in cursor]

    # Users
    def get_user(self, user_id: int) -> Optional[schemas.User]:
        return self._get(USERS, schemas.User, user_id)

    def get_user_by_username(self, username: str) -> Optional[schemas.User]:
        with self._guard():
            return self._from_doc(
                schemas.User, self._db[USERS].find_one({**_ADOPTED, "username": username})
            )

    def create_user(self, user: schemas.UserCreate) -> schemas.User:
        if self.get_user_by_username(user.username) is not None:
            raise DuplicateUserError(user.username)
        try:
            return self._insert(USERS, schemas.User, user.model_dump())
        except DuplicateKeyError as exc:
            raise DuplicateUserError(user.username) from exc

    def update_user_password(
        self, user_id: int, password_hash: str, *, is_admin: Optional[bool] = None
    ) -> Optional[schemas.User]:
        changes: Dict[str, Any] = {"password": password_hash}
        if is_admin is not None:
            changes["is_admin"] = is_admin
        return self._update(USERS, schemas.User, user_id, changes)

    # Projects
    def list_projects(self) -> List[schemas.Project]:
        return self._list(PROJECTS, schemas.Project)

    def get_project(self, project_id: int) -> Optional[schemas.Project]:
        return self._get(PROJECTS, schemas.Project, project_id)

    def create_project(self, project: schemas.ProjectCreate) -> schemas.Project:
        return self._insert(PROJECTS, schemas.Project, {**project.model_dump(), "created_at": self.now()})

    def update_project(self, project_id: int, changes: Dict[str, Any]) -> Optional[schemas.Project]:
        return self._update(PROJECTS, schemas.Project, project_id, clean_changes(changes))

    def delete_project(self, project_id: int) -> bool:
        return self._delete(PROJECTS, project_id)

    # Blog posts
    def list_blog_posts(self) -> List[schemas.BlogPost]:
        return self._list(BLOG_POSTS, schemas.BlogPost)

    def get_blog_post(self, post_id: int) -> Optional[schemas.BlogPost]:
        return self._get(BLOG_POSTS, schemas.BlogPost, post_id)

    def create_blog_post(self, post: schemas.BlogPostCreate) -> schemas.BlogPost:
        now = self.now()
        return self._insert(
            BLOG_POSTS, schemas.BlogPost, {**post.model_dump(), "created_at": now, "updated_at": now}
        )

    def update_blog_post(self, post_id: int, changes: Dict[str, Any]) -> Optional[schemas.BlogPost]:
        return self._update(
            BLOG_POSTS, schemas.BlogPost, post_id, {**clean_changes(changes), "updated_at": self.now()}
        )

    def delete_blog_post(self, post_id: int) -> bool:
        return self._delete(BLOG_POSTS, post_id)

    # YouTube videos
    def list_youtube_videos(self) -> List[schemas.YoutubeVideo]:
        return self._list(YOUTUBE_VIDEOS, schemas.YoutubeVideo)

    def get_youtube_video(self, video_id: int) -> Optional[schemas.YoutubeVideo]:
        return self._get(YOUTUBE_VIDEOS, schemas.YoutubeVideo, video_id)

    def create_youtube_video(self, video: schemas.YoutubeVideoCreate) -> schemas.YoutubeVideo:
        return self._insert(
            YOUTUBE_VIDEOS, schemas.YoutubeVideo, {**video.model_dump(), "created_at": self.now()}
        )

    def update_youtube_video(self, video_id: int, changes: Dict[str, Any]) -> Optional[schemas.YoutubeVideo]:
        return self._update(YOUTUBE_VIDEOS, schemas.YoutubeVideo, video_id, clean_changes(changes))

    def delete_youtube_video(self, video_id: int) -> bool:
        return self._delete(YOUTUBE_VIDEOS, video_id)

    # Skills
    def list_skills(self, category: Optional[str] = None) -> List[schemas.Skill]:
        query: Dict[str, Any] = dict(_ADOPTED)
        if category is not None:
            query["category"] = category
        return self._list(SKILLS, schemas.Skill, query=query, sort=[("seq", ASCENDING)])

    def get_skill(self, skill_id: int) -> Optional[schemas.Skill]:
        return self._get(SKILLS, schemas.Skill, skill_id)

    def create_skill(self, skill: schemas.SkillCreate) -> schemas.Skill:
        return self._insert(SKILLS, schemas.Skill, skill.model_dump())

    def update_skill(self, skill_id: int, changes: Dict[str, Any]) -> Optional[schemas.Skill]:
        return self._update(SKILLS, schemas.Skill, skill_id, clean_changes(changes))

    def delete_skill(self, skill_id: int) -> bool:
        return self._delete(SKILLS, skill_id)

    # Contact messages
    def list_contacts(self) -> List[schemas.Contact]:
        return self._list(CONTACTS, schemas.Contact)

    def get_contact(self, contact_id: int) -> Optional[schemas.Contact]:
        return self._get(CONTACTS, schemas.Contact, contact_id)

    def create_contact(self, contact: schemas.ContactCreate) -> schemas.Contact:
        return self._insert(
            CONTACTS,
            schemas.Contact,
            {**contact.model_dump(), "created_at": self.now(), "is_read": False},
        )

    def mark_contact_read(self, contact_id: int) -> bool:
        with self._guard():
            result = self._db[CONTACTS].update_one({"seq": contact_id}, {"$set": {"isRead": True}})
            return result.matched_count > 0

    def delete_contact(self, contact_id: int) -> bool:
        return self._delete(CONTACTS, contact_id)

    # Aggregates
    def get_dashboard_stats(self) -> schemas.DashboardStats:
        with self._guard():
            return schemas.DashboardStats(
                project_count=self._db[PROJECTS].count_documents(_ADOPTED),
                blog_post_count=self._db[BLOG_POSTS].count_documents(_ADOPTED),
                video_count=self._db[YOUTUBE_VIDEOS].count_documents(_ADOPTED),
                # Old documents may lack the flag entirely; treat them as unread
                unread_contact_count=self._db[CONTACTS].count_documents({**_ADOPTED, "isRead": {"$ne": True}}),
            )

    # Lifecycle
    def ping(self) -> bool:
        try:
            self._client.admin.command("ping")
            return True
        except PyMongoError:
            logger.warning("mongo_ping_failed", exc_info=True)
            return False

    def close(self) -> None:
        self._client.close()

"""
Storage backends behind one ``ContentRepository`` contract.

``build_repository`` picks the backend named by ``STORAGE_BACKEND``. Backend
modules are imported lazily so a deployment only needs the driver it uses.
"""
from __future__ import annotations

import logging
from typing import Optional

from portfolio.db.repositories.base import Clock, ContentRepository
from portfolio.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


def build_repository(settings: Optional[Settings] = None, *, clock: Optional[Clock] = None) -> ContentRepository:
    settings = settings or get_settings()
    backend = settings.storage_backend

    if backend == "memory":
        from portfolio.db.repositories.memory import MemoryContentRepository

        repo: ContentRepository = MemoryContentRepository(clock=clock)
    elif backend == "sql":
        from portfolio.db.repositories.sql import SqlContentRepository

        repo = SqlContentRepository(settings.database_url, clock=clock)
    elif backend == "mongo":
        from portfolio.db.repositories.mongo import MongoContentRepository

        repo = MongoContentRepository(settings.mongodb_uri, db_name=settings.mongodb_db, clock=clock)
    else:
        raise ValueError(f"Unsupported storage backend '{backend}'")

    logger.info("Storage backend: %s", repo.backend_name)
    return repo


__all__ = ["ContentRepository", "build_repository"]

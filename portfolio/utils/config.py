"""Runtime configuration sourced from the environment.

Settings are read once and cached; tests call ``refresh_settings_cache`` after
changing environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, Tuple, cast

StorageBackend = Literal["memory", "sql", "mongo"]

STORAGE_BACKENDS: Tuple[str, ...] = ("memory", "sql", "mongo")

DEFAULT_SESSION_TTL_SECONDS = 24 * 60 * 60
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


def _normalize_bool(value: str | None, default: bool) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _split_csv(raw: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _get_database_url() -> str:
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    # Component form, all-or-nothing
    db_user = os.getenv("POSTGRES_USER")
    db_password = os.getenv("POSTGRES_PASSWORD")
    db_host = os.getenv("POSTGRES_HOST")
    db_port = os.getenv("POSTGRES_PORT", "5432")
    db_name = os.getenv("POSTGRES_DB")
    if db_user and db_password and db_host and db_name:
        return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"

    return "sqlite+pysqlite:///./portfolio.db"


@dataclass(frozen=True)
class Settings:
    env: str
    version: str
    log_level: str
    storage_backend: StorageBackend
    database_url: str
    mongodb_uri: str
    mongodb_db: str | None
    session_ttl_seconds: int
    session_cookie_name: str
    session_cookie_secure: bool
    admin_username: str
    admin_password: str
    seed_default_skills: bool
    cors_origins: Tuple[str, ...]

    @property
    def is_production(self) -> bool:
        return self.env == "production"


def load_settings() -> Settings:
    """Build a fresh ``Settings`` from the current environment."""
    env = os.getenv("ENV", "dev").strip().lower()

    backend = os.getenv("STORAGE_BACKEND", "memory").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"Unsupported STORAGE_BACKEND '{backend}'. Expected one of: {', '.join(STORAGE_BACKENDS)}"
        )

    ttl = _env_int("SESSION_TTL_SECONDS", DEFAULT_SESSION_TTL_SECONDS)
    if ttl <= 0:
        ttl = DEFAULT_SESSION_TTL_SECONDS

    return Settings(
        env=env,
        version=os.getenv("VERSION", "unknown"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        storage_backend=cast(StorageBackend, backend),
        database_url=_get_database_url(),
        mongodb_uri=os.getenv("MONGODB_URI", "mongodb://localhost:27017/portfolio"),
        mongodb_db=os.getenv("MONGODB_DB") or None,
        session_ttl_seconds=ttl,
        session_cookie_name=os.getenv("SESSION_COOKIE_NAME", "portfolio_session"),
        session_cookie_secure=_normalize_bool(os.getenv("SESSION_COOKIE_SECURE"), default=env == "production"),
        admin_username=os.getenv("ADMIN_USERNAME", "admin"),
        admin_password=os.getenv("ADMIN_PASSWORD", "admin123"),
        seed_default_skills=_normalize_bool(os.getenv("SEED_DEFAULT_SKILLS"), default=True),
        cors_origins=_split_csv(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
    )


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings for this process."""
    return load_settings()


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()

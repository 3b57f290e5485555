"""
Database engine and session factory construction.

Engines are built per repository instance from configuration rather than at
import time; SQLite URLs get the connect args the test suite and local
development rely on.
"""
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
        # In-memory SQLite with StaticPool so the schema persists across connections
        kwargs["poolclass"] = StaticPool
    return kwargs


def create_db_engine(url: str) -> Engine:
    return create_engine(url, **_engine_kwargs(url))


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)


def is_sqlite(engine: Engine) -> bool:
    return engine.url.get_backend_name() == "sqlite"


def ping(engine: Engine) -> bool:
    """Return True when a trivial query succeeds."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return True

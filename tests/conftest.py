from datetime import datetime, timedelta, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient

from portfolio.api.main import create_app
from portfolio.db.repositories.memory import MemoryContentRepository
from portfolio.db.repositories.mongo import MongoContentRepository
from portfolio.db.repositories.sql import SqlContentRepository
from portfolio.utils.config import Settings, refresh_settings_cache

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


class AdvancingClock:
    """Returns a strictly increasing UTC time, one second per call."""

    def __init__(self, start=None):
        self.current = start or datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.current = self.current + timedelta(seconds=1)
        return self.current


def make_settings(**overrides) -> Settings:
    values = dict(
        env="test",
        version="test",
        log_level="INFO",
        storage_backend="memory",
        database_url="sqlite+pysqlite:///:memory:",
        mongodb_uri="mongodb://localhost:27017/portfolio",
        mongodb_db=None,
        session_ttl_seconds=3600,
        session_cookie_name="portfolio_session",
        session_cookie_secure=False,
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        seed_default_skills=False,
        cors_origins=("http://localhost:3000",),
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def _fresh_settings_cache():
    refresh_settings_cache()
    yield
    refresh_settings_cache()


@pytest.fixture
def clock():
    return AdvancingClock()


@pytest.fixture
def settings():
    return make_settings()


def _build_repo(kind, clock):
    if kind == "memory":
        return MemoryContentRepository(clock=clock)
    if kind == "sql":
        return SqlContentRepository("sqlite+pysqlite:///:memory:", clock=clock)
    repo = MongoContentRepository(client=mongomock.MongoClient(), db_name="portfolio_test", clock=clock)
    repo.prepare_storage()
    return repo


@pytest.fixture(params=["memory", "sql", "mongo"])
def repo(request, clock):
    repository = _build_repo(request.param, clock)
    yield repository
    repository.close()


@pytest.fixture
def memory_repo(clock):
    return MemoryContentRepository(clock=clock)


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def app(settings, memory_repo):
    return create_app(settings, repository=memory_repo)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def _login(client, username=ADMIN_USERNAME, password=ADMIN_PASSWORD):
    return client.post("/api/auth/login", json={"username": username, "password": password})


@pytest.fixture
def login():
    return _login


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def admin_client(client):
    resp = _login(client)
    assert resp.status_code == 200, resp.text
    return client

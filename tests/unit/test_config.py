import pytest

from portfolio.utils import config


def _clear(monkeypatch):
    for name in (
        "ENV",
        "STORAGE_BACKEND",
        "DATABASE_URL",
        "POSTGRES_USER",
        "POSTGRES_PASSWORD",
        "POSTGRES_HOST",
        "POSTGRES_PORT",
        "POSTGRES_DB",
        "SESSION_TTL_SECONDS",
        "SESSION_COOKIE_SECURE",
        "SEED_DEFAULT_SKILLS",
        "CORS_ORIGINS",
        "MONGODB_DB",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    _clear(monkeypatch)
    settings = config.load_settings()
    assert settings.storage_backend == "memory"
    assert settings.database_url == "sqlite+pysqlite:///./portfolio.db"
    assert settings.session_ttl_seconds == 86400
    assert settings.session_cookie_name == "portfolio_session"
    assert settings.session_cookie_secure is False
    assert settings.seed_default_skills is True
    assert settings.mongodb_db is None
    assert settings.is_production is False


def test_unsupported_backend_rejected(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("STORAGE_BACKEND", "redis")
    with pytest.raises(ValueError):
        config.load_settings()


def test_backend_name_is_normalized(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("STORAGE_BACKEND", " Mongo ")
    assert config.load_settings().storage_backend == "mongo"


def test_production_marks_cookie_secure(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("ENV", "production")
    settings = config.load_settings()
    assert settings.is_production is True
    assert settings.session_cookie_secure is True

    monkeypatch.setenv("SESSION_COOKIE_SECURE", "false")
    assert config.load_settings().session_cookie_secure is False


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_bad_ttl_falls_back_to_default(monkeypatch, raw):
    _clear(monkeypatch)
    monkeypatch.setenv("SESSION_TTL_SECONDS", raw)
    assert config.load_settings().session_ttl_seconds == config.DEFAULT_SESSION_TTL_SECONDS


def test_postgres_components_build_url(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("POSTGRES_USER", "u")
    monkeypatch.setenv("POSTGRES_PASSWORD", "p")
    monkeypatch.setenv("POSTGRES_HOST", "db")
    monkeypatch.setenv("POSTGRES_DB", "portfolio")
    assert config.load_settings().database_url == "postgresql://u:p@db:5432/portfolio"

    monkeypatch.setenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")
    assert config.load_settings().database_url == "sqlite+pysqlite:///:memory:"


def test_cors_origins_split(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, ,https://b.example")
    assert config.load_settings().cors_origins == ("https://a.example", "https://b.example")


def test_get_settings_is_cached_until_refresh(monkeypatch):
    _clear(monkeypatch)
    first = config.get_settings()
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    assert config.get_settings() is first
    config.refresh_settings_cache()
    assert config.get_settings().storage_backend == "sql"

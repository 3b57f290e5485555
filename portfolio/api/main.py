"""
FastAPI app assembly: logging, middleware, error rendering and router wiring.

Every error response has the shape ``{"message": "..."}``.
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)

from portfolio.api.auth import router as auth_router
from portfolio.api.blog_posts import router as blog_posts_router
from portfolio.api.contacts import router as contacts_router
from portfolio.api.dashboard import router as dashboard_router
from portfolio.api.health import router as health_router
from portfolio.api.projects import router as projects_router
from portfolio.api.skills import router as skills_router
from portfolio.api.youtube_videos import router as youtube_videos_router
from portfolio.db.repositories import build_repository
from portfolio.db.repositories.base import ContentRepository
from portfolio.errors import PersistenceError
from portfolio.services.bootstrap import seed_defaults
from portfolio.services.sessions import SessionStore
from portfolio.utils.config import Settings, get_settings

GENERIC_ERROR = "Internal server error"


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix
        loc = [str(item) for item in error.get("loc", ())[1:]]
        message = error.get("msg", "invalid value")
        parts.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return "Validation error: " + "; ".join(parts)


def _failure_message(request: Request) -> str:
    route = request.scope.get("route")
    tags = getattr(route, "tags", None) or []
    if request.method == "GET" and tags:
        return f"Failed to fetch {tags[0]}"
    return GENERIC_ERROR


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"message": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        {"message": _format_validation_errors(exc)},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error("persistence_failure: %s %s", request.method, request.url.path)
    return JSONResponse(
        {"message": _failure_message(request)},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error: %s %s", request.method, request.url.path)
    return JSONResponse({"message": GENERIC_ERROR}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    owns_repository = getattr(app.state, "repository", None) is None
    if owns_repository:
        app.state.repository = build_repository(settings)
    repo: ContentRepository = app.state.repository

    report = repo.prepare_storage()
    if report:
        logger.info("storage_prepared: %s", report)
    seed_defaults(repo, settings)
    logger.info(
        "app_startup: env=%s version=%s backend=%s log_level=%s",
        settings.env,
        settings.version,
        repo.backend_name,
        LOG_LEVEL_NAME,
    )
    try:
        yield
    finally:
        if owns_repository:
            repo.close()
            app.state.repository = None


def create_app(
    settings: Optional[Settings] = None,
    *,
    repository: Optional[ContentRepository] = None,
    sessions: Optional[SessionStore] = None,
) -> FastAPI:
    """Build the application. ``repository`` is built at startup when omitted."""
    settings = settings or get_settings()
    docs_enabled = not settings.is_production

    app = FastAPI(
        title="Portfolio Service",
        description="Public portfolio content plus an admin API for managing it.",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    # Avoid implicit trailing-slash redirects for predictable URLs
    app.router.redirect_slashes = False

    app.state.settings = settings
    app.state.repository = repository
    app.state.sessions = sessions or SessionStore(settings.session_ttl_seconds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(auth_router)
    app.include_router(projects_router)
    app.include_router(blog_posts_router)
    app.include_router(youtube_videos_router)
    app.include_router(skills_router)
    app.include_router(contacts_router)
    app.include_router(dashboard_router)
    app.include_router(health_router)
    return app


app = create_app()

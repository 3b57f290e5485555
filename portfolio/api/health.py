"""
Service health and build information.
"""
from fastapi import APIRouter, Depends

from portfolio.api.deps import get_repository, get_settings_dep
from portfolio.db.repositories.base import ContentRepository
from portfolio.utils.config import Settings

SERVICE_NAME = "portfolio-service"

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def get_health(
    repo: ContentRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings_dep),
):
    """Report version and whether the storage backend answers."""
    reachable = repo.ping()
    return {
        "service": SERVICE_NAME,
        "version": settings.version,
        "storageBackend": repo.backend_name,
        "storage": "ok" if reachable else "unavailable",
    }

from fastapi import APIRouter, Depends

from portfolio.api.deps import get_repository, require_admin
from portfolio.db import schemas
from portfolio.db.repositories.base import ContentRepository

router = APIRouter(prefix="/api/dashboard", tags=["dashboard stats"])


@router.get("/stats", response_model=schemas.DashboardStats)
def get_dashboard_stats(
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    return repo.get_dashboard_stats()

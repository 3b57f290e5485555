"""
Projects API endpoints.

Reads are public; writes require an admin session.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio.api.deps import get_repository, parse_id, require_admin
from portfolio.db import schemas
from portfolio.db.repositories.base import ContentRepository

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=List[schemas.Project])
def list_projects(repo: ContentRepository = Depends(get_repository)):
    return repo.list_projects()


@router.get("/{project_id}", response_model=schemas.Project)
def get_project(project_id: str, repo: ContentRepository = Depends(get_repository)):
    project = repo.get_project(parse_id(project_id, "project"))
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.post("", response_model=schemas.Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project: schemas.ProjectCreate,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    return repo.create_project(project)


@router.put("/{project_id}", response_model=schemas.Project)
def update_project(
    project_id: str,
    payload: schemas.ProjectUpdate,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    updated = repo.update_project(parse_id(project_id, "project"), payload.changes())
    if updated is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return updated


@router.delete("/{project_id}")
def delete_project(
    project_id: str,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    if not repo.delete_project(parse_id(project_id, "project")):
        raise HTTPException(status_code=404, detail="Project not found")
    return {"message": "Project deleted successfully"}

"""
Skill endpoints. ``GET /api/skills?category=backend`` filters by exact category.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio.api.deps import get_repository, parse_id, require_admin
from portfolio.db import schemas
from portfolio.db.repositories.base import ContentRepository

router = APIRouter(prefix="/api/skills", tags=["skills"])


@router.get("", response_model=List[schemas.Skill])
def list_skills(category: Optional[str] = None, repo: ContentRepository = Depends(get_repository)):
    return repo.list_skills(category=category or None)


@router.get("/{skill_id}", response_model=schemas.Skill)
def get_skill(skill_id: str, repo: ContentRepository = Depends(get_repository)):
    skill = repo.get_skill(parse_id(skill_id, "skill"))
    if skill is None:
        raise HTTPException(status_code=404, detail="Skill not found")
    return skill


@router.post("", response_model=schemas.Skill, status_code=status.HTTP_201_CREATED)
def create_skill(
    skill: schemas.SkillCreate,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    return repo.create_skill(skill)


@router.put("/{skill_id}", response_model=schemas.Skill)
def update_skill(
    skill_id: str,
    payload: schemas.SkillUpdate,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    updated = repo.update_skill(parse_id(skill_id, "skill"), payload.changes())
    if updated is None:
        raise HTTPException(status_code=404, detail="Skill not found")
    return updated


@router.delete("/{skill_id}")
def delete_skill(
    skill_id: str,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    if not repo.delete_skill(parse_id(skill_id, "skill")):
        raise HTTPException(status_code=404, detail="Skill not found")
    return {"message": "Skill deleted successfully"}

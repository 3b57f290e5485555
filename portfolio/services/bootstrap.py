"""
Startup seeding: the admin account and the default skill set.

Both steps only act on empty state, so running the seeder on every boot is
harmless.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from portfolio.db import schemas
from portfolio.db.repositories.base import ContentRepository
from portfolio.errors import DuplicateUserError
from portfolio.utils.config import Settings, get_settings
from portfolio.utils.passwords import hash_password

logger = logging.getLogger(__name__)

DEFAULT_SKILLS: Dict[str, Tuple[Tuple[str, int], ...]] = {
    "frontend": (("React", 90), ("JavaScript", 92), ("HTML/CSS", 95), ("Tailwind", 85)),
    "backend": (("Node.js", 85), ("Express", 82), ("MongoDB", 78), ("REST API", 88)),
    "additional": (("Git", 88), ("React Native", 75), ("TypeScript", 80), ("Responsive Design", 90)),
}


def ensure_admin_user(repo: ContentRepository, username: str, password: str) -> bool:
    """Create the admin account when no user with ``username`` exists."""
    if repo.get_user_by_username(username) is not None:
        return False
    try:
        repo.create_user(
            schemas.UserCreate(username=username, password=hash_password(password), is_admin=True)
        )
    except DuplicateUserError:
        # Another process seeded it first
        return False
    logger.info("bootstrap_admin_created: username=%s", username)
    return True


def seed_default_skills(repo: ContentRepository) -> int:
    if repo.list_skills():
        return 0
    created = 0
    for category, skills in DEFAULT_SKILLS.items():
        for name, percentage in skills:
            repo.create_skill(schemas.SkillCreate(name=name, percentage=percentage, category=category))
            created += 1
    logger.info("bootstrap_skills_seeded: count=%d", created)
    return created


def seed_defaults(repo: ContentRepository, settings: Optional[Settings] = None) -> Dict[str, int]:
    settings = settings or get_settings()
    report = {
        "admin_created": int(ensure_admin_user(repo, settings.admin_username, settings.admin_password)),
        "skills_created": 0,
    }
    if settings.seed_default_skills:
        report["skills_created"] = seed_default_skills(repo)
    return report

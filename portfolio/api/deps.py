"""
API dependency helpers.

The repository, session store and settings are created once at startup and
kept on ``app.state``; routes reach them through these dependencies.
"""
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from portfolio.db import schemas
from portfolio.db.repositories.base import ContentRepository
from portfolio.services.sessions import SessionStore
from portfolio.utils.config import Settings

# Largest id every backend can store (signed 64-bit)
MAX_ID = 2**63 - 1


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_repository(request: Request) -> ContentRepository:
    return request.app.state.repository


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_session_token(request: Request, settings: Settings = Depends(get_settings_dep)) -> Optional[str]:
    return request.cookies.get(settings.session_cookie_name)


# Contract:
# Returns the integer user id bound to the request's session cookie.
# Raises 401 when there is no cookie or the session is unknown or expired.
def get_session_user_id(
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
) -> int:
    user_id = sessions.user_id_for(token)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user_id


def require_admin(
    user_id: int = Depends(get_session_user_id),
    repo: ContentRepository = Depends(get_repository),
) -> schemas.User:
    user = repo.get_user(user_id)
    if user is None or not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return user


def parse_id(raw: str, label: str) -> int:
    """Parse a path id, raising 400 ``Invalid <label> ID`` when malformed."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid {label} ID")
    if value <= 0 or value > MAX_ID:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid {label} ID")
    return value

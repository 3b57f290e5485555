"""
Session endpoints: login, logout and the current-user lookup.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.responses import Response

from portfolio.api.deps import (
    get_repository,
    get_session_store,
    get_session_token,
    get_settings_dep,
)
from portfolio.db import schemas
from portfolio.db.repositories.base import ContentRepository
from portfolio.services.sessions import SessionStore
from portfolio.utils.config import Settings
from portfolio.utils.passwords import hash_password, needs_rehash, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["session"])


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


@router.post("/login", response_model=schemas.UserPublic)
def login(
    credentials: schemas.LoginRequest,
    response: Response,
    repo: ContentRepository = Depends(get_repository),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings_dep),
):
    if not credentials.username or not credentials.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username and password required")

    user = repo.get_user_by_username(credentials.username)
    if user is None or not verify_password(credentials.password, user.password):
        logger.info("login_failed: username=%s", credentials.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if needs_rehash(user.password):
        repo.update_user_password(user.id, hash_password(credentials.password))

    session = sessions.create(user.id)
    _set_session_cookie(response, session.token, settings)
    logger.info("login_succeeded: user_id=%s", user.id)
    return schemas.UserPublic.model_validate(user, from_attributes=True)


@router.post("/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings_dep),
):
    if sessions.destroy(token):
        logger.info("logout: session destroyed")
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=schemas.UserPublic)
def me(
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
    repo: ContentRepository = Depends(get_repository),
):
    user_id = sessions.user_id_for(token)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    user = repo.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return schemas.UserPublic.model_validate(user, from_attributes=True)

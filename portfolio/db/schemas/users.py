from typing import Optional

from pydantic import Field

from .base import CamelModel


class UserCreate(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)  # already hashed when it reaches a repository
    is_admin: bool = False


class User(CamelModel):
    id: int
    username: str
    password: str
    is_admin: bool = False


class UserPublic(CamelModel):
    id: int
    username: str
    is_admin: bool


class LoginRequest(CamelModel):
    # Optional so a missing field yields the login-specific 400 message
    username: Optional[str] = None
    password: Optional[str] = None

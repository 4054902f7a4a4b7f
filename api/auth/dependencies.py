"""
Auth dependencies for protected FastAPI routes.

Every failure (missing header, wrong scheme, bad or expired token) is the
same 401 so clients can't tell which check tripped.
"""

from __future__ import annotations

from fastapi import Depends, Header

from core.config import Settings, get_settings
from core.db import Database, get_db
from core.errors import AuthError, ForbiddenError

from . import service
from .repository import UserRepository


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise AuthError()

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise AuthError()

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise AuthError()
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_user(
    access_token: str = Depends(get_bearer_token),
    settings: Settings = Depends(get_settings),
) -> dict:
    """
    Decoded identity of the caller: {"id": ..., "email": ...}.
    """
    return service.identity_from_access_token(access_token, settings=settings)


async def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    if not service.is_admin_email(current_user["email"]):
        raise ForbiddenError("Admin access required")
    return current_user


def get_user_repository(db: Database = Depends(get_db)) -> UserRepository:
    return UserRepository(db)

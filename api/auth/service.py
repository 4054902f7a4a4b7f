"""
Auth business logic.
"""

from __future__ import annotations

import logging

import aiosqlite

from core.config import Settings
from core.errors import AuthError, ConflictError, ValidationError

from . import schemas, security
from .repository import SYSTEM_USER_EMAIL, UserRepository, normalize_email

logger = logging.getLogger(__name__)


def _to_public_user(user_row: dict) -> dict:
    return {
        "id": str(user_row["id"]),
        "name": user_row.get("name"),
        "email": str(user_row["email"]),
    }


async def register(
    users: UserRepository,
    payload: schemas.RegisterRequest,
    *,
    settings: Settings,
) -> dict:
    if len(payload.name.strip()) < 2:
        raise ValidationError("Name must be at least 2 characters")
    if not normalize_email(payload.email):
        raise ValidationError("Invalid email address")
    if len(payload.password) < 8:
        raise ValidationError("Password must be at least 8 characters")
    if len(payload.password.encode("utf-8")) > security.MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {security.MAX_PASSWORD_BYTES} bytes")
    if payload.password != payload.confirm_password:
        raise ValidationError("Passwords do not match")

    existing = await users.get_by_email(payload.email)
    if existing is not None:
        raise ConflictError("Email already registered")

    password_hash = security.hash_password(payload.password, rounds=settings.bcrypt_rounds)
    try:
        user_row = await users.create(
            name=payload.name.strip(),
            email=payload.email,
            password_hash=password_hash,
        )
    except aiosqlite.IntegrityError as exc:
        # Lost a race with a concurrent registration for the same email.
        raise ConflictError("Email already registered") from exc

    logger.info("Registered user %s", user_row["id"])
    return _to_public_user(user_row)


async def login(
    users: UserRepository,
    payload: schemas.LoginRequest,
    *,
    settings: Settings,
) -> dict:
    if not payload.email.strip() or not payload.password:
        raise ValidationError("Email and password are required")

    # Same error for unknown email, OAuth-only account and wrong password.
    user_row = await users.get_by_email(payload.email)
    if user_row is None or not user_row.get("passwordHash"):
        raise AuthError("Invalid credentials")

    if not security.verify_password(payload.password, user_row.get("passwordHash")):
        raise AuthError("Invalid credentials")

    token = security.build_access_token(
        user_id=str(user_row["id"]),
        email=str(user_row["email"]),
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_hours=settings.jwt_expire_hours,
    )
    return {"token": token, "user": _to_public_user(user_row)}


def identity_from_access_token(access_token: str, *, settings: Settings) -> dict:
    try:
        payload = security.decode_access_token(
            access_token,
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
    except security.AuthSecurityError as exc:
        logger.debug("Rejected access token: %s", exc)
        raise AuthError() from exc

    return {
        "id": str(payload["sub"]).strip(),
        "email": str(payload.get("email") or ""),
    }


def is_admin_email(email: str) -> bool:
    email = normalize_email(email)
    return "admin" in email or email == SYSTEM_USER_EMAIL

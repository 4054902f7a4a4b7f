"""
Auth security helpers: password hashing and access tokens.
"""

from __future__ import annotations

import time
from typing import Any

import bcrypt
import jwt

DEFAULT_BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes; newer releases reject longer input.
MAX_PASSWORD_BYTES = 72


class AuthSecurityError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, password_hash: str | None) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(
    *,
    user_id: str,
    email: str,
    secret: str,
    algorithm: str = "HS256",
    expire_hours: int = 24,
) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + (expire_hours * 60 * 60)

    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, *, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    # Pinning `algorithms` rejects tokens signed with anything else (incl. "none").
    try:
        payload = jwt.decode(
            raw,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise AuthSecurityError("Access token has no subject.")

    return payload

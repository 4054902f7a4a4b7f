"""
Process settings read from environment variables.

Every value has a local-development default so `python main.py` works
without any setup. In production, set at least JWT_SECRET and DATABASE_URL.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from fastapi import Request

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    port: int = 8080
    database_url: str = "./trackside.db"
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24
    bcrypt_rounds: int = 12
    upload_dir: str = "./uploads"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    data_dir: str = "../trackside/data"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            port=_env_int("PORT", defaults.port),
            database_url=_env_str("DATABASE_URL", defaults.database_url),
            jwt_secret=_env_str("JWT_SECRET", defaults.jwt_secret),
            jwt_expire_hours=_env_int("JWT_EXPIRE_HOURS", defaults.jwt_expire_hours),
            bcrypt_rounds=_env_int("BCRYPT_ROUNDS", defaults.bcrypt_rounds),
            upload_dir=_env_str("UPLOAD_DIR", defaults.upload_dir),
            max_upload_bytes=_env_int("MAX_UPLOAD_BYTES", defaults.max_upload_bytes),
            cors_origins=_split_origins(_env_str("CORS_ORIGINS", ",".join(defaults.cors_origins))),
            data_dir=_env_str("DATA_DIR", defaults.data_dir),
            log_level=_env_str("LOG_LEVEL", defaults.log_level).upper(),
        )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings

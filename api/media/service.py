"""
Image upload handling: validate, buffer with a size cap, write to disk.

Files land under `<upload_dir>/tracks/` with a random name; no database
row is created. The returned URL is attached to a track image later.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from core.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# content type -> extension used when the filename has no image suffix
ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
}

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".svg"}

UPLOAD_SUBDIR = "tracks"
PUBLIC_PREFIX = "/uploads"


def _content_type(file: UploadFile) -> str:
    return (file.content_type or "").split(";", 1)[0].strip().lower()


def validate_upload(file: UploadFile | None) -> str:
    """
    Return the normalized content type if this upload is acceptable.
    """
    if file is None or not file.filename:
        raise ValidationError("No file provided")

    content_type = _content_type(file)
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError("Invalid file type. Allowed: JPEG, PNG, WebP, SVG")
    return content_type


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read the upload into memory, enforcing a maximum size.
    """
    chunk_size = 1024 * 1024  # 1 MiB
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise ValidationError(
                f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB"
            )

    return bytes(buf)


def stored_filename(original_name: str, content_type: str) -> str:
    ext = Path(original_name).suffix.lower()
    if ext not in IMAGE_EXTENSIONS:
        ext = ALLOWED_CONTENT_TYPES[content_type]
    return f"{uuid.uuid4()}{ext}"


def _write_file(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


async def save_image(file: UploadFile | None, *, upload_dir: str, max_bytes: int) -> dict:
    content_type = validate_upload(file)
    data = await read_upload_bytes(file, max_bytes=max_bytes)

    filename = stored_filename(file.filename or "", content_type)
    destination = Path(upload_dir) / UPLOAD_SUBDIR / filename
    await run_in_threadpool(_write_file, destination, data)

    logger.info("Stored upload %s (%d bytes, %s)", filename, len(data), content_type)
    return {"imageUrl": f"{PUBLIC_PREFIX}/{UPLOAD_SUBDIR}/{filename}"}


def resolve_upload_path(upload_dir: str, requested: str) -> Path:
    """
    Map a `/uploads/...` request path onto a file inside `upload_dir`.

    `..` sequences are stripped, and anything that still resolves outside
    the upload root (or is not a regular file) is reported as missing.
    """
    cleaned = requested.replace("..", "").lstrip("/")
    root = Path(upload_dir).resolve()
    candidate = (root / cleaned).resolve()

    if not candidate.is_relative_to(root) or not candidate.is_file():
        raise NotFoundError("File not found")
    return candidate

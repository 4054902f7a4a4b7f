"""
Upload endpoint plus the static file route for stored uploads.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import FileResponse

from auth import dependencies as auth_dependencies
from core.config import Settings, get_settings

from . import service

router = APIRouter()

# Mounted at the application root, outside the /api prefix.
static_router = APIRouter()


@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile | None = File(default=None),
    settings: Settings = Depends(get_settings),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    """
    Store a JPEG/PNG/WebP/SVG image and return its public URL.
    """
    return await service.save_image(
        file,
        upload_dir=settings.upload_dir,
        max_bytes=settings.max_upload_bytes,
    )


@static_router.get("/uploads/{file_path:path}")
async def serve_upload(
    file_path: str,
    settings: Settings = Depends(get_settings),
) -> FileResponse:
    return FileResponse(service.resolve_upload_path(settings.upload_dir, file_path))

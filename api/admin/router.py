"""
Admin-only endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from auth.repository import UserRepository
from core.config import Settings, get_settings
from tracks.repository import TrackRepository
from tracks.router import get_track_repository

from . import service

router = APIRouter()


@router.post("/admin/sync-tracks")
async def sync_tracks(
    tracks: TrackRepository = Depends(get_track_repository),
    users: UserRepository = Depends(auth_dependencies.get_user_repository),
    settings: Settings = Depends(get_settings),
    admin_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    """
    Upsert every track in `<DATA_DIR>/usa-tracks.json`, owned by the system user.
    """
    return await service.sync_tracks(tracks, users, data_dir=settings.data_dir)

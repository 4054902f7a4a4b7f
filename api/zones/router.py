"""
Zone and tip endpoints, nested under a track. All require auth.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies
from core.db import Database, get_db
from tracks.router import get_track_repository
from tracks.repository import TrackRepository

from . import schemas, service
from .repository import ZoneRepository

router = APIRouter()


def get_zone_repository(db: Database = Depends(get_db)) -> ZoneRepository:
    return ZoneRepository(db)


@router.post("/tracks/{track_id}/zones", status_code=status.HTTP_201_CREATED)
async def create_zone(
    track_id: str,
    payload: schemas.ZoneCreateRequest,
    tracks: TrackRepository = Depends(get_track_repository),
    zones: ZoneRepository = Depends(get_zone_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.create_zone(tracks, zones, track_id, payload)


@router.patch("/tracks/{track_id}/zones/{zone_id}")
async def update_zone(
    track_id: str,
    zone_id: str,
    payload: schemas.ZoneUpdateRequest,
    tracks: TrackRepository = Depends(get_track_repository),
    zones: ZoneRepository = Depends(get_zone_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.update_zone(tracks, zones, track_id, zone_id, payload)


@router.delete("/tracks/{track_id}/zones/{zone_id}")
async def delete_zone(
    track_id: str,
    zone_id: str,
    tracks: TrackRepository = Depends(get_track_repository),
    zones: ZoneRepository = Depends(get_zone_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.delete_zone(tracks, zones, track_id, zone_id)


@router.post("/tracks/{track_id}/zones/{zone_id}/tips", status_code=status.HTTP_201_CREATED)
async def create_tip(
    track_id: str,
    zone_id: str,
    payload: schemas.ZoneTipRequest,
    zones: ZoneRepository = Depends(get_zone_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.create_tip(zones, track_id, zone_id, payload, user_id=current_user["id"])

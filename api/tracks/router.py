"""
Track endpoints. Listing, detail and image listing are public; the rest
require a bearer token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies
from core.db import Database, get_db
from reviews.repository import ReviewRepository
from zones.repository import ZoneRepository

from . import schemas, service
from .repository import TrackRepository

router = APIRouter()


def get_track_repository(db: Database = Depends(get_db)) -> TrackRepository:
    return TrackRepository(db)


def _zone_repository(db: Database = Depends(get_db)) -> ZoneRepository:
    return ZoneRepository(db)


def _review_repository(db: Database = Depends(get_db)) -> ReviewRepository:
    return ReviewRepository(db)


@router.get("/tracks")
async def list_tracks(
    search: str = Query(default=""),
    event_type: str = Query(default="", alias="eventType"),
    state: str = Query(default=""),
    tracks: TrackRepository = Depends(get_track_repository),
) -> list[dict]:
    return await service.list_tracks(tracks, search=search, event_type=event_type, state=state)


@router.post("/tracks", status_code=status.HTTP_201_CREATED)
async def create_track(
    payload: schemas.TrackCreateRequest,
    tracks: TrackRepository = Depends(get_track_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.create_track(tracks, payload, user_id=current_user["id"])


@router.get("/tracks/{track_id}")
async def get_track(
    track_id: str,
    event_type: str = Query(default="", alias="eventType"),
    tracks: TrackRepository = Depends(get_track_repository),
    zones: ZoneRepository = Depends(_zone_repository),
    reviews: ReviewRepository = Depends(_review_repository),
) -> dict:
    return await service.get_track_detail(tracks, zones, reviews, track_id, event_type=event_type)


@router.patch("/tracks/{track_id}")
async def update_track(
    track_id: str,
    payload: schemas.TrackUpdateRequest,
    tracks: TrackRepository = Depends(get_track_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.update_track(tracks, track_id, payload, user_id=current_user["id"])


@router.get("/tracks/{track_id}/images")
async def list_track_images(
    track_id: str,
    tracks: TrackRepository = Depends(get_track_repository),
) -> list[dict]:
    return await service.list_images(tracks, track_id)


@router.post("/tracks/{track_id}/images", status_code=status.HTTP_201_CREATED)
async def create_track_image(
    track_id: str,
    payload: schemas.TrackImageRequest,
    tracks: TrackRepository = Depends(get_track_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.create_image(tracks, track_id, payload, user_id=current_user["id"])


@router.delete("/tracks/{track_id}/images")
async def delete_track_image(
    track_id: str,
    image_id: str = Query(default="", alias="imageId"),
    tracks: TrackRepository = Depends(get_track_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.delete_image(tracks, track_id, image_id, user_id=current_user["id"])

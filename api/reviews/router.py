"""
Review endpoint, nested under a track. Requires auth.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies
from core.db import Database, get_db
from tracks.router import get_track_repository
from tracks.repository import TrackRepository

from . import schemas, service
from .repository import ReviewRepository

router = APIRouter()


def get_review_repository(db: Database = Depends(get_db)) -> ReviewRepository:
    return ReviewRepository(db)


@router.post("/tracks/{track_id}/reviews", status_code=status.HTTP_201_CREATED)
async def create_review(
    track_id: str,
    payload: schemas.ReviewRequest,
    tracks: TrackRepository = Depends(get_track_repository),
    reviews: ReviewRepository = Depends(get_review_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.create_review(tracks, reviews, track_id, payload, user_id=current_user["id"])

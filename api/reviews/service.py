from __future__ import annotations

from core import validation
from core.errors import NotFoundError, ValidationError
from tracks.repository import TrackRepository

from . import schemas
from .repository import ReviewRepository


async def create_review(
    tracks: TrackRepository,
    reviews: ReviewRepository,
    track_id: str,
    payload: schemas.ReviewRequest,
    *,
    user_id: str,
) -> dict:
    if not await tracks.exists(track_id):
        raise NotFoundError("Track not found")

    if not validation.valid_rating(payload.rating):
        raise ValidationError(
            f"Rating must be between {validation.MIN_RATING} and {validation.MAX_RATING}"
        )
    if not validation.valid_driving_condition(payload.conditions):
        raise ValidationError("Invalid conditions")

    track_event_id = payload.track_event_id or None
    if track_event_id is not None:
        event = await tracks.get_event(track_event_id)
        if event is None or event["trackId"] != track_id:
            raise ValidationError("Invalid track event")

    return await reviews.create(
        rating=payload.rating,
        content=payload.content,
        conditions=payload.conditions,
        track_id=track_id,
        track_event_id=track_event_id,
        author_id=user_id,
    )

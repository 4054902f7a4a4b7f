"""
Track business logic: listing, creation, detail assembly, edits and images.

Track edits are the one ownership check that answers 403 instead of 404;
the track itself is public, so hiding it from non-uploaders gains nothing.
"""

from __future__ import annotations

import logging

import aiosqlite

from core import validation
from core.errors import ConflictError, ForbiddenError, InternalError, NotFoundError, ValidationError
from reviews.repository import ReviewRepository
from zones.repository import ZoneRepository

from . import schemas
from .repository import TrackRepository

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2


def _unique_event_types(event_types: list[str]) -> list[str]:
    seen: list[str] = []
    for event_type in event_types:
        if event_type not in seen:
            seen.append(event_type)
    return seen


async def _require_track(tracks: TrackRepository, track_id: str) -> dict:
    track = await tracks.get(track_id)
    if track is None:
        raise NotFoundError("Track not found")
    return track


async def list_tracks(
    tracks: TrackRepository,
    *,
    search: str = "",
    event_type: str = "",
    state: str = "",
) -> list[dict]:
    try:
        return await tracks.list_approved(search=search, event_type=event_type, state=state)
    except aiosqlite.Error as exc:
        logger.exception("Track listing failed")
        raise InternalError("Failed to fetch tracks", details=str(exc)) from exc


async def create_track(
    tracks: TrackRepository,
    payload: schemas.TrackCreateRequest,
    *,
    user_id: str,
) -> dict:
    name = payload.name.strip()
    location = payload.location.strip()

    if not validation.has_min_length(name, MIN_NAME_LENGTH):
        raise ValidationError("Track name is required")
    if not validation.has_min_length(location, MIN_NAME_LENGTH):
        raise ValidationError("Location is required")
    if not payload.event_types:
        raise ValidationError("Select at least one event type")
    for event_type in payload.event_types:
        if not validation.valid_event_type(event_type):
            raise ValidationError(f"Invalid event type: {event_type}")

    if await tracks.get_by_name_and_location(name, location) is not None:
        raise ConflictError("A track with this name and location already exists")

    try:
        track_id = await tracks.create_with_events(
            name=name,
            location=location,
            description=payload.description,
            image_url=payload.image_url,
            event_types=_unique_event_types(payload.event_types),
            user_id=user_id,
        )
    except aiosqlite.IntegrityError as exc:
        raise ConflictError("A track with this name and location already exists") from exc

    logger.info("Track created: %s (%s) by %s", name, track_id, user_id)

    track = await tracks.get(track_id)
    track["events"] = await tracks.list_events(track_id)
    uploader = await tracks.get_uploader(user_id)
    track["uploadedBy"] = {"id": uploader["id"], "name": uploader["name"]}
    track["_count"] = {"reviews": 0, "zones": 0, "lapRecords": 0}
    track["avgRating"] = 0.0
    return track


async def get_track_detail(
    tracks: TrackRepository,
    zones: ZoneRepository,
    reviews: ReviewRepository,
    track_id: str,
    *,
    event_type: str = "",
) -> dict:
    """
    Track plus uploader, events, zones (with tips), reviews (with authors),
    counts and average rating, composed from independent reads.
    """
    track = await _require_track(tracks, track_id)

    track["uploadedBy"] = await tracks.get_uploader(track["uploadedById"])
    track["events"] = await tracks.list_events(track_id)
    track["zones"] = await zones.list_for_track(track_id, event_type=event_type)
    track["reviews"] = await reviews.list_for_track(track_id)
    counts, avg_rating = await tracks.stats(track_id)
    track["_count"] = counts
    track["avgRating"] = avg_rating
    return track


async def update_track(
    tracks: TrackRepository,
    track_id: str,
    payload: schemas.TrackUpdateRequest,
    *,
    user_id: str,
) -> dict:
    track = await _require_track(tracks, track_id)
    if track["uploadedById"] != user_id:
        raise ForbiddenError("You can only edit your own tracks")

    changes = payload.model_dump(exclude_none=True)
    if "name" in changes:
        changes["name"] = changes["name"].strip()
        if not validation.has_min_length(changes["name"], MIN_NAME_LENGTH):
            raise ValidationError("Track name is required")
    if "location" in changes:
        changes["location"] = changes["location"].strip()
        if not validation.has_min_length(changes["location"], MIN_NAME_LENGTH):
            raise ValidationError("Location is required")

    try:
        updated = await tracks.update(track_id, changes)
    except aiosqlite.IntegrityError as exc:
        raise ConflictError("A track with this name and location already exists") from exc

    if updated is None:
        raise NotFoundError("Track not found")
    return updated


# Images


async def list_images(tracks: TrackRepository, track_id: str) -> list[dict]:
    return await tracks.list_images(track_id)


async def create_image(
    tracks: TrackRepository,
    track_id: str,
    payload: schemas.TrackImageRequest,
    *,
    user_id: str,
) -> dict:
    url = payload.url.strip()
    if not validation.valid_image_url(url):
        raise ValidationError("Invalid image URL")
    if not await tracks.exists(track_id):
        raise NotFoundError("Track not found")

    return await tracks.create_image(url=url, caption=payload.caption, track_id=track_id, user_id=user_id)


async def delete_image(
    tracks: TrackRepository,
    track_id: str,
    image_id: str,
    *,
    user_id: str,
) -> dict:
    if not image_id:
        raise ValidationError("Image ID is required")

    image = await tracks.get_image(image_id)
    if image is None or image["trackId"] != track_id:
        raise NotFoundError("Image not found")

    track = await tracks.get(track_id)
    is_track_owner = track is not None and track["uploadedById"] == user_id
    is_image_uploader = image["uploadedById"] == user_id
    if not is_track_owner and not is_image_uploader:
        raise ForbiddenError()

    await tracks.delete_image(image_id)
    return {"success": True}

"""
Zone and tip business logic. A zone addressed under the wrong track is
reported as missing.
"""

from __future__ import annotations

from core import validation
from core.errors import NotFoundError, ValidationError
from tracks.repository import TrackRepository

from . import schemas
from .repository import ZoneRepository


async def _require_track(tracks: TrackRepository, track_id: str) -> None:
    if not await tracks.exists(track_id):
        raise NotFoundError("Track not found")


async def _require_zone(zones: ZoneRepository, zone_id: str, *, track_id: str) -> dict:
    zone = await zones.get_for_track(zone_id, track_id=track_id)
    if zone is None:
        raise NotFoundError("Zone not found")
    return zone


async def create_zone(
    tracks: TrackRepository,
    zones: ZoneRepository,
    track_id: str,
    payload: schemas.ZoneCreateRequest,
) -> dict:
    await _require_track(tracks, track_id)

    name = payload.name.strip()
    if not name:
        raise ValidationError("Zone name is required")
    if not (validation.valid_position(payload.pos_x) and validation.valid_position(payload.pos_y)):
        raise ValidationError("Position must be between 0 and 100")

    event_type = payload.event_type or None
    if event_type is not None and not validation.valid_event_type(event_type):
        raise ValidationError(f"Invalid event type: {event_type}")

    return await zones.create(
        name=name,
        description=payload.description,
        pos_x=payload.pos_x,
        pos_y=payload.pos_y,
        event_type=event_type,
        track_id=track_id,
    )


async def update_zone(
    tracks: TrackRepository,
    zones: ZoneRepository,
    track_id: str,
    zone_id: str,
    payload: schemas.ZoneUpdateRequest,
) -> dict:
    await _require_track(tracks, track_id)
    await _require_zone(zones, zone_id, track_id=track_id)

    changes = payload.model_dump(exclude_none=True)
    if "name" in changes:
        changes["name"] = changes["name"].strip()
        if not changes["name"]:
            raise ValidationError("Zone name is required")

    updated = await zones.update(zone_id, changes)
    if updated is None:
        raise NotFoundError("Zone not found")
    return updated


async def delete_zone(
    tracks: TrackRepository,
    zones: ZoneRepository,
    track_id: str,
    zone_id: str,
) -> dict:
    await _require_track(tracks, track_id)
    await _require_zone(zones, zone_id, track_id=track_id)

    await zones.delete(zone_id)
    return {"success": True}


async def create_tip(
    zones: ZoneRepository,
    track_id: str,
    zone_id: str,
    payload: schemas.ZoneTipRequest,
    *,
    user_id: str,
) -> dict:
    await _require_zone(zones, zone_id, track_id=track_id)

    content = payload.content.strip()
    if not content:
        raise ValidationError("Tip content is required")

    conditions = payload.conditions or None
    if conditions is not None and not validation.valid_driving_condition(conditions):
        raise ValidationError("Invalid conditions")

    return await zones.create_tip(
        content=content,
        conditions=conditions,
        zone_id=zone_id,
        author_id=user_id,
    )

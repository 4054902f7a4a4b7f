"""
Lapbook business logic. Records are private to their driver; someone
else's record or car answers 404 like a missing one.
"""

from __future__ import annotations

import logging

import aiosqlite

from cars.repository import CarRepository
from core import validation
from core.errors import InternalError, NotFoundError, ValidationError
from tracks.repository import TrackRepository

from . import schemas
from .repository import LapbookRepository

logger = logging.getLogger(__name__)


async def list_records(
    records: LapbookRepository,
    *,
    driver_id: str,
    track_id: str = "",
    event_type: str = "",
    car_id: str = "",
) -> list[dict]:
    try:
        return await records.list_for_driver(
            driver_id,
            track_id=track_id,
            event_type=event_type,
            car_id=car_id,
        )
    except aiosqlite.Error as exc:
        logger.exception("Lap record listing failed for %s", driver_id)
        raise InternalError("Failed to fetch lap records") from exc


async def create_record(
    records: LapbookRepository,
    cars: CarRepository,
    tracks: TrackRepository,
    payload: schemas.LapRecordRequest,
    *,
    driver_id: str,
) -> dict:
    lap_time = payload.lap_time.strip()
    if not lap_time:
        raise ValidationError("Lap time is required")
    if not validation.valid_driving_condition(payload.conditions):
        raise ValidationError("Invalid conditions")
    if not payload.track_id or not payload.car_id:
        raise ValidationError("Track and car are required")

    if not await cars.exists_for_user(payload.car_id, user_id=driver_id):
        raise NotFoundError("Car not found")
    if not await tracks.exists(payload.track_id):
        raise NotFoundError("Track not found")

    track_event_id = payload.track_event_id or None
    if track_event_id is not None:
        event = await tracks.get_event(track_event_id)
        if event is None or event["trackId"] != payload.track_id:
            raise ValidationError("Invalid track event")

    return await records.create(
        lap_time=lap_time,
        conditions=payload.conditions,
        notes=payload.notes,
        telemetry=payload.telemetry(),
        track_id=payload.track_id,
        track_event_id=track_event_id,
        car_id=payload.car_id,
        driver_id=driver_id,
    )


async def delete_record(records: LapbookRepository, record_id: str, *, driver_id: str) -> dict:
    if not await records.exists_for_driver(record_id, driver_id=driver_id):
        raise NotFoundError("Record not found")

    await records.delete(record_id, driver_id=driver_id)
    return {"success": True}

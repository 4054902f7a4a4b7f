"""
Lapbook endpoints. All require auth and only ever touch the caller's records.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies
from cars.repository import CarRepository
from cars.router import get_car_repository
from core.db import Database, get_db
from tracks.repository import TrackRepository
from tracks.router import get_track_repository

from . import schemas, service
from .repository import LapbookRepository

router = APIRouter()


def get_lapbook_repository(db: Database = Depends(get_db)) -> LapbookRepository:
    return LapbookRepository(db)


@router.get("/lapbook")
async def list_lap_records(
    track_id: str = Query(default="", alias="trackId"),
    event_type: str = Query(default="", alias="eventType"),
    car_id: str = Query(default="", alias="carId"),
    records: LapbookRepository = Depends(get_lapbook_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> list[dict]:
    return await service.list_records(
        records,
        driver_id=current_user["id"],
        track_id=track_id,
        event_type=event_type,
        car_id=car_id,
    )


@router.post("/lapbook", status_code=status.HTTP_201_CREATED)
async def create_lap_record(
    payload: schemas.LapRecordRequest,
    records: LapbookRepository = Depends(get_lapbook_repository),
    cars: CarRepository = Depends(get_car_repository),
    tracks: TrackRepository = Depends(get_track_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.create_record(records, cars, tracks, payload, driver_id=current_user["id"])


@router.delete("/lapbook/{record_id}")
async def delete_lap_record(
    record_id: str,
    records: LapbookRepository = Depends(get_lapbook_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.delete_record(records, record_id, driver_id=current_user["id"])

"""
Bulk sync of imported tracks from the external dataset.

Rows are upserted one at a time keyed by (name, location). A failing row is
counted and reported, and the batch carries on.
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiosqlite
from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool

from auth.repository import UserRepository
from core import validation
from core.errors import InternalError
from tracks.repository import TrackRepository

from .schemas import ImportedTrack, ImportedTracksFile

logger = logging.getLogger(__name__)

TRACKS_DATA_FILE = "usa-tracks.json"
SYNC_FAILED = "Sync failed"


class ImportRowError(Exception):
    pass


async def load_tracks_file(data_dir: str) -> ImportedTracksFile:
    path = Path(data_dir) / TRACKS_DATA_FILE
    try:
        raw = await run_in_threadpool(path.read_text, encoding="utf-8")
    except OSError as exc:
        logger.error("Could not read %s: %s", path, exc)
        raise InternalError(SYNC_FAILED, details="Could not read tracks data file") from exc

    try:
        return ImportedTracksFile.model_validate_json(raw)
    except PydanticValidationError as exc:
        logger.error("Invalid tracks data file %s: %s", path, exc)
        raise InternalError(SYNC_FAILED, details="Invalid JSON in tracks data file") from exc


def _event_types(row: ImportedTrack) -> list[str]:
    event_types: list[str] = []
    for raw in row.types:
        event_type = raw.strip().upper()
        if not validation.valid_event_type(event_type):
            raise ImportRowError(f"Invalid event type: {raw}")
        if event_type not in event_types:
            event_types.append(event_type)
    return event_types


async def _upsert_row(tracks: TrackRepository, row: ImportedTrack, *, system_user_id: str) -> bool:
    name = row.name.strip()
    location = row.location.strip()
    if not name or not location:
        raise ImportRowError("Name and location are required")

    return await tracks.upsert_imported(
        name=name,
        location=location,
        state=(row.state or "").strip().upper() or None,
        description=row.description,
        latitude=row.latitude,
        longitude=row.longitude,
        event_types=_event_types(row),
        system_user_id=system_user_id,
    )


async def sync_tracks(tracks: TrackRepository, users: UserRepository, *, data_dir: str) -> dict:
    data = await load_tracks_file(data_dir)

    try:
        system_user = await users.get_or_create_system_user()
    except (aiosqlite.Error, RuntimeError) as exc:
        logger.exception("Could not resolve the system user")
        raise InternalError(SYNC_FAILED, details=str(exc)) from exc

    created = updated = failed = 0
    errors: list[str] = []

    for row in data.tracks:
        try:
            was_created = await _upsert_row(tracks, row, system_user_id=system_user["id"])
        except (ImportRowError, aiosqlite.Error) as exc:
            failed += 1
            errors.append(f"{row.name}: {exc}")
            continue

        if was_created:
            created += 1
        else:
            updated += 1

    logger.info(
        "Track sync finished: total=%d created=%d updated=%d failed=%d",
        len(data.tracks),
        created,
        updated,
        failed,
    )

    response: dict = {
        "status": "success",
        "summary": {
            "total": len(data.tracks),
            "created": created,
            "updated": updated,
            "failed": failed,
        },
    }
    if errors:
        response["errors"] = errors
    return response

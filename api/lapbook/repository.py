"""
Lap record persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database, new_id, utc_now

TELEMETRY_COLUMNS = (
    "tirePressureFL",
    "tirePressureFR",
    "tirePressureRL",
    "tirePressureRR",
    "fuelLevel",
    "camberFL",
    "camberFR",
    "camberRL",
    "camberRR",
    "casterFL",
    "casterFR",
    "toeFL",
    "toeFR",
    "toeRL",
    "toeRR",
)

_RECORD_KEYS = (
    "id",
    "lapTime",
    "conditions",
    "notes",
    *TELEMETRY_COLUMNS,
    "trackId",
    "trackEventId",
    "carId",
    "driverId",
    "createdAt",
    "updatedAt",
)

_RECORD_COLUMNS = ", ".join(f"lr.{key}" for key in _RECORD_KEYS)


def _record_from_row(row: dict[str, Any]) -> dict[str, Any]:
    record = {key: row[key] for key in _RECORD_KEYS}
    record["track"] = {
        "id": row["trackId"],
        "name": row["trackName"],
        "location": row["trackLocation"],
    }
    record["car"] = {
        "id": row["carId"],
        "make": row["carMake"],
        "model": row["carModel"],
        "year": row["carYear"],
    }
    return record


class LapbookRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_for_driver(
        self,
        driver_id: str,
        *,
        track_id: str = "",
        event_type: str = "",
        car_id: str = "",
    ) -> list[dict]:
        """
        The driver's records, newest first, with track/car briefs and the
        event (or None).
        """
        where = ["lr.driverId = ?"]
        args: list[Any] = [driver_id]
        if track_id:
            where.append("lr.trackId = ?")
            args.append(track_id)
        if car_id:
            where.append("lr.carId = ?")
            args.append(car_id)
        if event_type:
            where.append(
                'EXISTS (SELECT 1 FROM "TrackEvent" te WHERE te.id = lr.trackEventId AND te.eventType = ?)'
            )
            args.append(event_type)

        rows = await self.db.fetch_all(
            f"""
            SELECT {_RECORD_COLUMNS},
                   t.name AS trackName, t.location AS trackLocation,
                   c.make AS carMake, c.model AS carModel, c.year AS carYear
            FROM "LapRecord" lr
            JOIN "Track" t ON t.id = lr.trackId
            JOIN "Car" c ON c.id = lr.carId
            WHERE {" AND ".join(where)}
            ORDER BY lr.createdAt DESC, lr.rowid DESC
            """,
            *args,
        )

        records = [_record_from_row(row) for row in rows]
        for record in records:
            record["trackEvent"] = await self._get_event(record["trackEventId"])
        return records

    async def create(
        self,
        *,
        lap_time: str,
        conditions: str,
        notes: str | None,
        telemetry: dict[str, float | None],
        track_id: str,
        track_event_id: str | None,
        car_id: str,
        driver_id: str,
    ) -> dict:
        record_id = new_id()
        now = utc_now()
        values: dict[str, Any] = {
            "id": record_id,
            "lapTime": lap_time,
            "conditions": conditions,
            "notes": notes,
            **{column: telemetry.get(column) for column in TELEMETRY_COLUMNS},
            "trackId": track_id,
            "trackEventId": track_event_id,
            "carId": car_id,
            "driverId": driver_id,
            "createdAt": now,
            "updatedAt": now,
        }
        columns = ", ".join(_RECORD_KEYS)
        placeholders = ", ".join("?" for _ in _RECORD_KEYS)
        await self.db.execute(
            f'INSERT INTO "LapRecord" ({columns}) VALUES ({placeholders})',
            *(values[key] for key in _RECORD_KEYS),
        )

        record = dict(values)
        record["track"] = await self.db.fetch_one(
            'SELECT id, name, location FROM "Track" WHERE id = ?',
            track_id,
        )
        record["car"] = await self.db.fetch_one(
            'SELECT id, make, model, year FROM "Car" WHERE id = ?',
            car_id,
        )
        record["trackEvent"] = await self._get_event(track_event_id)
        return record

    async def exists_for_driver(self, record_id: str, *, driver_id: str) -> bool:
        row = await self.db.fetch_one(
            'SELECT 1 AS ok FROM "LapRecord" WHERE id = ? AND driverId = ? LIMIT 1',
            record_id,
            driver_id,
        )
        return row is not None

    async def delete(self, record_id: str, *, driver_id: str) -> bool:
        deleted = await self.db.execute(
            'DELETE FROM "LapRecord" WHERE id = ? AND driverId = ?',
            record_id,
            driver_id,
        )
        return deleted > 0

    async def _get_event(self, event_id: str | None) -> dict | None:
        if not event_id:
            return None
        return await self.db.fetch_one(
            'SELECT id, eventType, trackId FROM "TrackEvent" WHERE id = ?',
            event_id,
        )

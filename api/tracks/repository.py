"""
Track persistence (raw SQL): tracks, their event types, images, and the
imported-track upsert used by the admin sync.
"""

from __future__ import annotations

from typing import Any

from core.db import Database, new_id, utc_now
from core.validation import TrackStatus

_TRACK_COLUMNS = """
    t.id, t.name, t.location, t.state, t.description, t.imageUrl,
    t.latitude, t.longitude, t.status, t.isImported, t.uploadedById,
    t.createdAt, t.updatedAt
"""

# Per-track aggregates as correlated subqueries, so one row carries them all.
_TRACK_STATS = """
    (SELECT count(*) FROM "TrackReview" r WHERE r.trackId = t.id) AS reviewCount,
    (SELECT count(*) FROM "TrackZone" z WHERE z.trackId = t.id) AS zoneCount,
    (SELECT count(*) FROM "LapRecord" l WHERE l.trackId = t.id) AS lapRecordCount,
    (SELECT avg(r.rating) FROM "TrackReview" r WHERE r.trackId = t.id) AS avgRating
"""

_TRACK_KEYS = (
    "id",
    "name",
    "location",
    "state",
    "description",
    "imageUrl",
    "latitude",
    "longitude",
    "status",
    "isImported",
    "uploadedById",
    "createdAt",
    "updatedAt",
)

# PATCH field name -> column. Only these are user-editable.
EDITABLE_TRACK_FIELDS = {
    "name": "name",
    "location": "location",
    "description": "description",
    "image_url": "imageUrl",
}


def track_from_row(row: dict[str, Any]) -> dict[str, Any]:
    track = {key: row.get(key) for key in _TRACK_KEYS}
    track["isImported"] = bool(track["isImported"])
    return track


def _counts_from_row(row: dict[str, Any]) -> dict[str, int]:
    return {
        "reviews": int(row.get("reviewCount") or 0),
        "zones": int(row.get("zoneCount") or 0),
        "lapRecords": int(row.get("lapRecordCount") or 0),
    }


def _avg_rating(row: dict[str, Any]) -> float:
    value = row.get("avgRating")
    return float(value) if value is not None else 0.0


class TrackRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_approved(
        self,
        *,
        search: str = "",
        event_type: str = "",
        state: str = "",
    ) -> list[dict]:
        """
        Public listing: APPROVED tracks only, newest first, with events,
        uploader brief, counts and average rating.
        """
        where = ["t.status = ?"]
        args: list[Any] = [TrackStatus.APPROVED.value]

        if search:
            where.append("(t.name LIKE ? OR t.location LIKE ?)")
            like = f"%{search}%"
            args.extend([like, like])
        if event_type:
            where.append(
                'EXISTS (SELECT 1 FROM "TrackEvent" te WHERE te.trackId = t.id AND te.eventType = ?)'
            )
            args.append(event_type)
        if state:
            where.append("t.state = ?")
            args.append(state.upper())

        rows = await self.db.fetch_all(
            f"""
            SELECT {_TRACK_COLUMNS},
                   u.name AS uploaderName,
                   {_TRACK_STATS}
            FROM "Track" t
            JOIN "User" u ON u.id = t.uploadedById
            WHERE {" AND ".join(where)}
            ORDER BY t.createdAt DESC, t.rowid DESC
            """,
            *args,
        )

        events_by_track = await self.events_for_tracks([row["id"] for row in rows])
        tracks = []
        for row in rows:
            track = track_from_row(row)
            track["events"] = events_by_track.get(row["id"], [])
            track["uploadedBy"] = {"id": row["uploadedById"], "name": row.get("uploaderName")}
            track["_count"] = _counts_from_row(row)
            track["avgRating"] = _avg_rating(row)
            tracks.append(track)
        return tracks

    async def get(self, track_id: str) -> dict | None:
        row = await self.db.fetch_one(
            f'SELECT {_TRACK_COLUMNS} FROM "Track" t WHERE t.id = ?',
            track_id,
        )
        return track_from_row(row) if row is not None else None

    async def exists(self, track_id: str) -> bool:
        row = await self.db.fetch_one('SELECT 1 AS ok FROM "Track" WHERE id = ? LIMIT 1', track_id)
        return row is not None

    async def get_by_name_and_location(self, name: str, location: str) -> dict | None:
        row = await self.db.fetch_one(
            f'SELECT {_TRACK_COLUMNS} FROM "Track" t WHERE t.name = ? AND t.location = ?',
            name,
            location,
        )
        return track_from_row(row) if row is not None else None

    async def get_uploader(self, user_id: str) -> dict:
        row = await self.db.fetch_one(
            'SELECT id, name, experience FROM "User" WHERE id = ?',
            user_id,
        )
        return row or {"id": user_id, "name": None, "experience": None}

    async def stats(self, track_id: str) -> tuple[dict[str, int], float]:
        """
        (`_count` dict, average rating) for one track; rating is 0 with no reviews.
        """
        row = await self.db.fetch_one(
            f'SELECT {_TRACK_STATS} FROM "Track" t WHERE t.id = ?',
            track_id,
        )
        row = row or {}
        return _counts_from_row(row), _avg_rating(row)

    async def list_events(self, track_id: str) -> list[dict]:
        return await self.db.fetch_all(
            'SELECT id, eventType, trackId FROM "TrackEvent" WHERE trackId = ? ORDER BY rowid',
            track_id,
        )

    async def events_for_tracks(self, track_ids: list[str]) -> dict[str, list[dict]]:
        if not track_ids:
            return {}
        placeholders = ", ".join("?" for _ in track_ids)
        rows = await self.db.fetch_all(
            f"""
            SELECT id, eventType, trackId
            FROM "TrackEvent"
            WHERE trackId IN ({placeholders})
            ORDER BY rowid
            """,
            *track_ids,
        )
        grouped: dict[str, list[dict]] = {}
        for row in rows:
            grouped.setdefault(row["trackId"], []).append(row)
        return grouped

    async def get_event(self, event_id: str) -> dict | None:
        return await self.db.fetch_one(
            'SELECT id, eventType, trackId FROM "TrackEvent" WHERE id = ?',
            event_id,
        )

    async def create_with_events(
        self,
        *,
        name: str,
        location: str,
        description: str | None,
        image_url: str | None,
        event_types: list[str],
        user_id: str,
    ) -> str:
        """
        Insert a user-submitted track and its events in one transaction.

        Returns the new track id.
        """
        track_id = new_id()
        now = utc_now()
        async with self.db.transaction() as tx:
            await tx.execute(
                """
                INSERT INTO "Track" (id, name, location, description, imageUrl, uploadedById,
                                     status, isImported, createdAt, updatedAt)
                VALUES (?, ?, ?, ?, ?, ?, ?, 0, ?, ?)
                """,
                track_id,
                name,
                location,
                description,
                image_url,
                user_id,
                TrackStatus.APPROVED.value,
                now,
                now,
            )
            for event_type in event_types:
                await tx.execute(
                    'INSERT INTO "TrackEvent" (id, eventType, trackId) VALUES (?, ?, ?)',
                    new_id(),
                    event_type,
                    track_id,
                )
        return track_id

    async def update(self, track_id: str, changes: dict[str, Any]) -> dict | None:
        """
        Partial update; `changes` keys are EDITABLE_TRACK_FIELDS names.
        """
        sets = ["updatedAt = ?"]
        args: list[Any] = [utc_now()]
        for field_name, value in changes.items():
            column = EDITABLE_TRACK_FIELDS.get(field_name)
            if column is None:
                continue
            sets.append(f"{column} = ?")
            args.append(value)

        args.append(track_id)
        await self.db.execute(
            f'UPDATE "Track" SET {", ".join(sets)} WHERE id = ?',
            *args,
        )
        return await self.get(track_id)

    async def upsert_imported(
        self,
        *,
        name: str,
        location: str,
        state: str | None,
        description: str | None,
        latitude: float | None,
        longitude: float | None,
        event_types: list[str],
        system_user_id: str,
    ) -> bool:
        """
        Create or refresh an imported track keyed by (name, location).

        Existing rows get description/coordinates/state refreshed and are
        flagged as imported; their events are left alone. New rows are
        inserted with their events in one transaction.

        Returns True when a new track was created.
        """
        existing = await self.get_by_name_and_location(name, location)
        now = utc_now()

        if existing is not None:
            await self.db.execute(
                """
                UPDATE "Track"
                SET description = ?, latitude = ?, longitude = ?, state = ?,
                    isImported = 1, updatedAt = ?
                WHERE id = ?
                """,
                description,
                latitude,
                longitude,
                state,
                now,
                existing["id"],
            )
            return False

        track_id = new_id()
        async with self.db.transaction() as tx:
            await tx.execute(
                """
                INSERT INTO "Track" (id, name, location, state, description, latitude, longitude,
                                     isImported, status, uploadedById, createdAt, updatedAt)
                VALUES (?, ?, ?, ?, ?, ?, ?, 1, ?, ?, ?, ?)
                """,
                track_id,
                name,
                location,
                state,
                description,
                latitude,
                longitude,
                TrackStatus.APPROVED.value,
                system_user_id,
                now,
                now,
            )
            for event_type in event_types:
                await tx.execute(
                    'INSERT INTO "TrackEvent" (id, eventType, trackId) VALUES (?, ?, ?)',
                    new_id(),
                    event_type,
                    track_id,
                )
        return True

    # Images

    async def list_images(self, track_id: str) -> list[dict]:
        rows = await self.db.fetch_all(
            """
            SELECT ti.id, ti.url, ti.caption, ti.createdAt,
                   u.id AS uploaderId, u.name AS uploaderName
            FROM "TrackImage" ti
            JOIN "User" u ON u.id = ti.uploadedById
            WHERE ti.trackId = ?
            ORDER BY ti.createdAt DESC, ti.rowid DESC
            """,
            track_id,
        )
        return [
            {
                "id": row["id"],
                "url": row["url"],
                "caption": row["caption"],
                "createdAt": row["createdAt"],
                "uploadedBy": {"id": row["uploaderId"], "name": row["uploaderName"]},
            }
            for row in rows
        ]

    async def create_image(self, *, url: str, caption: str | None, track_id: str, user_id: str) -> dict:
        image_id = new_id()
        now = utc_now()
        await self.db.execute(
            """
            INSERT INTO "TrackImage" (id, url, caption, trackId, uploadedById, createdAt)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            image_id,
            url,
            caption,
            track_id,
            user_id,
            now,
        )
        uploader = await self.db.fetch_one('SELECT id, name FROM "User" WHERE id = ?', user_id)
        return {
            "id": image_id,
            "url": url,
            "caption": caption,
            "createdAt": now,
            "uploadedBy": uploader or {"id": user_id, "name": None},
        }

    async def get_image(self, image_id: str) -> dict | None:
        return await self.db.fetch_one(
            'SELECT id, url, caption, trackId, uploadedById, createdAt FROM "TrackImage" WHERE id = ?',
            image_id,
        )

    async def delete_image(self, image_id: str) -> bool:
        deleted = await self.db.execute('DELETE FROM "TrackImage" WHERE id = ?', image_id)
        return deleted > 0

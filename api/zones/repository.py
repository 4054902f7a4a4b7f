"""
Track zone and zone tip persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database, new_id, utc_now

_ZONE_COLUMNS = "id, name, description, posX, posY, trackId, eventType, createdAt"

# PATCH field name -> column.
EDITABLE_ZONE_FIELDS = {
    "name": "name",
    "description": "description",
}


def _tip_from_row(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": row["id"],
        "content": row["content"],
        "conditions": row["conditions"],
        "zoneId": row["zoneId"],
        "authorId": row["authorId"],
        "createdAt": row["createdAt"],
        "updatedAt": row["updatedAt"],
        "author": {"id": row["authorId"], "name": row["authorName"]},
    }


class ZoneRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_for_track(self, track_id: str, *, event_type: str = "") -> list[dict]:
        """
        Zones of a track in creation order, each with its `tips` (newest
        first). `event_type` narrows the zones when given.
        """
        sql = f'SELECT {_ZONE_COLUMNS} FROM "TrackZone" WHERE trackId = ?'
        args: list[Any] = [track_id]
        if event_type:
            sql += " AND eventType = ?"
            args.append(event_type)
        sql += " ORDER BY createdAt, rowid"

        zones = await self.db.fetch_all(sql, *args)
        tips_by_zone = await self._tips_for_zones([z["id"] for z in zones])
        for zone in zones:
            zone["tips"] = tips_by_zone.get(zone["id"], [])
        return zones

    async def get_for_track(self, zone_id: str, *, track_id: str) -> dict | None:
        return await self.db.fetch_one(
            f'SELECT {_ZONE_COLUMNS} FROM "TrackZone" WHERE id = ? AND trackId = ?',
            zone_id,
            track_id,
        )

    async def get_with_tips(self, zone_id: str) -> dict | None:
        zone = await self.db.fetch_one(
            f'SELECT {_ZONE_COLUMNS} FROM "TrackZone" WHERE id = ?',
            zone_id,
        )
        if zone is None:
            return None
        zone["tips"] = await self.list_tips(zone_id)
        return zone

    async def create(
        self,
        *,
        name: str,
        description: str | None,
        pos_x: float,
        pos_y: float,
        event_type: str | None,
        track_id: str,
    ) -> dict:
        zone_id = new_id()
        now = utc_now()
        await self.db.execute(
            """
            INSERT INTO "TrackZone" (id, name, description, posX, posY, trackId, eventType, createdAt)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            zone_id,
            name,
            description,
            pos_x,
            pos_y,
            track_id,
            event_type,
            now,
        )
        return {
            "id": zone_id,
            "name": name,
            "description": description,
            "posX": pos_x,
            "posY": pos_y,
            "trackId": track_id,
            "eventType": event_type,
            "createdAt": now,
            "tips": [],
        }

    async def update(self, zone_id: str, changes: dict[str, Any]) -> dict | None:
        sets = []
        args: list[Any] = []
        for field_name, value in changes.items():
            column = EDITABLE_ZONE_FIELDS.get(field_name)
            if column is None:
                continue
            sets.append(f"{column} = ?")
            args.append(value)

        if sets:
            args.append(zone_id)
            await self.db.execute(
                f'UPDATE "TrackZone" SET {", ".join(sets)} WHERE id = ?',
                *args,
            )
        return await self.get_with_tips(zone_id)

    async def delete(self, zone_id: str) -> bool:
        deleted = await self.db.execute('DELETE FROM "TrackZone" WHERE id = ?', zone_id)
        return deleted > 0

    async def list_tips(self, zone_id: str) -> list[dict]:
        rows = await self.db.fetch_all(
            """
            SELECT zt.id, zt.content, zt.conditions, zt.zoneId, zt.authorId,
                   zt.createdAt, zt.updatedAt, u.name AS authorName
            FROM "ZoneTip" zt
            JOIN "User" u ON u.id = zt.authorId
            WHERE zt.zoneId = ?
            ORDER BY zt.createdAt DESC, zt.rowid DESC
            """,
            zone_id,
        )
        return [_tip_from_row(row) for row in rows]

    async def _tips_for_zones(self, zone_ids: list[str]) -> dict[str, list[dict]]:
        if not zone_ids:
            return {}
        placeholders = ", ".join("?" for _ in zone_ids)
        rows = await self.db.fetch_all(
            f"""
            SELECT zt.id, zt.content, zt.conditions, zt.zoneId, zt.authorId,
                   zt.createdAt, zt.updatedAt, u.name AS authorName
            FROM "ZoneTip" zt
            JOIN "User" u ON u.id = zt.authorId
            WHERE zt.zoneId IN ({placeholders})
            ORDER BY zt.createdAt DESC, zt.rowid DESC
            """,
            *zone_ids,
        )
        grouped: dict[str, list[dict]] = {}
        for row in rows:
            grouped.setdefault(row["zoneId"], []).append(_tip_from_row(row))
        return grouped

    async def create_tip(
        self,
        *,
        content: str,
        conditions: str | None,
        zone_id: str,
        author_id: str,
    ) -> dict:
        tip_id = new_id()
        now = utc_now()
        await self.db.execute(
            """
            INSERT INTO "ZoneTip" (id, content, conditions, zoneId, authorId, createdAt, updatedAt)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            tip_id,
            content,
            conditions,
            zone_id,
            author_id,
            now,
            now,
        )
        author = await self.db.fetch_one('SELECT id, name FROM "User" WHERE id = ?', author_id)
        return {
            "id": tip_id,
            "content": content,
            "conditions": conditions,
            "zoneId": zone_id,
            "authorId": author_id,
            "createdAt": now,
            "updatedAt": now,
            "author": author or {"id": author_id, "name": None},
        }

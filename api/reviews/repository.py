"""
Track review persistence.

Reviews are returned with a denormalised author (brief + cars) and the
event they were written for, assembled from separate reads.
"""

from __future__ import annotations

from typing import Any

from core.db import Database, new_id, utc_now

_REVIEW_COLUMNS = """
    r.id, r.rating, r.content, r.conditions, r.trackId, r.trackEventId,
    r.authorId, r.createdAt, r.updatedAt
"""


class ReviewRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_for_track(self, track_id: str) -> list[dict]:
        rows = await self.db.fetch_all(
            f"""
            SELECT {_REVIEW_COLUMNS},
                   u.name AS authorName, u.experience AS authorExperience
            FROM "TrackReview" r
            JOIN "User" u ON u.id = r.authorId
            WHERE r.trackId = ?
            ORDER BY r.createdAt DESC, r.rowid DESC
            """,
            track_id,
        )

        cars_by_author: dict[str, list[dict]] = {}
        for author_id in {row["authorId"] for row in rows}:
            cars_by_author[author_id] = await self._author_cars(author_id)

        events_by_id = await self._events_by_id(
            [row["trackEventId"] for row in rows if row["trackEventId"]]
        )

        reviews = []
        for row in rows:
            review = {
                key: row[key]
                for key in (
                    "id",
                    "rating",
                    "content",
                    "conditions",
                    "trackId",
                    "trackEventId",
                    "authorId",
                    "createdAt",
                    "updatedAt",
                )
            }
            review["author"] = {
                "id": row["authorId"],
                "name": row["authorName"],
                "experience": row["authorExperience"],
                "cars": cars_by_author.get(row["authorId"], []),
            }
            review["trackEvent"] = events_by_id.get(row["trackEventId"]) if row["trackEventId"] else None
            reviews.append(review)
        return reviews

    async def create(
        self,
        *,
        rating: int,
        content: str | None,
        conditions: str,
        track_id: str,
        track_event_id: str | None,
        author_id: str,
    ) -> dict:
        review_id = new_id()
        now = utc_now()
        await self.db.execute(
            """
            INSERT INTO "TrackReview" (id, rating, content, conditions, trackId, trackEventId,
                                       authorId, createdAt, updatedAt)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            review_id,
            rating,
            content,
            conditions,
            track_id,
            track_event_id,
            author_id,
            now,
            now,
        )

        author = await self.db.fetch_one(
            'SELECT id, name, experience FROM "User" WHERE id = ?',
            author_id,
        ) or {"id": author_id, "name": None, "experience": None}
        author["cars"] = await self._author_cars(author_id)

        track_event = None
        if track_event_id:
            track_event = await self.db.fetch_one(
                'SELECT id, eventType, trackId FROM "TrackEvent" WHERE id = ?',
                track_event_id,
            )

        return {
            "id": review_id,
            "rating": rating,
            "content": content,
            "conditions": conditions,
            "trackId": track_id,
            "trackEventId": track_event_id,
            "authorId": author_id,
            "createdAt": now,
            "updatedAt": now,
            "author": author,
            "trackEvent": track_event,
        }

    async def _author_cars(self, author_id: str) -> list[dict]:
        return await self.db.fetch_all(
            """
            SELECT make, model, year
            FROM "Car"
            WHERE userId = ?
            ORDER BY createdAt DESC, rowid DESC
            """,
            author_id,
        )

    async def _events_by_id(self, event_ids: list[str]) -> dict[str, dict[str, Any]]:
        if not event_ids:
            return {}
        unique_ids = sorted(set(event_ids))
        placeholders = ", ".join("?" for _ in unique_ids)
        rows = await self.db.fetch_all(
            f'SELECT id, eventType, trackId FROM "TrackEvent" WHERE id IN ({placeholders})',
            *unique_ids,
        )
        return {row["id"]: row for row in rows}

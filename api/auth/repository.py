"""
User persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database, new_id, utc_now

SYSTEM_USER_EMAIL = "system@trackside.local"
SYSTEM_USER_NAME = "Trackside System"

_USER_COLUMNS = """
    id, name, email, passwordHash, image, experience, createdAt, updatedAt
"""


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def get_by_email(self, email: str) -> dict | None:
        return await self.db.fetch_one(
            f'SELECT {_USER_COLUMNS} FROM "User" WHERE email = ?',
            normalize_email(email),
        )

    async def get_by_id(self, user_id: str) -> dict | None:
        return await self.db.fetch_one(
            f'SELECT {_USER_COLUMNS} FROM "User" WHERE id = ?',
            user_id,
        )

    async def create(self, *, name: str, email: str, password_hash: str) -> dict:
        user_id = new_id()
        now = utc_now()
        await self.db.execute(
            """
            INSERT INTO "User" (id, name, email, passwordHash, experience, createdAt, updatedAt)
            VALUES (?, ?, ?, ?, 'BEGINNER', ?, ?)
            """,
            user_id,
            name,
            normalize_email(email),
            password_hash,
            now,
            now,
        )
        row = await self.get_by_id(user_id)
        if row is None:
            raise RuntimeError("Failed to create user.")
        return row

    async def update_profile(self, user_id: str, *, name: str, experience: str) -> dict | None:
        await self.db.execute(
            """
            UPDATE "User"
            SET name = ?, experience = ?, updatedAt = ?
            WHERE id = ?
            """,
            name,
            experience,
            utc_now(),
            user_id,
        )
        return await self.get_by_id(user_id)

    async def activity_counts(self, user_id: str) -> dict[str, int]:
        row = await self.db.fetch_one(
            """
            SELECT
              (SELECT count(*) FROM "TrackReview" WHERE authorId = ?) AS trackReviews,
              (SELECT count(*) FROM "LapRecord" WHERE driverId = ?) AS lapRecords,
              (SELECT count(*) FROM "Track" WHERE uploadedById = ?) AS tracks,
              (SELECT count(*) FROM "ZoneTip" WHERE authorId = ?) AS zoneTips
            """,
            user_id,
            user_id,
            user_id,
            user_id,
        )
        row = row or {}
        return {
            "trackReviews": int(row.get("trackReviews") or 0),
            "lapRecords": int(row.get("lapRecords") or 0),
            "tracks": int(row.get("tracks") or 0),
            "zoneTips": int(row.get("zoneTips") or 0),
        }

    async def get_or_create_system_user(self) -> dict:
        """
        Owner of imported tracks. Has no password, so it can never log in.
        """
        existing = await self.get_by_email(SYSTEM_USER_EMAIL)
        if existing is not None:
            return existing

        user_id = new_id()
        now = utc_now()
        await self.db.execute(
            """
            INSERT INTO "User" (id, name, email, emailVerified, experience, createdAt, updatedAt)
            VALUES (?, ?, ?, ?, 'BEGINNER', ?, ?)
            ON CONFLICT (email) DO NOTHING
            """,
            user_id,
            SYSTEM_USER_NAME,
            SYSTEM_USER_EMAIL,
            now,
            now,
            now,
        )
        row = await self.get_by_email(SYSTEM_USER_EMAIL)
        if row is None:
            raise RuntimeError("Failed to create system user.")
        return row

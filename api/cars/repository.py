"""
Car and car-mod persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database, new_id, utc_now

_CAR_COLUMNS = "id, make, model, year, userId, createdAt, updatedAt"
_MOD_COLUMNS = "id, name, category, notes, carId"


class CarRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_for_user(self, user_id: str) -> list[dict]:
        """
        Cars owned by the user, newest first, each with its `mods`.
        """
        cars = await self.db.fetch_all(
            f"""
            SELECT {_CAR_COLUMNS}
            FROM "Car"
            WHERE userId = ?
            ORDER BY createdAt DESC, rowid DESC
            """,
            user_id,
        )
        mods_by_car = await self._mods_for_cars([c["id"] for c in cars])
        for car in cars:
            car["mods"] = mods_by_car.get(car["id"], [])
        return cars

    async def get_for_user(self, car_id: str, *, user_id: str) -> dict | None:
        """
        The car if it exists and belongs to `user_id`; otherwise None.
        """
        car = await self.db.fetch_one(
            f'SELECT {_CAR_COLUMNS} FROM "Car" WHERE id = ? AND userId = ?',
            car_id,
            user_id,
        )
        if car is None:
            return None
        car["mods"] = await self.list_mods(car_id)
        return car

    async def exists_for_user(self, car_id: str, *, user_id: str) -> bool:
        row = await self.db.fetch_one(
            'SELECT 1 AS ok FROM "Car" WHERE id = ? AND userId = ? LIMIT 1',
            car_id,
            user_id,
        )
        return row is not None

    async def create(self, *, make: str, model: str, year: int, user_id: str) -> dict:
        car_id = new_id()
        now = utc_now()
        await self.db.execute(
            """
            INSERT INTO "Car" (id, make, model, year, userId, createdAt, updatedAt)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            car_id,
            make,
            model,
            year,
            user_id,
            now,
            now,
        )
        return {
            "id": car_id,
            "make": make,
            "model": model,
            "year": year,
            "userId": user_id,
            "createdAt": now,
            "updatedAt": now,
            "mods": [],
        }

    async def update(self, car_id: str, *, make: str, model: str, year: int, user_id: str) -> dict | None:
        await self.db.execute(
            """
            UPDATE "Car"
            SET make = ?, model = ?, year = ?, updatedAt = ?
            WHERE id = ? AND userId = ?
            """,
            make,
            model,
            year,
            utc_now(),
            car_id,
            user_id,
        )
        return await self.get_for_user(car_id, user_id=user_id)

    async def delete(self, car_id: str, *, user_id: str) -> bool:
        deleted = await self.db.execute(
            'DELETE FROM "Car" WHERE id = ? AND userId = ?',
            car_id,
            user_id,
        )
        return deleted > 0

    async def list_mods(self, car_id: str) -> list[dict]:
        return await self.db.fetch_all(
            f'SELECT {_MOD_COLUMNS} FROM "CarMod" WHERE carId = ? ORDER BY rowid',
            car_id,
        )

    async def _mods_for_cars(self, car_ids: list[str]) -> dict[str, list[dict]]:
        if not car_ids:
            return {}
        placeholders = ", ".join("?" for _ in car_ids)
        rows = await self.db.fetch_all(
            f"""
            SELECT {_MOD_COLUMNS}
            FROM "CarMod"
            WHERE carId IN ({placeholders})
            ORDER BY rowid
            """,
            *car_ids,
        )
        grouped: dict[str, list[dict]] = {}
        for row in rows:
            grouped.setdefault(row["carId"], []).append(row)
        return grouped

    async def create_mod(self, *, name: str, category: str, notes: str | None, car_id: str) -> dict:
        mod_id = new_id()
        await self.db.execute(
            """
            INSERT INTO "CarMod" (id, name, category, notes, carId)
            VALUES (?, ?, ?, ?, ?)
            """,
            mod_id,
            name,
            category,
            notes,
            car_id,
        )
        return {
            "id": mod_id,
            "name": name,
            "category": category,
            "notes": notes,
            "carId": car_id,
        }

    async def get_mod(self, mod_id: str, *, car_id: str) -> dict | None:
        return await self.db.fetch_one(
            f'SELECT {_MOD_COLUMNS} FROM "CarMod" WHERE id = ? AND carId = ?',
            mod_id,
            car_id,
        )

    async def delete_mod(self, mod_id: str, *, car_id: str) -> bool:
        deleted = await self.db.execute(
            'DELETE FROM "CarMod" WHERE id = ? AND carId = ?',
            mod_id,
            car_id,
        )
        return deleted > 0

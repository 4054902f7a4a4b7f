"""
Car and mod business logic.

Ownership misses answer 404 exactly like a missing car, so a caller can't
learn which car ids exist.
"""

from __future__ import annotations

from core import validation
from core.errors import NotFoundError, ValidationError

from . import schemas
from .repository import CarRepository


def _validate_car(payload: schemas.CarRequest) -> tuple[str, str, int]:
    make = payload.make.strip()
    model = payload.model.strip()
    if not make or not model:
        raise ValidationError("Make and model are required")
    if not validation.valid_car_year(payload.year):
        raise ValidationError(
            f"Year must be between {validation.MIN_CAR_YEAR} and {validation.MAX_CAR_YEAR}"
        )
    return make, model, payload.year


async def _require_owned_car(cars: CarRepository, car_id: str, *, user_id: str) -> dict:
    car = await cars.get_for_user(car_id, user_id=user_id)
    if car is None:
        raise NotFoundError("Car not found")
    return car


async def list_cars(cars: CarRepository, *, user_id: str) -> list[dict]:
    return await cars.list_for_user(user_id)


async def create_car(cars: CarRepository, payload: schemas.CarRequest, *, user_id: str) -> dict:
    make, model, year = _validate_car(payload)
    return await cars.create(make=make, model=model, year=year, user_id=user_id)


async def update_car(
    cars: CarRepository,
    car_id: str,
    payload: schemas.CarRequest,
    *,
    user_id: str,
) -> dict:
    await _require_owned_car(cars, car_id, user_id=user_id)
    make, model, year = _validate_car(payload)

    updated = await cars.update(car_id, make=make, model=model, year=year, user_id=user_id)
    if updated is None:
        raise NotFoundError("Car not found")
    return updated


async def delete_car(cars: CarRepository, car_id: str, *, user_id: str) -> dict:
    await _require_owned_car(cars, car_id, user_id=user_id)
    await cars.delete(car_id, user_id=user_id)
    return {"success": True}


async def create_mod(
    cars: CarRepository,
    car_id: str,
    payload: schemas.CarModRequest,
    *,
    user_id: str,
) -> dict:
    await _require_owned_car(cars, car_id, user_id=user_id)

    name = payload.name.strip()
    if not name:
        raise ValidationError("Mod name is required")
    if not validation.valid_mod_category(payload.category):
        raise ValidationError("Invalid mod category")

    return await cars.create_mod(
        name=name,
        category=payload.category,
        notes=payload.notes,
        car_id=car_id,
    )


async def delete_mod(cars: CarRepository, car_id: str, mod_id: str, *, user_id: str) -> dict:
    await _require_owned_car(cars, car_id, user_id=user_id)

    mod = await cars.get_mod(mod_id, car_id=car_id)
    if mod is None:
        raise NotFoundError("Mod not found")

    await cars.delete_mod(mod_id, car_id=car_id)
    return {"success": True}

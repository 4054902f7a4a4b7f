"""
Garage endpoints: cars and their modifications. All routes require auth.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies
from core.db import Database, get_db

from . import schemas, service
from .repository import CarRepository

router = APIRouter()


def get_car_repository(db: Database = Depends(get_db)) -> CarRepository:
    return CarRepository(db)


@router.get("/cars")
async def list_cars(
    cars: CarRepository = Depends(get_car_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> list[dict]:
    return await service.list_cars(cars, user_id=current_user["id"])


@router.post("/cars", status_code=status.HTTP_201_CREATED)
async def create_car(
    payload: schemas.CarRequest,
    cars: CarRepository = Depends(get_car_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.create_car(cars, payload, user_id=current_user["id"])


@router.put("/cars/{car_id}")
async def update_car(
    car_id: str,
    payload: schemas.CarRequest,
    cars: CarRepository = Depends(get_car_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.update_car(cars, car_id, payload, user_id=current_user["id"])


@router.delete("/cars/{car_id}")
async def delete_car(
    car_id: str,
    cars: CarRepository = Depends(get_car_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.delete_car(cars, car_id, user_id=current_user["id"])


@router.post("/cars/{car_id}/mods", status_code=status.HTTP_201_CREATED)
async def create_mod(
    car_id: str,
    payload: schemas.CarModRequest,
    cars: CarRepository = Depends(get_car_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.create_mod(cars, car_id, payload, user_id=current_user["id"])


@router.delete("/cars/{car_id}/mods/{mod_id}")
async def delete_mod(
    car_id: str,
    mod_id: str,
    cars: CarRepository = Depends(get_car_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.delete_mod(cars, car_id, mod_id, user_id=current_user["id"])

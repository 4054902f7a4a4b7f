"""
Profile endpoints for the authenticated caller.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from auth.repository import UserRepository
from cars.repository import CarRepository
from cars.router import get_car_repository

from . import schemas, service

router = APIRouter()


@router.get("/profile")
async def get_profile(
    users: UserRepository = Depends(auth_dependencies.get_user_repository),
    cars: CarRepository = Depends(get_car_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_profile(users, cars, user_id=current_user["id"])


@router.put("/profile")
async def update_profile(
    payload: schemas.ProfileUpdateRequest,
    users: UserRepository = Depends(auth_dependencies.get_user_repository),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.update_profile(users, payload, user_id=current_user["id"])

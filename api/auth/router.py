"""
Registration and login endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.config import Settings, get_settings

from . import schemas, service
from .dependencies import get_user_repository
from .repository import UserRepository

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: schemas.RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> dict:
    return await service.register(users, payload, settings=settings)


@router.post("/auth/login")
async def login(
    payload: schemas.LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> dict:
    return await service.login(users, payload, settings=settings)

"""
Profile read/update for the calling user.
"""

from __future__ import annotations

from auth.repository import UserRepository
from cars.repository import CarRepository
from core import validation
from core.errors import NotFoundError, ValidationError

from . import schemas


async def get_profile(users: UserRepository, cars: CarRepository, *, user_id: str) -> dict:
    user = await users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")

    return {
        "id": user["id"],
        "name": user["name"],
        "email": user["email"],
        "experience": user["experience"],
        "image": user["image"],
        "createdAt": user["createdAt"],
        "cars": await cars.list_for_user(user_id),
        "_count": await users.activity_counts(user_id),
    }


async def update_profile(
    users: UserRepository,
    payload: schemas.ProfileUpdateRequest,
    *,
    user_id: str,
) -> dict:
    name = payload.name.strip()
    if not validation.has_min_length(name, 2):
        raise ValidationError("Name must be at least 2 characters")
    if not validation.valid_experience_level(payload.experience):
        raise ValidationError("Invalid experience level")

    user = await users.update_profile(user_id, name=name, experience=payload.experience)
    if user is None:
        raise NotFoundError("User not found")

    return {
        "id": user["id"],
        "name": user["name"],
        "email": user["email"],
        "experience": user["experience"],
    }

"""
Enum vocabularies and small pure validators shared by the feature services.
"""

from __future__ import annotations

from enum import Enum
from urllib.parse import urlsplit


class ExperienceLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    PRO = "PRO"


class ModCategory(str, Enum):
    ENGINE = "ENGINE"
    SUSPENSION = "SUSPENSION"
    AERO = "AERO"
    BRAKES = "BRAKES"
    WHEELS_TIRES = "WHEELS_TIRES"
    DRIVETRAIN = "DRIVETRAIN"
    EXHAUST = "EXHAUST"
    INTERIOR = "INTERIOR"
    EXTERIOR = "EXTERIOR"
    ELECTRONICS = "ELECTRONICS"
    OTHER = "OTHER"


class TrackStatus(str, Enum):
    # PENDING and REJECTED exist for moderation; nothing sets them yet.
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class EventType(str, Enum):
    AUTOCROSS = "AUTOCROSS"
    ROADCOURSE = "ROADCOURSE"
    DRIFT = "DRIFT"
    DRAG = "DRAG"


class DrivingCondition(str, Enum):
    DRY = "DRY"
    WET = "WET"


MIN_CAR_YEAR = 1900
MAX_CAR_YEAR = 2030
MIN_RATING = 1
MAX_RATING = 5
MIN_POSITION = 0.0
MAX_POSITION = 100.0


def _is_member(enum_cls: type[Enum], value: str | None) -> bool:
    if value is None:
        return False
    return value in enum_cls._value2member_map_


def valid_experience_level(value: str | None) -> bool:
    return _is_member(ExperienceLevel, value)


def valid_mod_category(value: str | None) -> bool:
    return _is_member(ModCategory, value)


def valid_event_type(value: str | None) -> bool:
    return _is_member(EventType, value)


def valid_driving_condition(value: str | None) -> bool:
    return _is_member(DrivingCondition, value)


def valid_car_year(year: int) -> bool:
    return MIN_CAR_YEAR <= year <= MAX_CAR_YEAR


def valid_rating(rating: int) -> bool:
    return MIN_RATING <= rating <= MAX_RATING


def valid_position(value: float) -> bool:
    return MIN_POSITION <= value <= MAX_POSITION


def valid_image_url(url: str | None) -> bool:
    """
    Accept absolute URLs (scheme + host) and server-relative paths such as
    the `/uploads/tracks/...` URLs returned by the upload endpoint.
    """
    raw = (url or "").strip()
    if not raw:
        return False
    if raw.startswith("/"):
        return not raw.startswith("//")
    parts = urlsplit(raw)
    return bool(parts.scheme) and bool(parts.netloc)


def has_min_length(value: str | None, length: int) -> bool:
    return len(value or "") >= length

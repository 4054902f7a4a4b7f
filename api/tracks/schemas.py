"""
Pydantic schemas for track and track-image endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TrackCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", max_length=200)
    location: str = Field(default="", max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    image_url: str | None = Field(default=None, alias="imageUrl", max_length=2000)
    event_types: list[str] = Field(default_factory=list, alias="eventTypes")


class TrackUpdateRequest(BaseModel):
    """
    Partial update: fields left out (or null) keep their stored value.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, max_length=200)
    location: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    image_url: str | None = Field(default=None, alias="imageUrl", max_length=2000)


class TrackImageRequest(BaseModel):
    url: str = Field(default="", max_length=2000)
    caption: str | None = Field(default=None, max_length=500)

"""
Pydantic schemas for zone and tip endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ZoneCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    pos_x: float = Field(default=0, alias="posX")
    pos_y: float = Field(default=0, alias="posY")
    event_type: str | None = Field(default=None, alias="eventType")


class ZoneUpdateRequest(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=2000)


class ZoneTipRequest(BaseModel):
    content: str = Field(default="", max_length=5000)
    conditions: str | None = None

"""
Pydantic schemas for car and mod endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CarRequest(BaseModel):
    make: str = Field(default="", max_length=100)
    model: str = Field(default="", max_length=100)
    year: int = 0


class CarModRequest(BaseModel):
    name: str = Field(default="", max_length=200)
    category: str = ""
    notes: str | None = Field(default=None, max_length=2000)

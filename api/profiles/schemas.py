from __future__ import annotations

from pydantic import BaseModel, Field


class ProfileUpdateRequest(BaseModel):
    name: str = Field(default="", max_length=100)
    experience: str = ""

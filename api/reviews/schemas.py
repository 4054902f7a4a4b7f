"""
Pydantic schema for review submission.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ReviewRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rating: int = 0
    content: str | None = Field(default=None, max_length=5000)
    conditions: str = ""
    track_event_id: str | None = Field(default=None, alias="trackEventId")

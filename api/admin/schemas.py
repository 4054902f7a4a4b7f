"""
Shape of the imported-tracks data file (`usa-tracks.json`).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ImportedTrack(BaseModel):
    name: str = ""
    location: str = ""
    state: str | None = None
    types: list[str] = Field(default_factory=list)
    latitude: float | None = None
    longitude: float | None = None
    description: str | None = None


class ImportedTracksFile(BaseModel):
    tracks: list[ImportedTrack] = Field(default_factory=list)

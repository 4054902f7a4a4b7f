"""
Pydantic schema for lap record submission.

Telemetry values are optional numbers stored verbatim; only their type is
checked.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .repository import TELEMETRY_COLUMNS


class LapRecordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lap_time: str = Field(default="", alias="lapTime", max_length=50)
    conditions: str = ""
    notes: str | None = Field(default=None, max_length=5000)
    track_id: str = Field(default="", alias="trackId")
    track_event_id: str | None = Field(default=None, alias="trackEventId")
    car_id: str = Field(default="", alias="carId")

    tire_pressure_fl: float | None = Field(default=None, alias="tirePressureFL")
    tire_pressure_fr: float | None = Field(default=None, alias="tirePressureFR")
    tire_pressure_rl: float | None = Field(default=None, alias="tirePressureRL")
    tire_pressure_rr: float | None = Field(default=None, alias="tirePressureRR")
    fuel_level: float | None = Field(default=None, alias="fuelLevel")
    camber_fl: float | None = Field(default=None, alias="camberFL")
    camber_fr: float | None = Field(default=None, alias="camberFR")
    camber_rl: float | None = Field(default=None, alias="camberRL")
    camber_rr: float | None = Field(default=None, alias="camberRR")
    caster_fl: float | None = Field(default=None, alias="casterFL")
    caster_fr: float | None = Field(default=None, alias="casterFR")
    toe_fl: float | None = Field(default=None, alias="toeFL")
    toe_fr: float | None = Field(default=None, alias="toeFR")
    toe_rl: float | None = Field(default=None, alias="toeRL")
    toe_rr: float | None = Field(default=None, alias="toeRR")

    def telemetry(self) -> dict[str, float | None]:
        values = self.model_dump(by_alias=True)
        return {column: values[column] for column in TELEMETRY_COLUMNS}

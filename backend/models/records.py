from __future__ import annotations
from datetime import date, datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

FuelType = Literal["diesel", "coal", "natural_gas", "propane", "none"]

FUEL_TYPES = ("diesel", "coal", "natural_gas", "propane", "none")

# camelCase spellings used by older clients
FUEL_ALIASES = {
    "naturalgas": "natural_gas",
    "natural-gas": "natural_gas",
    "natural gas": "natural_gas",
}

FUEL_UNITS = {
    "diesel": "L",
    "coal": "kg",
    "natural_gas": "m³",
    "propane": "L",
}


def normalize_fuel_type(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    key = value.strip().lower()
    return FUEL_ALIASES.get(key, key)


def normalize_date(value: Any) -> Any:
    """Turn date/datetime values into the YYYY-MM-DD string the engine expects."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date().isoformat()
        except ValueError:
            raise ValueError(f"date must be a real YYYY-MM-DD calendar day, got {value!r}")
    return value


class RecordIn(BaseModel):
    """Payload for a new day of operational data (the store assigns the id)."""

    date: str
    electricity_kwh: float = Field(0.0, ge=0)
    fuel_type: FuelType = "none"
    fuel_amount: float = Field(0.0, ge=0)
    production_units: float = Field(0.0, ge=0)
    production_hours: float = Field(0.0, ge=0)
    thermal_image_description: Optional[str] = None
    acoustic_analysis_summary: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, v):
        return normalize_date(v)

    @field_validator("fuel_type", mode="before")
    @classmethod
    def _coerce_fuel(cls, v):
        return normalize_fuel_type(v)

    @model_validator(mode="after")
    def _no_fuel_no_amount(self):
        # a "none" day never carries a fuel quantity
        if self.fuel_type == "none":
            self.fuel_amount = 0.0
        return self


class OperationalRecord(RecordIn):
    id: str


class DiagnosticsUpdate(BaseModel):
    thermal_image_description: Optional[str] = None
    acoustic_analysis_summary: Optional[str] = None


class RecordsResponse(BaseModel):
    status: str = "success"
    total: int
    records: List[OperationalRecord]

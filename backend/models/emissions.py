# models/emissions.py
from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.records import RecordIn

# Fixed source order used by every breakdown
SOURCES = ("electricity", "diesel", "coal", "natural_gas", "propane")


class EmissionFactors(BaseModel):
    """kg CO2e per unit: kWh, L diesel, kg coal, m³ natural gas, L propane."""

    model_config = ConfigDict(frozen=True)

    electricity: float = Field(0.82, ge=0)
    diesel: float = Field(2.68, ge=0)
    coal: float = Field(2.42, ge=0)
    natural_gas: float = Field(2.0, ge=0)
    propane: float = Field(1.53, ge=0)

    def factor_for(self, source: str) -> float:
        key = (source or "").strip().lower()
        if key not in SOURCES:
            raise KeyError(f"No emission factor for source '{source}'")
        return float(getattr(self, key))

    def as_table(self) -> Dict[str, float]:
        return {s: self.factor_for(s) for s in SOURCES}


class EmissionResult(BaseModel):
    electricity_emissions: float
    fuel_emissions: float
    total_emissions: float


class BreakdownItem(BaseModel):
    source: str
    emissions_kg: float
    percentage_of_total: float = 0.0


class AggregateEmissionResult(BaseModel):
    total_emissions: float = 0.0
    total_production_units: float = 0.0
    record_count: int = 0
    average_daily_emissions: float = 0.0
    emission_intensity: float = 0.0
    breakdown: List[BreakdownItem] = Field(default_factory=list)


class DailyEmissionPoint(BaseModel):
    date: str
    total_emissions: float


class EmissionsRequest(BaseModel):
    records: List[RecordIn]
    factors: Optional[EmissionFactors] = None


class EmissionsResponse(BaseModel):
    status: str = "success"
    preset: str
    per_record: List[EmissionResult]
    summary: AggregateEmissionResult
    units: str = "kgCO2e"

from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field

from models.ai import EmissionAnalysis
from models.emissions import AggregateEmissionResult


class ReportRow(BaseModel):
    id: str
    date: str
    electricity_kwh: float
    fuel: str  # "50 L" or "-"
    production_units: float
    production_hours: float
    total_emissions: float


class EmissionReport(BaseModel):
    generated_at: str
    period_start: Optional[str] = None
    period_end: Optional[str] = None
    has_content: bool
    summary: AggregateEmissionResult
    analysis: Optional[EmissionAnalysis] = None
    recommendations: List[str] = Field(default_factory=list)
    rows: List[ReportRow] = Field(default_factory=list)

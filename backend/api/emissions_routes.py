# api/emissions_routes.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_factor_table, get_store, get_sync, http_error
from core.emissions import aggregate, compute_record_emissions, daily_series, rounded
from core.exceptions import AppError
from core.interfaces import RecordStore
from core.state import AppStateSync
from models.emissions import (
    AggregateEmissionResult,
    DailyEmissionPoint,
    EmissionResult,
    EmissionsRequest,
    EmissionsResponse,
)
from services.emissions.factors import EmissionFactorTable

router = APIRouter(prefix="/emissions", tags=["emissions"])


@router.post("/estimate", response_model=EmissionsResponse)
def estimate_emissions(
    req: EmissionsRequest, table: EmissionFactorTable = Depends(get_factor_table)
):
    """Stateless: compute for the posted records without touching the store."""
    factors = req.factors or table.factors
    try:
        per_record = [compute_record_emissions(r, factors) for r in req.records]
        summary = aggregate(req.records, factors)
    except AppError as e:
        raise http_error(e, "Emissions estimation failed")

    return EmissionsResponse(
        preset="request" if req.factors else table.name,
        per_record=per_record,
        summary=summary,
    )


@router.get("/summary", response_model=AggregateEmissionResult)
def summary(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    raw: bool = Query(False, description="Skip 2-decimal display rounding"),
    sync: AppStateSync = Depends(get_sync),
    table: EmissionFactorTable = Depends(get_factor_table),
):
    try:
        result = sync.summary(table.factors, start, end)
    except AppError as e:
        raise http_error(e)
    return result if raw else rounded(result)


@router.get("/series", response_model=List[DailyEmissionPoint])
def series(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    sync: AppStateSync = Depends(get_sync),
    table: EmissionFactorTable = Depends(get_factor_table),
):
    try:
        return daily_series(sync.records(start, end), table.factors)
    except AppError as e:
        raise http_error(e)


@router.get("/records/{record_id}", response_model=EmissionResult)
def record_emissions(
    record_id: str,
    store: RecordStore = Depends(get_store),
    table: EmissionFactorTable = Depends(get_factor_table),
):
    try:
        return compute_record_emissions(store.get(record_id), table.factors)
    except AppError as e:
        raise http_error(e)


@router.get("/factors")
def factors(table: EmissionFactorTable = Depends(get_factor_table)):
    return {"status": "success", "data": table.describe()}

# api/reports_routes.py
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from api.deps import get_factor_table, get_sync, http_error
from core.exceptions import AppError
from core.state import AppStateSync
from models.reports import EmissionReport
from services.emissions.factors import EmissionFactorTable
from services.reports import build_report, report_to_csv

router = APIRouter(prefix="/reports", tags=["reports"])


def _report(sync, table, start, end) -> EmissionReport:
    try:
        return build_report(sync.state, table.factors, start, end)
    except AppError as e:
        raise http_error(e)


@router.get("", response_model=EmissionReport)
def report(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    sync: AppStateSync = Depends(get_sync),
    table: EmissionFactorTable = Depends(get_factor_table),
):
    return _report(sync, table, start, end)


@router.get("/csv", response_class=PlainTextResponse)
def report_csv(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    sync: AppStateSync = Depends(get_sync),
    table: EmissionFactorTable = Depends(get_factor_table),
):
    body = report_to_csv(_report(sync, table, start, end))
    return PlainTextResponse(
        body,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="emissions_report.csv"'},
    )

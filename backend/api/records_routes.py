# api/records_routes.py
from __future__ import annotations
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_store, get_sync, http_error
from core.emissions import parse_day
from core.exceptions import AppError
from core.interfaces import RecordStore
from core.state import AppStateSync
from models.records import DiagnosticsUpdate, OperationalRecord, RecordIn, RecordsResponse

router = APIRouter(prefix="/records", tags=["records"])


@router.get("", response_model=RecordsResponse)
def list_records(
    start: Optional[str] = Query(None, description="YYYY-MM-DD, inclusive"),
    end: Optional[str] = Query(None, description="YYYY-MM-DD, inclusive; defaults to start"),
    newest_first: bool = Query(False),
    sync: AppStateSync = Depends(get_sync),
):
    try:
        records = list(sync.records(start, end))
    except AppError as e:
        raise http_error(e)
    if newest_first:
        # unparseable dates sort last
        records.sort(key=lambda r: parse_day(r.date) or date.min, reverse=True)
    return RecordsResponse(total=len(records), records=records)


@router.post("", response_model=OperationalRecord, status_code=201)
def add_record(record: RecordIn, store: RecordStore = Depends(get_store)):
    return store.add(record)


@router.get("/{record_id}", response_model=OperationalRecord)
def get_record(record_id: str, store: RecordStore = Depends(get_store)):
    try:
        return store.get(record_id)
    except AppError as e:
        raise http_error(e)


@router.delete("/{record_id}")
def delete_record(record_id: str, store: RecordStore = Depends(get_store)):
    try:
        store.delete(record_id)
    except AppError as e:
        raise http_error(e)
    return {"status": "success", "deleted": record_id}


@router.put("/{record_id}/diagnostics", response_model=OperationalRecord)
def save_diagnostics(
    record_id: str, body: DiagnosticsUpdate, store: RecordStore = Depends(get_store)
):
    if body.thermal_image_description is None and body.acoustic_analysis_summary is None:
        raise HTTPException(400, "Nothing to update.")
    try:
        return store.update_diagnostics(
            record_id,
            thermal=body.thermal_image_description,
            acoustic=body.acoustic_analysis_summary,
        )
    except AppError as e:
        raise http_error(e)

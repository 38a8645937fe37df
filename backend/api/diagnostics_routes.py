# api/diagnostics_routes.py
from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from api.deps import get_diagnostics, get_store, http_error
from core.exceptions import AppError
from core.interfaces import DiagnosticsProvider, RecordStore
from models.records import OperationalRecord

router = APIRouter(prefix="/diagnostics", tags=["diagnostics"])


@router.post("/{record_id}/thermal", response_model=OperationalRecord)
async def thermal(
    record_id: str,
    file: UploadFile = File(...),
    store: RecordStore = Depends(get_store),
    provider: DiagnosticsProvider = Depends(get_diagnostics),
):
    try:
        store.get(record_id)  # 404 before reading the upload
        content = await file.read()
        text = provider.describe_thermal(content, file.filename or "upload")
        return store.update_diagnostics(record_id, thermal=text)
    except AppError as e:
        raise http_error(e)


@router.post("/{record_id}/acoustic", response_model=OperationalRecord)
async def acoustic(
    record_id: str,
    file: UploadFile = File(...),
    store: RecordStore = Depends(get_store),
    provider: DiagnosticsProvider = Depends(get_diagnostics),
):
    try:
        store.get(record_id)
        content = await file.read()
        text = provider.describe_acoustic(content, file.filename or "upload")
        return store.update_diagnostics(record_id, acoustic=text)
    except AppError as e:
        raise http_error(e)

# api/deps.py
from __future__ import annotations
from typing import Optional

from fastapi import HTTPException, Request

from core.exceptions import (
    AIServiceError,
    APIKeyMissingError,
    AppError,
    InvalidInput,
    RecordNotFoundError,
)
from core.interfaces import DiagnosticsProvider, RecordStore, TextGenerator
from core.state import AppStateSync
from services.emissions.factors import EmissionFactorTable


def app_services(request: Request):
    state = request.app.state
    if not hasattr(state, "store"):
        # Lifespan didn't run (bare TestClient); wire defaults lazily
        from services.bootstrap import build_services

        build_services(request.app)
    return state


def get_store(request: Request) -> RecordStore:
    return app_services(request).store


def get_sync(request: Request) -> AppStateSync:
    return app_services(request).sync


def get_factor_table(request: Request) -> EmissionFactorTable:
    return app_services(request).factors


def get_ai_client(request: Request) -> TextGenerator:
    return app_services(request).ai_client


def get_diagnostics(request: Request) -> DiagnosticsProvider:
    return app_services(request).diagnostics


def http_error(e: AppError, prefix: Optional[str] = None) -> HTTPException:
    """Map the app's error taxonomy onto HTTP status codes."""
    detail = f"{prefix}: {e}" if prefix else str(e)
    if isinstance(e, RecordNotFoundError):
        return HTTPException(status_code=404, detail=detail)
    if isinstance(e, InvalidInput):
        return HTTPException(status_code=400, detail=detail)
    if isinstance(e, APIKeyMissingError):
        return HTTPException(status_code=503, detail=detail)
    if isinstance(e, AIServiceError):
        return HTTPException(status_code=502, detail=detail)
    return HTTPException(status_code=500, detail=detail)

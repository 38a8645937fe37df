from fastapi import APIRouter, Request

from api.deps import app_services
from core.diagnostics_registry import DiagnosticsRegistry

router = APIRouter(prefix="/status", tags=["status"])


@router.get("")
def status(request: Request):
    state = app_services(request)
    return {
        "status": "success",
        "data": {
            "store": type(state.store).__name__,
            "records": len(state.sync.state.records),
            "factors": state.factors.name,
            "ai_configured": bool(getattr(state.ai_client, "api_key", None)),
            "diagnostics": type(state.diagnostics).__name__,
        },
    }


@router.get("/diagnostics")
def diagnostics():
    return {"providers": DiagnosticsRegistry.list_providers()}

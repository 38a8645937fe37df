# core/register_providers.py
from __future__ import annotations
import os
from typing import Any, Callable

from core.diagnostics_registry import DiagnosticsRegistry
from services.diagnostics import StaticDiagnosticsProvider

_registered = False


def _load_settings() -> Any | None:
    """
    Try several config.py shapes in this order:
      1) get_settings() -> instance
      2) settings       -> instance
    Return None if none are available.
    """
    try:
        from config import get_settings  # type: ignore

        return get_settings()
    except Exception:
        pass
    try:
        from config import settings  # type: ignore

        return settings
    except Exception:
        return None


def _get_key(settings_obj: Any, attr_name: str, *env_fallbacks: str) -> str | None:
    """Pull a value from settings object if present; otherwise from env."""
    if settings_obj is not None and hasattr(settings_obj, attr_name):
        val = getattr(settings_obj, attr_name)
        if val:
            return str(val)
    for env in env_fallbacks:
        val = os.getenv(env)
        if val:
            return val
    return None


def _safe_register(name: str, factory: Callable[[], object]) -> None:
    """Don't blow up if already registered (idempotent)."""
    try:
        DiagnosticsRegistry.register(name, factory)
    except ValueError:
        pass


def register_providers() -> None:
    global _registered
    if _registered:
        return

    settings_obj = _load_settings()

    # Baseline stub, always available
    _safe_register("static", lambda: StaticDiagnosticsProvider())

    # Fixed texts from the environment (handy for demos)
    thermal = _get_key(settings_obj, "DIAGNOSTICS_THERMAL_TEXT", "DIAGNOSTICS_THERMAL_TEXT")
    acoustic = _get_key(settings_obj, "DIAGNOSTICS_ACOUSTIC_TEXT", "DIAGNOSTICS_ACOUSTIC_TEXT")
    if thermal or acoustic:
        _safe_register(
            "configured",
            lambda t=thermal, a=acoustic: StaticDiagnosticsProvider(t, a),
        )

    _registered = True


def active_provider():
    register_providers()
    name = _get_key(_load_settings(), "DIAGNOSTICS_PROVIDER", "DIAGNOSTICS_PROVIDER") or "static"
    return DiagnosticsRegistry.get(name)

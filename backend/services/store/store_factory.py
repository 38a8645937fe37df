# services/store/store_factory.py
from __future__ import annotations
from typing import Any, Optional

from core.interfaces import RecordStore
from .json_store import JsonFileRecordStore
from .memory_store import InMemoryRecordStore


def build_store(settings_obj: Optional[Any] = None) -> RecordStore:
    """Pick the backend named by RECORD_STORE ("memory" | "json")."""
    from config import get_data_dir, get_settings

    s = settings_obj or get_settings()
    kind = (getattr(s, "RECORD_STORE", "memory") or "memory").lower().strip()
    if kind == "memory":
        return InMemoryRecordStore()
    if kind == "json":
        return JsonFileRecordStore(get_data_dir() / s.RECORDS_FILE)
    raise ValueError(f"Unknown record store '{kind}'")

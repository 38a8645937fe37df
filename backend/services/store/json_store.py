# services/store/json_store.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import List

from models.records import OperationalRecord
from .memory_store import InMemoryRecordStore

logger = logging.getLogger(__name__)


class JsonFileRecordStore(InMemoryRecordStore):
    """Records kept in memory and written through to a single JSON file."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.path.exists():
            raw = json.loads(self.path.read_text(encoding="utf-8") or "[]")
            self._records = [OperationalRecord.model_validate(r) for r in raw]
            logger.info("Loaded %d records from %s", len(self._records), self.path)

    def _persist(self, records: List[OperationalRecord]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        payload = [r.model_dump() for r in records]
        tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self.path)

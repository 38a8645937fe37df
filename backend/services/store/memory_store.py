# services/store/memory_store.py
from __future__ import annotations
import logging
import threading
import uuid
from typing import Callable, Iterable, List, Optional, Union

from core.exceptions import RecordNotFoundError
from core.interfaces import RecordStore, Snapshot, SnapshotListener
from models.records import OperationalRecord, RecordIn

logger = logging.getLogger(__name__)


class InMemoryRecordStore(RecordStore):
    """
    Process-local record store.

    Every mutation publishes a fresh tuple snapshot to all subscribers.
    Listeners run after the record lock is released, so they may read the
    store. Mutations and their publication are serialized by a second lock,
    so listeners see snapshots in mutation order.
    """

    def __init__(
        self, records: Optional[Iterable[Union[RecordIn, OperationalRecord]]] = None
    ) -> None:
        self._lock = threading.Lock()
        # held from mutation through publish; reentrant so a listener may write
        self._write_lock = threading.RLock()
        self._records: List[OperationalRecord] = []
        self._listeners: List[SnapshotListener] = []
        for r in records or []:
            self._records.append(self._with_id(r))

    @staticmethod
    def _with_id(record: Union[RecordIn, OperationalRecord]) -> OperationalRecord:
        if isinstance(record, OperationalRecord):
            return record
        return OperationalRecord(id=uuid.uuid4().hex, **record.model_dump())

    def _index(self, record_id: str) -> int:
        for i, r in enumerate(self._records):
            if r.id == record_id:
                return i
        raise RecordNotFoundError(f"Record '{record_id}' not found")

    def _persist(self, records: List[OperationalRecord]) -> None:
        """Hook for durable subclasses; runs under the lock, before ``records`` is committed."""

    def _commit(self, records: List[OperationalRecord]) -> None:
        # memory only changes once the write has succeeded
        self._persist(records)
        self._records = records

    def _publish(self) -> None:
        with self._lock:
            snapshot: Snapshot = tuple(self._records)
            listeners = list(self._listeners)
        for listener in listeners:
            listener(snapshot)

    # ---------- RecordStore ----------
    def list(self) -> Snapshot:
        with self._lock:
            return tuple(self._records)

    def get(self, record_id: str) -> OperationalRecord:
        with self._lock:
            return self._records[self._index(record_id)]

    def add(self, record: RecordIn) -> OperationalRecord:
        stored = self._with_id(record)
        with self._write_lock:
            with self._lock:
                self._commit(self._records + [stored])
            logger.info("Added record %s for %s", stored.id, stored.date)
            self._publish()
        return stored

    def delete(self, record_id: str) -> None:
        with self._write_lock:
            with self._lock:
                i = self._index(record_id)
                self._commit(self._records[:i] + self._records[i + 1 :])
            logger.info("Deleted record %s", record_id)
            self._publish()

    def update_diagnostics(
        self,
        record_id: str,
        thermal: Optional[str] = None,
        acoustic: Optional[str] = None,
    ) -> OperationalRecord:
        changes = {}
        if thermal is not None:
            changes["thermal_image_description"] = thermal
        if acoustic is not None:
            changes["acoustic_analysis_summary"] = acoustic
        with self._write_lock:
            with self._lock:
                i = self._index(record_id)
                updated = self._records[i].model_copy(update=changes)
                records = list(self._records)
                records[i] = updated
                self._commit(records)
            self._publish()
        return updated

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register ``listener`` and push the current snapshot to it right away."""
        with self._write_lock:
            with self._lock:
                self._listeners.append(listener)
                snapshot: Snapshot = tuple(self._records)
            listener(snapshot)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

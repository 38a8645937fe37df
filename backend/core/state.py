# core/state.py
"""
Dashboard state, kept in step with the record store by subscription.

The store pushes snapshots; ``AppStateSync`` swaps the snapshot in and
re-runs the pure engine on demand. Nothing here mutates a record.
"""
from __future__ import annotations
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from core.emissions import aggregate, filter_by_date_range
from core.exceptions import InvalidInput
from core.interfaces import RecordStore, Snapshot
from models.ai import EmissionAnalysis, ReductionRecommendations
from models.emissions import AggregateEmissionResult, EmissionFactors

logger = logging.getLogger(__name__)


@dataclass
class LoadingFlags:
    data: bool = True
    analysis: bool = False
    recommendations: bool = False


@dataclass
class AppState:
    records: Snapshot = ()
    analysis: Optional[EmissionAnalysis] = None
    recommendations: Optional[ReductionRecommendations] = None
    loading: LoadingFlags = field(default_factory=LoadingFlags)
    error: Optional[str] = None


def select_window(
    records: Snapshot, start: Optional[str] = None, end: Optional[str] = None
) -> Snapshot:
    """All records when no window is given; ``end`` alone is rejected."""
    if start is None:
        if end is not None:
            raise InvalidInput("end given without start")
        return tuple(records)
    return tuple(filter_by_date_range(records, start, end))


class AppStateSync:
    def __init__(self, store: RecordStore, state: Optional[AppState] = None) -> None:
        self.store = store
        self.state = state or AppState()
        self._lock = threading.Lock()
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(self._on_snapshot)

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        with self._lock:
            self.state.records = snapshot
            self.state.loading.data = False
        logger.debug("State now holds %d records", len(snapshot))

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ---------- AI results ----------
    def begin(self, what: str) -> None:
        with self._lock:
            setattr(self.state.loading, what, True)
            self.state.error = None

    def set_analysis(self, analysis: Optional[EmissionAnalysis]) -> None:
        with self._lock:
            self.state.analysis = analysis
            self.state.loading.analysis = False

    def set_recommendations(self, recs: Optional[ReductionRecommendations]) -> None:
        with self._lock:
            self.state.recommendations = recs
            self.state.loading.recommendations = False

    def set_error(self, message: Optional[str]) -> None:
        with self._lock:
            self.state.error = message
            self.state.loading = LoadingFlags(data=False)

    # ---------- Derived ----------
    def records(self, start: Optional[str] = None, end: Optional[str] = None) -> Snapshot:
        return select_window(self.state.records, start, end)

    def summary(
        self,
        factors: EmissionFactors,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> AggregateEmissionResult:
        return aggregate(self.records(start, end), factors)

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Tuple

from models.records import OperationalRecord, RecordIn

Snapshot = Tuple[OperationalRecord, ...]
SnapshotListener = Callable[[Snapshot], None]


class RecordStore(ABC):
    """Owner of the operational records. Pushes a snapshot after every change."""

    @abstractmethod
    def list(self) -> Snapshot: ...

    @abstractmethod
    def get(self, record_id: str) -> OperationalRecord: ...

    @abstractmethod
    def add(self, record: RecordIn) -> OperationalRecord: ...

    @abstractmethod
    def delete(self, record_id: str) -> None: ...

    @abstractmethod
    def update_diagnostics(
        self,
        record_id: str,
        thermal: Optional[str] = None,
        acoustic: Optional[str] = None,
    ) -> OperationalRecord: ...

    @abstractmethod
    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]: ...


class TextGenerator(ABC):
    """Chat-completion style text generation (the AI collaborator)."""

    @abstractmethod
    async def complete(
        self, messages: List[Dict[str, str]], json_mode: bool = False
    ) -> str: ...


class DiagnosticsProvider(ABC):
    """Turns an uploaded thermal image or audio clip into a short description."""

    @abstractmethod
    def describe_thermal(self, content: bytes, filename: str) -> str: ...

    @abstractmethod
    def describe_acoustic(self, content: bytes, filename: str) -> str: ...

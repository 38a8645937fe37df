# core/diagnostics_registry.py
from typing import Callable, Dict
from core.interfaces import DiagnosticsProvider


class DiagnosticsRegistry:
    _factories: Dict[str, Callable[[], DiagnosticsProvider]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[[], DiagnosticsProvider]) -> None:
        key = name.lower().strip()
        if key in cls._factories:
            raise ValueError(f"Diagnostics provider '{name}' is already registered.")
        cls._factories[key] = factory

    @classmethod
    def get(cls, name: str) -> DiagnosticsProvider:
        key = name.lower().strip()
        if key not in cls._factories:
            raise ValueError(f"Diagnostics provider '{name}' is not registered.")
        return cls._factories[key]()  # create instance

    @classmethod
    def list_providers(cls) -> list[str]:
        return sorted(cls._factories.keys())

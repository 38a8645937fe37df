# services/diagnostics.py
from __future__ import annotations
from typing import Optional

from core.exceptions import InvalidInput
from core.interfaces import DiagnosticsProvider

BASELINE_THERMAL = "Thermal signature across all machinery is within normal operational parameters."
BASELINE_ACOUSTIC = (
    "Acoustic signature is stable. All systems operating within normal sound "
    "parameters. Amplitude matches baseline."
)


def _require_content(content: bytes, filename: str) -> None:
    if not content:
        raise InvalidInput(f"Uploaded file '{filename}' is empty.")


class StaticDiagnosticsProvider(DiagnosticsProvider):
    """
    Stand-in until a real thermal/acoustic model is wired up: always reports
    the baseline description. Swap in another provider through the registry.
    """

    def __init__(
        self,
        thermal_text: Optional[str] = None,
        acoustic_text: Optional[str] = None,
    ) -> None:
        self.thermal_text = thermal_text or BASELINE_THERMAL
        self.acoustic_text = acoustic_text or BASELINE_ACOUSTIC

    def describe_thermal(self, content: bytes, filename: str) -> str:
        _require_content(content, filename)
        return self.thermal_text

    def describe_acoustic(self, content: bytes, filename: str) -> str:
        _require_content(content, filename)
        return self.acoustic_text

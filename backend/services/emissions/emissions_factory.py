# services/emissions/emissions_factory.py
from __future__ import annotations
import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from .factors import EmissionFactorTable

logger = logging.getLogger(__name__)

# Optional curated tables shipped next to this module
PRESETS_DIR = Path(__file__).parent / "presets"

PresetName = Literal[
    "ecovision_default",
    "ecovision_file",
]


@lru_cache(maxsize=8)
def get_factors(
    preset: PresetName = "ecovision_default", path: Optional[str] = None
) -> EmissionFactorTable:
    """
    Return a cached factor table.
    - 'ecovision_default' -> the built-in constants
    - 'ecovision_file'    -> CSV/XLSX at ``path`` (or presets/factors.csv);
                             falls back to the defaults if it can't be parsed
    """
    if preset == "ecovision_default":
        return EmissionFactorTable.defaults()

    if preset == "ecovision_file":
        table_path = Path(path) if path else PRESETS_DIR / "factors.csv"
        try:
            return EmissionFactorTable.from_table(table_path, name="ecovision_file")
        except Exception as e:
            # Fallback so the backend still runs
            logger.warning(
                "Failed to load emission factors from %s: %s. Using defaults.",
                table_path,
                e,
            )
            return EmissionFactorTable.defaults()

    raise ValueError(f"Unknown emission factor preset '{preset}'")


def active_factors() -> EmissionFactorTable:
    """The table selected by EMISSION_FACTORS_PRESET / EMISSION_FACTORS_FILE."""
    from config import get_settings

    settings = get_settings()
    if settings.EMISSION_FACTORS_FILE:
        return get_factors("ecovision_file", settings.EMISSION_FACTORS_FILE)
    return get_factors(settings.EMISSION_FACTORS_PRESET)

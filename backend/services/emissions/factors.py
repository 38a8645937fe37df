# services/emissions/factors.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Optional

from models.emissions import SOURCES, EmissionFactors
from models.records import normalize_fuel_type

# We use pandas if available for CSV/XLSX parsing; otherwise we'll raise a clear error.
try:
    import pandas as pd  # type: ignore
except Exception:
    pd = None  # type: ignore

logger = logging.getLogger(__name__)

# Labels seen in exported factor sheets -> our source keys
_SOURCE_LABELS = {
    "electricity": "electricity",
    "grid electricity": "electricity",
    "power": "electricity",
    "diesel": "diesel",
    "gas oil": "diesel",
    "coal": "coal",
    "natural_gas": "natural_gas",
    "natural gas": "natural_gas",
    "propane": "propane",
    "lpg": "propane",
}


class EmissionFactorTable:
    """
    A named factor table. ``factors`` is what the engine consumes;
    ``name`` and ``source_file`` are reported by /status and /emissions/factors.
    """

    def __init__(
        self,
        factors: Optional[EmissionFactors] = None,
        name: str = "custom",
        source_file: Optional[Path] = None,
    ) -> None:
        self.name = name
        self.factors = factors or EmissionFactors()
        self.source_file = source_file

    @staticmethod
    def _norm_source(label: str) -> Optional[str]:
        key = str(label).strip().lower()
        if key in _SOURCE_LABELS:
            return _SOURCE_LABELS[key]
        key = normalize_fuel_type(key)
        return key if key in SOURCES else None

    # ---------- Loaders ----------
    @classmethod
    def defaults(cls, name: str = "ecovision_default") -> "EmissionFactorTable":
        """The dashboard's built-in constants (kg CO2e per kWh, L, kg, m³, L)."""
        return cls(EmissionFactors(), name=name)

    @classmethod
    def from_table(
        cls, path: str | Path, *, name: Optional[str] = None
    ) -> "EmissionFactorTable":
        """
        Load ``source,factor`` rows from a CSV or XLSX file.
        Column names are matched loosely ("source"/"fuel"/"energy source" and
        "factor"/"kgco2e"/"kg co2e per unit"). Sources the file doesn't mention
        keep their default value.
        """
        if pd is None:
            raise RuntimeError(
                "pandas is required to read factor tables. Install with: pip install pandas openpyxl"
            )

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Emission factor table not found: {path}")

        if path.suffix.lower() in (".xlsx", ".xls"):
            df = pd.read_excel(path)  # type: ignore
        else:
            df = pd.read_csv(path)  # type: ignore

        df.columns = [str(c).strip() for c in df.columns]

        def _col(*cands: str) -> Optional[str]:
            cols = {c.lower(): c for c in df.columns}
            for c in cands:
                if c in cols:
                    return cols[c]
            for want in cands:
                for lc, orig in cols.items():
                    if want in lc:
                        return orig
            return None

        src_col = _col("source", "fuel", "energy source")
        val_col = _col("factor", "kgco2e", "kg co2e")
        if not src_col or not val_col:
            raise RuntimeError(
                f"Could not find source/factor columns in {path}; got {list(df.columns)}"
            )

        found: Dict[str, float] = {}
        for _, row in df.iterrows():
            label, value = row.get(src_col), row.get(val_col)
            if pd.isna(label) or pd.isna(value):
                continue
            source = cls._norm_source(label)
            if source is None:
                continue
            found[source] = float(value)

        if not found:
            raise RuntimeError(f"Could not parse any emission factors from {path}.")

        return cls(
            EmissionFactors(**found),
            name=name or path.stem,
            source_file=path,
        )

    def describe(self) -> dict:
        return {
            "name": self.name,
            "source_file": str(self.source_file) if self.source_file else None,
            "factors": self.factors.as_table(),
        }

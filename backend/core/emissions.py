# core/emissions.py
"""
Emission computation and aggregation.

Everything here is pure: records go in, numbers come out. Records may be
``OperationalRecord`` models or plain dicts with the same keys. Nothing is
rounded internally; use ``round_kg`` at the presentation edge.
"""
from __future__ import annotations
import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from core.exceptions import InvalidInput
from models.emissions import (
    SOURCES,
    AggregateEmissionResult,
    BreakdownItem,
    DailyEmissionPoint,
    EmissionFactors,
    EmissionResult,
)
from models.records import FUEL_TYPES, normalize_fuel_type

logger = logging.getLogger(__name__)

DateLike = Union[str, date]


def _field(record: Any, name: str, default: Any = None) -> Any:
    """Read a field from a model-like object or a mapping."""
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def _quantity(record: Any, name: str) -> float:
    raw = _field(record, name, 0)
    try:
        value = float(raw if raw is not None else 0)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be a number, got {raw!r}")
    # NaN fails this check as well
    if not value >= 0:
        raise InvalidInput(f"{name} must be non-negative, got {raw!r}")
    return value


def _fuel_type(record: Any) -> str:
    raw = _field(record, "fuel_type", "none")
    fuel = normalize_fuel_type(raw if raw is not None else "none")
    if fuel not in FUEL_TYPES:
        raise InvalidInput(f"Unknown fuel_type {raw!r}")
    return fuel


def round_kg(value: float, places: int = 2) -> float:
    """Display rounding for kg CO2e values."""
    return round(float(value), places)


def compute_record_emissions(record: Any, factors: EmissionFactors) -> EmissionResult:
    electricity_kwh = _quantity(record, "electricity_kwh")
    fuel_amount = _quantity(record, "fuel_amount")
    fuel = _fuel_type(record)

    electricity = electricity_kwh * factors.electricity
    fuel_emissions = 0.0 if fuel == "none" else fuel_amount * factors.factor_for(fuel)

    return EmissionResult(
        electricity_emissions=electricity,
        fuel_emissions=fuel_emissions,
        total_emissions=electricity + fuel_emissions,
    )


def parse_day(value: Any) -> Optional[date]:
    """Return the calendar day for a date-like value, or None if it isn't one."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def _bound(value: DateLike, name: str) -> date:
    day = parse_day(value)
    if day is None:
        raise InvalidInput(f"{name} is not a YYYY-MM-DD date: {value!r}")
    return day


def filter_by_date_range(
    records: Iterable[Any], start: DateLike, end: Optional[DateLike] = None
) -> List[Any]:
    """
    Keep records whose date falls in [start, end], inclusive, in input order.
    ``end`` defaults to ``start`` (single-day selection). Records with an
    unparseable date are left out rather than raised.
    """
    lo = _bound(start, "start")
    hi = _bound(end, "end") if end is not None else lo
    if hi < lo:
        raise InvalidInput(f"end ({hi}) is before start ({lo})")

    kept: List[Any] = []
    for record in records:
        day = parse_day(_field(record, "date"))
        if day is None:
            logger.debug("Skipping record with unparseable date: %r", _field(record, "id"))
            continue
        if lo <= day <= hi:
            kept.append(record)
    return kept


def aggregate(records: Iterable[Any], factors: EmissionFactors) -> AggregateEmissionResult:
    per_source: Dict[str, float] = {s: 0.0 for s in SOURCES}
    total = 0.0
    production = 0.0
    count = 0

    for record in records:
        result = compute_record_emissions(record, factors)
        fuel = _fuel_type(record)
        per_source["electricity"] += result.electricity_emissions
        if fuel != "none":
            per_source[fuel] += result.fuel_emissions
        total += result.total_emissions
        production += _quantity(record, "production_units")
        count += 1

    breakdown = [
        BreakdownItem(
            source=source,
            emissions_kg=value,
            percentage_of_total=(value / total * 100.0) if total > 0 else 0.0,
        )
        for source, value in per_source.items()
        if value > 0
    ]

    return AggregateEmissionResult(
        total_emissions=total,
        total_production_units=production,
        record_count=count,
        average_daily_emissions=total / count if count > 0 else 0.0,
        emission_intensity=total / production if production > 0 else 0.0,
        breakdown=breakdown,
    )


def daily_series(records: Iterable[Any], factors: EmissionFactors) -> List[DailyEmissionPoint]:
    """One point per record (chart series), input order, rounded for display."""
    return [
        DailyEmissionPoint(
            date=str(_field(record, "date")),
            total_emissions=round_kg(compute_record_emissions(record, factors).total_emissions),
        )
        for record in records
    ]


def rounded(result: AggregateEmissionResult, places: int = 2) -> AggregateEmissionResult:
    """Copy of an aggregate with every kg/intensity figure rounded for display."""
    return AggregateEmissionResult(
        total_emissions=round_kg(result.total_emissions, places),
        total_production_units=result.total_production_units,
        record_count=result.record_count,
        average_daily_emissions=round_kg(result.average_daily_emissions, places),
        emission_intensity=round_kg(result.emission_intensity, places),
        breakdown=[
            BreakdownItem(
                source=b.source,
                emissions_kg=round_kg(b.emissions_kg, places),
                percentage_of_total=round_kg(b.percentage_of_total, places),
            )
            for b in result.breakdown
        ],
    )


# services/reports.py
from __future__ import annotations
import csv
import io
from datetime import datetime, timezone
from typing import Any, Optional

from core.emissions import (
    aggregate,
    compute_record_emissions,
    round_kg,
    rounded,
)
from core.state import AppState, select_window
from models.emissions import EmissionFactors
from models.records import FUEL_UNITS
from models.reports import EmissionReport, ReportRow

CSV_COLUMNS = [
    "date",
    "electricity_kwh",
    "fuel",
    "production_units",
    "production_hours",
    "total_emissions_kg",
]


def fuel_display(record: Any) -> str:
    fuel = record.fuel_type
    if fuel != "none" and record.fuel_amount > 0:
        return f"{record.fuel_amount:g} {FUEL_UNITS.get(fuel, '')}".rstrip()
    return "-"


def build_report(
    state: AppState,
    factors: EmissionFactors,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> EmissionReport:
    records = select_window(state.records, start, end)

    rows = [
        ReportRow(
            id=r.id,
            date=r.date,
            electricity_kwh=r.electricity_kwh,
            fuel=fuel_display(r),
            production_units=r.production_units,
            production_hours=r.production_hours,
            total_emissions=round_kg(compute_record_emissions(r, factors).total_emissions),
        )
        for r in records
    ]
    recs = state.recommendations.recommendations if state.recommendations else []

    return EmissionReport(
        generated_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        period_start=start,
        period_end=(end or start) if start is not None else None,
        has_content=bool(rows) and state.analysis is not None and state.recommendations is not None,
        summary=rounded(aggregate(records, factors)),
        analysis=state.analysis,
        recommendations=list(recs),
        rows=rows,
    )


def report_to_csv(report: EmissionReport) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(CSV_COLUMNS)
    for row in report.rows:
        writer.writerow(
            [
                row.date,
                row.electricity_kwh,
                row.fuel,
                row.production_units,
                row.production_hours,
                f"{row.total_emissions:.2f}",
            ]
        )
    return buf.getvalue()

# services/ai/prompts.py
from __future__ import annotations
import json
from typing import Any, Dict, Iterable, List

from core.emissions import round_kg
from models.ai import ChatMessage, EmissionAnalysis
from models.emissions import AggregateEmissionResult, EmissionFactors
from models.records import FUEL_UNITS

ANALYSIS_SYSTEM_PROMPT = """You are an expert carbon emission analyst for small industrial factories. Your task is to analyze the provided daily operational data and identify key patterns and inefficiencies. Your analysis should also incorporate findings from advanced diagnostics like thermal imaging and acoustic analysis if they are provided with the data.

Based on the data, you must generate a JSON object with the following structure. Each value must be a string containing a concise paragraph.

{
  "overallEmissionSummary": "string",
  "peakUsageInsights": "string",
  "idleTimeInsights": "string",
  "inefficiencyInsights": "string",
  "abnormalEnergySpikes": "string",
  "potentialSavingsOverview": "string"
}

Analyze the data considering relationships between electricity/fuel consumption and production units/hours. Your analysis should be insightful and tailored to the provided data. Respond ONLY with the valid JSON object."""

RECOMMENDATIONS_SYSTEM_PROMPT = """You are a sustainability consultant for small industrial factories. Based on the provided emission analysis, generate a list of smart, actionable recommendations to reduce the factory's carbon footprint. The analysis may contain insights from thermal and acoustic diagnostics, so your recommendations should reflect those where applicable.

You must generate a JSON object with a single key "recommendations", which is an array of strings. Each string in the array should be a complete recommendation in a single, insightful paragraph.

Example format:
{
  "recommendations": [
    "Install automatic shutdown timers on equipment to cut energy waste during idle periods like pre-production hours or breaks, potentially saving up to 3% of daily energy consumption."
  ]
}

Generate 3-4 distinct and practical recommendations based on the analysis. Respond ONLY with the valid JSON object."""

ASSISTANT_TEMPLATE = """You are Eco, an AI assistant for the EcoVision platform. Your role is to help factory managers by providing direct answers about their carbon emissions data.

You will be given conversation history and a JSON object with the factory's operational data.

**Your primary instruction is to keep your answers extremely concise and to the point.** Do not use filler words or long sentences. Provide only the essential information.

**Calculating Carbon Emissions:**
To calculate total emissions, use the following factors:
- Electricity: {electricity} kg CO2 per kWh
- Diesel: {diesel} kg CO2 per liter
- Coal: {coal} kg CO2 per kg
- Natural Gas: {natural_gas} kg CO2 per m3
- Propane: {propane} kg CO2 per liter

Sum the emissions from all sources for a given period to get the total.

**Guidelines:**
- Answer questions using the provided JSON data. You can calculate totals, averages, or find highs/lows.
- If you perform a calculation (like total emissions), state the result directly (e.g., "Total emissions were 1234 kg CO2.").
- If the data is empty, just say "No data available. Please add records."
- If the data requested isn't available, say so directly.
- **Do not be overly conversational.** Be professional and direct."""


def _get(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def format_record_line(record: Any) -> str:
    line = (
        f"Date: {_get(record, 'date')}, "
        f"Electricity: {_get(record, 'electricity_kwh')} kWh, "
        f"Production: {_get(record, 'production_units')} units, "
        f"Hours: {_get(record, 'production_hours')}h"
    )
    fuel = _get(record, "fuel_type", "none")
    amount = _get(record, "fuel_amount", 0) or 0
    if fuel and fuel != "none" and amount > 0:
        line += f", Fuel: {amount} {FUEL_UNITS.get(fuel, '')} ({fuel})"
    thermal = _get(record, "thermal_image_description")
    if thermal:
        line += f', Thermal Anomaly: "{thermal}"'
    acoustic = _get(record, "acoustic_analysis_summary")
    if acoustic:
        line += f', Acoustic Anomaly: "{acoustic}"'
    return line


def format_summary(summary: AggregateEmissionResult) -> str:
    """Engine figures restated for the model, rounded the way the dashboard shows them."""
    parts = [
        f"Total emissions: {round_kg(summary.total_emissions)} kg CO2e",
        f"Average daily emissions: {round_kg(summary.average_daily_emissions)} kg CO2e",
        f"Emission intensity: {round_kg(summary.emission_intensity)} kg CO2e per unit",
    ]
    if summary.breakdown:
        shares = "; ".join(
            f"{b.source}: {round_kg(b.emissions_kg)} kg ({round_kg(b.percentage_of_total)}%)"
            for b in summary.breakdown
        )
        parts.append(f"Breakdown by source: {shares}")
    return "\n".join(parts)


def build_analysis_messages(
    records: Iterable[Any], summary: AggregateEmissionResult
) -> List[Dict[str, str]]:
    lines = [format_record_line(r) for r in records]
    user = (
        f"Here is the operational data for the last {len(lines)} days:\n"
        + "\n".join(lines)
        + f"\n\nComputed totals for this period:\n{format_summary(summary)}"
    )
    return [
        {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
        {"role": "user", "content": user},
    ]


def build_recommendations_messages(analysis: EmissionAnalysis) -> List[Dict[str, str]]:
    body = json.dumps(analysis.model_dump(by_alias=True), indent=2)
    return [
        {"role": "system", "content": RECOMMENDATIONS_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": f"Here is the analysis of the factory's emissions: {body}",
        },
    ]


def assistant_system_prompt(factors: EmissionFactors) -> str:
    return ASSISTANT_TEMPLATE.format(**factors.as_table())


def build_assistant_messages(
    history: List[ChatMessage],
    records: Iterable[Any],
    summary: AggregateEmissionResult,
    factors: EmissionFactors,
) -> List[Dict[str, str]]:
    """
    System prompt, then the history with the data context appended to the
    last (user) message. The caller checks that the last message is a user turn.
    """
    turns = [{"role": m.role, "content": m.content} for m in history]
    last = turns.pop()

    rows = [r.model_dump() if hasattr(r, "model_dump") else dict(r) for r in records]
    if rows:
        context = (
            "Here is the user's operational data for context:\n"
            + json.dumps(rows, indent=2, ensure_ascii=False)
            + f"\n\n{format_summary(summary)}"
        )
    else:
        context = "Context: The user has not provided any operational data yet."

    last["content"] = f"{last['content']}\n\n[CONTEXT FOR AI]\n{context}\n[/CONTEXT FOR AI]"
    return [{"role": "system", "content": assistant_system_prompt(factors)}, *turns, last]

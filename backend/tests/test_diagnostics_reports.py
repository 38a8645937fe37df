import csv
import io

import pytest

from core.diagnostics_registry import DiagnosticsRegistry
from core.exceptions import InvalidInput
from core.register_providers import register_providers
from data_toy import TOY_WEEK, record
from models.ai import EmissionAnalysis, ReductionRecommendations
from services.diagnostics import BASELINE_ACOUSTIC, BASELINE_THERMAL, StaticDiagnosticsProvider


# ---------- diagnostics ----------


def test_static_provider_is_deterministic():
    p = StaticDiagnosticsProvider()
    assert p.describe_thermal(b"img", "a.png") == BASELINE_THERMAL
    assert p.describe_thermal(b"img", "a.png") == BASELINE_THERMAL
    assert p.describe_acoustic(b"wav", "a.wav") == BASELINE_ACOUSTIC

    custom = StaticDiagnosticsProvider(thermal_text="Hot bearing")
    assert custom.describe_thermal(b"img", "a.png") == "Hot bearing"


def test_static_provider_rejects_empty_upload():
    with pytest.raises(InvalidInput):
        StaticDiagnosticsProvider().describe_acoustic(b"", "empty.wav")


def test_registry_lists_static():
    register_providers()
    assert "static" in DiagnosticsRegistry.list_providers()
    assert isinstance(DiagnosticsRegistry.get("STATIC"), StaticDiagnosticsProvider)
    with pytest.raises(ValueError):
        DiagnosticsRegistry.get("thermal-cam-9000")


def test_thermal_upload_route(client, store):
    rec_id = client.post("/records", json=record(kwh=10)).json()["id"]
    r = client.post(
        f"/diagnostics/{rec_id}/thermal",
        files={"file": ("motor.png", b"\x89PNG fake", "image/png")},
    )
    assert r.status_code == 200, r.text
    assert r.json()["thermal_image_description"] == BASELINE_THERMAL
    assert client.get(f"/records/{rec_id}").json()["thermal_image_description"] == BASELINE_THERMAL


def test_acoustic_upload_route_errors(client, store):
    rec_id = client.post("/records", json=record(kwh=10)).json()["id"]
    r = client.post(
        f"/diagnostics/{rec_id}/acoustic",
        files={"file": ("silence.wav", b"", "audio/wav")},
    )
    assert r.status_code == 400

    r = client.post(
        "/diagnostics/unknown/acoustic",
        files={"file": ("hum.wav", b"RIFF", "audio/wav")},
    )
    assert r.status_code == 404


# ---------- reports ----------


def _seed_ai_results():
    from main import app

    app.state.sync.set_analysis(
        EmissionAnalysis(
            overall_emission_summary="Electricity dominates.",
            potential_savings_overview="About 8%.",
        )
    )
    app.state.sync.set_recommendations(
        ReductionRecommendations(recommendations=["Add idle timers."])
    )


def test_report_without_ai_results(client, store):
    from main import app

    app.state.sync.set_analysis(None)
    app.state.sync.set_recommendations(None)
    client.post("/records", json=record(kwh=10))

    r = client.get("/reports")
    assert r.status_code == 200
    body = r.json()
    assert body["has_content"] is False
    assert len(body["rows"]) == 1
    assert body["recommendations"] == []


def test_report_with_content(client, store):
    for rec in TOY_WEEK:
        client.post("/records", json=rec)
    _seed_ai_results()

    r = client.get("/reports", params={"start": "2024-03-06", "end": "2024-03-07"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["has_content"] is True
    assert body["period_start"] == "2024-03-06"
    assert body["period_end"] == "2024-03-07"
    assert body["summary"]["record_count"] == 2
    assert body["recommendations"] == ["Add idle timers."]
    assert [row["fuel"] for row in body["rows"]] == ["20 kg", "-"]
    assert body["rows"][0]["total_emissions"] == round(150 * 0.82 + 20 * 2.42, 2)


def test_report_window_needs_start(client, store):
    client.post("/records", json=record("2024-01-01", kwh=10))
    client.post("/records", json=record("2024-01-02", kwh=20))

    assert client.get("/emissions/summary", params={"end": "2024-01-01"}).status_code == 400
    assert client.get("/reports", params={"end": "2024-01-01"}).status_code == 400
    assert client.get("/reports/csv", params={"end": "2024-01-01"}).status_code == 400

    r = client.get("/reports", params={"start": "2024-01-01"})
    assert [row["date"] for row in r.json()["rows"]] == ["2024-01-01"]


def test_report_csv(client, store):
    client.post("/records", json=record("2024-03-08", kwh=130, fuel="natural_gas", amount=25))
    client.post("/records", json=record("2024-03-09", kwh=40, fuel="propane", amount=2.5))

    r = client.get("/reports/csv")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")

    rows = list(csv.reader(io.StringIO(r.text)))
    assert rows[0][0] == "date"
    assert rows[1][2] == "25 m³"
    assert rows[1][-1] == "156.60"
    assert rows[2][2] == "2.5 L"


def test_status(client, store):
    r = client.get("/status")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["store"] == "InMemoryRecordStore"
    assert data["factors"] == "ecovision_default"
    assert data["diagnostics"] == "StaticDiagnosticsProvider"

    assert "static" in client.get("/status/diagnostics").json()["providers"]

from data_toy import TOY_WEEK, TOY_WEEK_TOTALS, record


def test_emissions_estimate(client):
    payload = {
        "records": [
            # 100 kWh * 0.82 + 50 L diesel * 2.68 => 82 + 134 = 216 kg
            record(kwh=100, fuel="diesel", amount=50, units=200),
            # fuel "none" ignores the amount => 10 * 0.82 = 8.2 kg
            record("2024-01-02", kwh=10, fuel="none", amount=7),
        ],
    }
    r = client.post("/emissions/estimate", json=payload)
    assert r.status_code == 200, r.text
    data = r.json()

    assert data["status"] == "success"
    assert data["preset"] == "ecovision_default"
    assert len(data["per_record"]) == 2
    assert abs(data["per_record"][0]["total_emissions"] - 216.0) < 1e-6
    assert abs(data["per_record"][1]["fuel_emissions"]) < 1e-9
    assert abs(data["summary"]["total_emissions"] - 224.2) < 1e-6
    assert abs(data["summary"]["emission_intensity"] - 224.2 / 200) < 1e-6


def test_emissions_estimate_custom_factors(client):
    payload = {
        "records": [record(kwh=10, fuel="coal", amount=10)],
        "factors": {"electricity": 1.0, "coal": 3.0},
    }
    r = client.post("/emissions/estimate", json=payload)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["preset"] == "request"
    assert abs(data["per_record"][0]["total_emissions"] - 40.0) < 1e-6


def test_emissions_estimate_rejects_negative(client):
    r = client.post("/emissions/estimate", json={"records": [record(kwh=-5)]})
    assert r.status_code == 422


def test_summary_and_series(client, store):
    for rec in TOY_WEEK:
        assert client.post("/records", json=rec).status_code == 201

    r = client.get("/emissions/summary")
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["record_count"] == 5
    assert data["total_emissions"] == round(sum(TOY_WEEK_TOTALS), 2)
    assert [b["source"] for b in data["breakdown"]] == [
        "electricity",
        "diesel",
        "coal",
        "natural_gas",
    ]

    r = client.get("/emissions/summary", params={"start": "2024-03-07"})
    assert r.json()["record_count"] == 1
    assert r.json()["total_emissions"] == round(TOY_WEEK_TOTALS[3], 2)

    r = client.get("/emissions/series", params={"start": "2024-03-04", "end": "2024-03-05"})
    assert r.status_code == 200
    assert [p["total_emissions"] for p in r.json()] == [
        round(t, 2) for t in TOY_WEEK_TOTALS[:2]
    ]


def test_summary_empty_store(client, store):
    r = client.get("/emissions/summary")
    assert r.status_code == 200
    data = r.json()
    assert data["total_emissions"] == 0
    assert data["emission_intensity"] == 0
    assert data["average_daily_emissions"] == 0
    assert data["breakdown"] == []


def test_summary_bad_window(client, store):
    r = client.get("/emissions/summary", params={"start": "2024-02-01", "end": "2024-01-01"})
    assert r.status_code == 400
    r = client.get("/emissions/summary", params={"end": "2024-01-01"})
    assert r.status_code == 400


def test_record_emissions(client, store):
    created = client.post("/records", json=record(kwh=100, fuel="diesel", amount=50)).json()
    r = client.get(f"/emissions/records/{created['id']}")
    assert r.status_code == 200
    assert abs(r.json()["total_emissions"] - 216.0) < 1e-6

    assert client.get("/emissions/records/missing").status_code == 404


def test_factors_endpoint(client):
    r = client.get("/emissions/factors")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["name"] == "ecovision_default"
    assert data["factors"] == {
        "electricity": 0.82,
        "diesel": 2.68,
        "coal": 2.42,
        "natural_gas": 2.0,
        "propane": 1.53,
    }

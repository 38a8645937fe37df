import pytest

from core.emissions import (
    aggregate,
    compute_record_emissions,
    daily_series,
    filter_by_date_range,
    rounded,
)
from core.exceptions import InvalidInput
from data_toy import TOY_WEEK, TOY_WEEK_TOTALS, record
from models.records import OperationalRecord


def test_reference_record(factors):
    r = record(kwh=100, fuel="diesel", amount=50, units=200)

    res = compute_record_emissions(r, factors)
    assert res.electricity_emissions == pytest.approx(82.0)
    assert res.fuel_emissions == pytest.approx(134.0)
    assert res.total_emissions == pytest.approx(216.0)

    agg = aggregate([r], factors)
    assert agg.total_emissions == pytest.approx(216.0)
    assert agg.emission_intensity == pytest.approx(1.08)
    assert agg.average_daily_emissions == pytest.approx(216.0)


def test_no_fuel_ignores_amount(factors):
    res = compute_record_emissions(record(kwh=10, fuel="none", amount=999), factors)
    assert res.fuel_emissions == 0
    assert res.total_emissions == pytest.approx(8.2)


@pytest.mark.parametrize(
    "fuel,amount,expected",
    [
        ("diesel", 10, 26.8),
        ("coal", 10, 24.2),
        ("natural_gas", 10, 20.0),
        ("naturalGas", 10, 20.0),
        ("propane", 10, 15.3),
    ],
)
def test_fuel_factor_selection(factors, fuel, amount, expected):
    res = compute_record_emissions(record(fuel=fuel, amount=amount), factors)
    assert res.fuel_emissions == pytest.approx(expected)
    assert res.total_emissions == res.electricity_emissions + res.fuel_emissions


def test_total_is_exact_sum(factors):
    for r in TOY_WEEK:
        res = compute_record_emissions(r, factors)
        assert res.total_emissions == res.electricity_emissions + res.fuel_emissions


def test_accepts_models_and_dicts(factors):
    r = record(kwh=50, fuel="propane", amount=4)
    model = OperationalRecord(id="x", **r)
    assert compute_record_emissions(model, factors) == compute_record_emissions(r, factors)


@pytest.mark.parametrize(
    "bad",
    [
        record(kwh=-5),
        record(fuel="diesel", amount=-1),
        record(fuel="none", amount=-1),
        record(fuel="wood", amount=3),
        record(kwh="lots"),
        record(kwh=float("nan")),
    ],
)
def test_invalid_input(factors, bad):
    with pytest.raises(InvalidInput):
        compute_record_emissions(bad, factors)


def test_aggregate_rejects_negative_record(factors):
    with pytest.raises(InvalidInput):
        aggregate([record(kwh=10), record(kwh=-5)], factors)


def test_aggregate_empty(factors):
    agg = aggregate([], factors)
    assert agg.total_emissions == 0
    assert agg.emission_intensity == 0
    assert agg.average_daily_emissions == 0
    assert agg.record_count == 0
    assert agg.breakdown == []


def test_zero_production_gives_zero_intensity(factors):
    agg = aggregate([record(kwh=500, fuel="coal", amount=30, units=0)], factors)
    assert agg.total_emissions > 0
    assert agg.emission_intensity == 0


def test_breakdown_order_and_zero_sources(factors):
    records = [
        record(kwh=0, fuel="propane", amount=10),
        record(kwh=100, fuel="diesel", amount=5),
        record(kwh=0, fuel="coal", amount=0),
    ]
    agg = aggregate(records, factors)
    sources = [b.source for b in agg.breakdown]
    assert sources == ["electricity", "diesel", "propane"]
    assert all(b.emissions_kg > 0 for b in agg.breakdown)
    assert sum(b.percentage_of_total for b in agg.breakdown) == pytest.approx(100.0)
    assert sum(b.emissions_kg for b in agg.breakdown) == pytest.approx(agg.total_emissions)


def test_aggregate_toy_week(factors):
    agg = aggregate(TOY_WEEK, factors)
    assert agg.total_emissions == pytest.approx(sum(TOY_WEEK_TOTALS))
    assert agg.record_count == 5
    assert agg.total_production_units == 1410
    assert agg.average_daily_emissions == pytest.approx(sum(TOY_WEEK_TOTALS) / 5)
    assert [b.source for b in agg.breakdown] == ["electricity", "diesel", "coal", "natural_gas"]


def test_aggregate_is_idempotent(factors):
    records = list(TOY_WEEK)
    first = aggregate(records, factors)
    second = aggregate(records, factors)
    assert first == second
    assert records == TOY_WEEK


def test_filter_window():
    records = [record("2024-01-01"), record("2024-01-03")]
    kept = filter_by_date_range(records, "2024-01-01", "2024-01-02")
    assert kept == [records[0]]


def test_filter_single_day_and_order():
    records = [record("2024-01-02", kwh=1), record("2024-01-01"), record("2024-01-02", kwh=2)]
    kept = filter_by_date_range(records, "2024-01-02")
    assert [r["electricity_kwh"] for r in kept] == [1, 2]


def test_filter_drops_malformed_dates():
    records = [record("2024-01-01"), record("01/02/2024"), record(None), record("2024-13-40")]
    kept = filter_by_date_range(records, "2024-01-01", "2024-12-31")
    assert kept == [records[0]]


def test_filter_is_restartable():
    kept = filter_by_date_range(TOY_WEEK, "2024-03-05", "2024-03-07")
    assert len(list(kept)) == 3
    assert len(list(kept)) == 3


def test_filter_bad_bounds():
    with pytest.raises(InvalidInput):
        filter_by_date_range([], "not-a-date")
    with pytest.raises(InvalidInput):
        filter_by_date_range([], "2024-02-01", "2024-01-01")


def test_daily_series_rounds(factors):
    points = daily_series([record("2024-01-01", kwh=1.234)], factors)
    assert points[0].date == "2024-01-01"
    assert points[0].total_emissions == 1.01


def test_rounded_copy(factors):
    agg = aggregate([record(kwh=1.111, units=3)], factors)
    r = rounded(agg)
    assert r.total_emissions == 0.91
    assert r.emission_intensity == 0.3
    # the source aggregate is untouched
    assert agg.total_emissions == pytest.approx(1.111 * 0.82)

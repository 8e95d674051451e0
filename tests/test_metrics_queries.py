"""Tests for RPC-backed reports."""

import pytest

from conftest import api_error, response
from teamledger.metrics_queries import (
    get_bank_accounts_currencies_query,
    get_burn_rate_query,
    get_current_burn_rate_query,
    get_metrics_query,
    get_percentage_increase,
    get_runway_query,
)


@pytest.mark.parametrize("a,b,expected", [
    (150, 100, 50),
    (50, 100, 50),
    (100, 100, 0),
    (0, 100, 0),
    (100, 0, 0),
    (None, 100, 0),
    (1, 8, 88),     # 87.5 rounds up
])
def test_percentage_increase(a, b, expected):
    assert get_percentage_increase(a, b) == expected


def test_burn_rate_is_month_aligned(supabase, run):
    run(get_burn_rate_query(supabase, "team-1", "2024-01-15", "2024-02-10", "USD"))
    q = supabase.last
    assert q.name == "get_burn_rate"
    assert q.payload == {
        "team_id": "team-1",
        "date_from": "2024-01-01",
        "date_to": "2024-02-29",
        "currency": "USD",
    }


def test_runway_uses_its_own_rpc(supabase, run):
    run(get_runway_query(supabase, "team-1", "2023-11-03T10:00:00Z", "2023-12-03", "EUR"))
    q = supabase.last
    assert q.name == "get_runway"
    assert q.payload["date_from"] == "2023-11-01"
    assert q.payload["date_to"] == "2023-12-31"


def test_current_burn_rate_and_currencies(supabase, run):
    supabase.rpc_responses["get_bank_account_currencies"] = response(data=[{"currency": "USD"}])
    result = run(get_bank_accounts_currencies_query(supabase, "team-1"))
    assert result.data == [{"currency": "USD"}]
    assert supabase.last.payload == {"team_id": "team-1"}

    run(get_current_burn_rate_query(supabase, "team-1", "USD"))
    assert supabase.last.name == "get_current_burn_rate"
    assert supabase.last.payload == {"team_id": "team-1", "currency": "USD"}


def _by_window(query):
    # previous-year window starts in 2023, current in 2024
    if query.payload["date_from"].startswith("2023"):
        return response(data=[
            {"date": "2023-01-31", "value": 100},
            {"date": "2023-02-28", "value": 300},
        ])
    return response(data=[
        {"date": "2024-01-31", "value": 150},
        {"date": "2024-02-29", "value": 200},
        {"date": "2024-03-31", "value": 50},
    ])


def test_metrics_compares_with_previous_year(supabase, run):
    supabase.rpc_responses["get_profit"] = _by_window
    out = run(get_metrics_query(supabase, "team-1", "2024-01-10", "2024-03-05", "USD"))

    windows = sorted((q.payload["date_from"], q.payload["date_to"]) for q in supabase.queries)
    assert windows == [("2023-01-01", "2023-03-31"), ("2024-01-01", "2024-03-31")]
    assert {q.name for q in supabase.queries} == {"get_profit"}

    assert out["summary"] == {"current_total": 400, "prev_total": 400, "currency": "USD"}
    assert out["meta"] == {"type": "profit"}

    first, second, third = out["result"]
    assert first["percentage"] == {"value": 33, "status": "positive"}
    assert first["previous"] == {"date": "2023-01-31", "value": 100, "currency": "USD"}
    assert second["percentage"] == {"value": 50, "status": "negative"}
    # no previous-year record at this index
    assert third["percentage"] == {"value": 0, "status": "negative"}
    assert third["previous"] == {"date": None, "value": None, "currency": "USD"}


def test_revenue_metric_and_failed_calls(supabase, run):
    supabase.rpc_responses["get_revenue"] = api_error()
    out = run(get_metrics_query(supabase, "t", "2024-01-01", "2024-01-31", "USD", type="revenue"))
    assert [q.name for q in supabase.queries] == ["get_revenue", "get_revenue"]
    assert out["result"] is None
    assert out["summary"]["current_total"] is None


def test_unknown_metric_type(supabase, run):
    with pytest.raises(ValueError):
        run(get_metrics_query(supabase, "t", "2024-01-01", "2024-01-31", "USD", type="margin"))

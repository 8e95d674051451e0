# web_app/reports_api.py
from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, abort, jsonify

from teamledger.metrics_queries import (
    METRIC_RPCS,
    get_bank_accounts_currencies_query,
    get_burn_rate_query,
    get_current_burn_rate_query,
    get_metrics_query,
    get_runway_query,
)
from teamledger.supabase_client import supabase_session
from teamledger.transaction_queries import get_spending_query
from web_app.request_args import date_arg, required_arg, str_arg

reports_api = Blueprint("reports_api", __name__, url_prefix="/api/reports")

DEFAULT_CURRENCY = "USD"


def _window():
    team_id = required_arg("team_id")
    start, end = date_arg("from"), date_arg("to")
    if end < start:
        abort(400, description="'to' must not be before 'from'")
    return team_id, start, end, str_arg("currency", DEFAULT_CURRENCY)


@reports_api.get("/spending")
async def spending():
    team_id, start, end, currency = _window()
    async with supabase_session() as client:
        result = await get_spending_query(client, team_id, start, end, currency)
    return jsonify(asdict(result))


@reports_api.get("/burn-rate")
async def burn_rate():
    team_id, start, end, currency = _window()
    async with supabase_session() as client:
        result = await get_burn_rate_query(client, team_id, start, end, currency)
    return jsonify(asdict(result))


@reports_api.get("/runway")
async def runway():
    team_id, start, end, currency = _window()
    async with supabase_session() as client:
        result = await get_runway_query(client, team_id, start, end, currency)
    return jsonify(asdict(result))


@reports_api.get("/current-burn-rate")
async def current_burn_rate():
    team_id = required_arg("team_id")
    currency = str_arg("currency", DEFAULT_CURRENCY)
    async with supabase_session() as client:
        result = await get_current_burn_rate_query(client, team_id, currency)
    return jsonify(asdict(result))


@reports_api.get("/metrics")
async def metrics():
    team_id, start, end, currency = _window()
    metric = str_arg("type", "profit")
    if metric not in METRIC_RPCS:
        abort(400, description=f"Unknown metric type '{metric}'")
    async with supabase_session() as client:
        result = await get_metrics_query(client, team_id, start, end, currency, type=metric)
    return jsonify(result)


@reports_api.get("/currencies")
async def currencies():
    team_id = required_arg("team_id")
    async with supabase_session() as client:
        result = await get_bank_accounts_currencies_query(client, team_id)
    return jsonify(asdict(result))

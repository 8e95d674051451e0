# teamledger/metrics_queries.py
"""Remote-procedure backed reports: burn rate, runway, profit/revenue."""
from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Dict, List, Optional

from supabase import AsyncClient

from teamledger.dates import DateLike, month_window
from teamledger.supabase_client import QueryResult, run_query_quietly

log = logging.getLogger(__name__)

METRIC_RPCS = {
    "profit": "get_profit",
    "revenue": "get_revenue",
}


def get_percentage_increase(a: Optional[float], b: Optional[float]) -> int:
    """Whole-percent change of a relative to b; 0 unless both are positive."""
    if a is None or b is None or not (a > 0 and b > 0):
        return 0
    # round half up, like the dashboard's toFixed()
    return int(math.floor(abs((a - b) / b * 100) + 0.5))


async def get_bank_accounts_currencies_query(client: AsyncClient, team_id: str) -> QueryResult:
    return await run_query_quietly(
        client.rpc("get_bank_account_currencies", {"team_id": team_id})
    )


async def _month_aligned_rpc(client: AsyncClient, rpc: str, team_id: str, from_: DateLike, to: DateLike, currency: str) -> QueryResult:
    date_from, date_to = month_window(from_, to)
    return await run_query_quietly(
        client.rpc(rpc, {
            "team_id": team_id,
            "date_from": date_from,
            "date_to": date_to,
            "currency": currency,
        })
    )


async def get_burn_rate_query(client: AsyncClient, team_id: str, from_: DateLike, to: DateLike, currency: str) -> QueryResult:
    return await _month_aligned_rpc(client, "get_burn_rate", team_id, from_, to, currency)


async def get_runway_query(client: AsyncClient, team_id: str, from_: DateLike, to: DateLike, currency: str) -> QueryResult:
    return await _month_aligned_rpc(client, "get_runway", team_id, from_, to, currency)


async def get_current_burn_rate_query(client: AsyncClient, team_id: str, currency: str) -> QueryResult:
    return await run_query_quietly(
        client.rpc("get_current_burn_rate", {"team_id": team_id, "currency": currency})
    )


def _total(records: Optional[List[Dict[str, Any]]]) -> Optional[float]:
    if records is None:
        return None
    return sum(item.get("value") or 0 for item in records)


def _abs_or_none(value: Optional[float]) -> Optional[float]:
    return abs(value) if value is not None else None


async def get_metrics_query(
    client: AsyncClient,
    team_id: str,
    from_: DateLike,
    to: DateLike,
    currency: str,
    type: str = "profit",
) -> Dict[str, Any]:
    """
    Compare a month-aligned window against the same window one year earlier.

    Both RPC calls are issued together and awaited jointly. Each current
    record is paired with the previous-year record at the same index; a
    missing counterpart yields a 0 percentage and a "negative" status.
    """
    if type not in METRIC_RPCS:
        raise ValueError(f"Unknown metric type: {type!r}")
    rpc = METRIC_RPCS[type]

    prev_from, prev_to = month_window(from_, to, years_back=1)
    cur_from, cur_to = month_window(from_, to)
    log.debug("metrics %s team=%s current=%s..%s previous=%s..%s", rpc, team_id, cur_from, cur_to, prev_from, prev_to)

    prev_result, current_result = await asyncio.gather(
        run_query_quietly(client.rpc(rpc, {
            "team_id": team_id,
            "date_from": prev_from,
            "date_to": prev_to,
            "currency": currency,
        })),
        run_query_quietly(client.rpc(rpc, {
            "team_id": team_id,
            "date_from": cur_from,
            "date_to": cur_to,
            "currency": currency,
        })),
    )
    prev_data = prev_result.data
    current_data = current_result.data

    result = None
    if current_data is not None:
        result = []
        for index, record in enumerate(current_data):
            prev = prev_data[index] if prev_data and index < len(prev_data) else None
            prev_value = prev.get("value") if prev else None
            value = record.get("value")
            positive = prev_value is not None and value is not None and value > prev_value

            result.append({
                "date": record.get("date"),
                "percentage": {
                    "value": get_percentage_increase(_abs_or_none(prev_value), _abs_or_none(value)),
                    "status": "positive" if positive else "negative",
                },
                "current": {
                    "date": record.get("date"),
                    "value": value,
                    "currency": currency,
                },
                "previous": {
                    "date": prev.get("date") if prev else None,
                    "value": prev_value,
                    "currency": currency,
                },
            })

    return {
        "summary": {
            "current_total": _total(current_data),
            "prev_total": _total(prev_data),
            "currency": currency,
        },
        "meta": {
            "type": type,
        },
        "result": result,
    }

# teamledger/transaction_queries.py
"""
Transaction list/detail queries.

The list query is where most of the request shaping happens: the table's
sort, search and filter controls are turned into PostgREST conditions, and
the page that comes back is decorated with per-currency totals.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from supabase import AsyncClient

from teamledger import filter_config as fc
from teamledger.dates import DateLike, iso
from teamledger.supabase_client import QueryResult, run_query, run_query_quietly

log = logging.getLogger(__name__)

# A search that starts with a number is matched against the amount text
_LEADING_INT = re.compile(r"^\s*[+-]?\d")

Sort = Tuple[str, str]


@dataclass
class TransactionFilter:
    status: List[str] = field(default_factory=list)
    attachments: Optional[str] = None        # "include" | "exclude"
    categories: Optional[List[str]] = None
    type: Optional[str] = None               # "income" | "expense"
    date_from: Optional[str] = None
    date_to: Optional[str] = None

    def __post_init__(self):
        # a single status may come straight from a radio/query arg
        if isinstance(self.status, str):
            self.status = [self.status]
        self.status = list(self.status or [])


def is_amount_search(search_query: str) -> bool:
    return bool(_LEADING_INT.match(search_query or ""))


def with_category_fallback(transaction: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Copy of the row with a missing category reported as 'uncategorized'."""
    row = dict(transaction or {})
    row["category"] = row.get("category") or fc.UNCATEGORIZED
    return row


def category_condition(categories: Iterable[str]) -> str:
    parts = []
    for category in categories:
        if category == fc.UNCATEGORIZED:
            parts.append("category.is.null")
        else:
            parts.append(f"category.eq.{category}")
    return ",".join(parts)


def total_amount_by_currency(rows: Optional[Sequence[Dict[str, Any]]]) -> Optional[List[Dict[str, Any]]]:
    """
    Sum amounts per currency (transfers excluded), smallest total first.
    Currencies keep first-seen order before the sort so ties stay stable.
    """
    if rows is None:
        return None
    totals: Dict[str, float] = {}
    for tx in rows:
        if tx.get("category") == fc.TRANSFER_CATEGORY:
            continue
        cur = tx.get("currency")
        totals[cur] = totals.get(cur, 0) + (tx.get("amount") or 0)
    out = [{"amount": amount, "currency": cur} for cur, amount in totals.items()]
    out.sort(key=lambda item: item["amount"])
    return out


def _apply_sort(query, sort: Optional[Sort]):
    if sort:
        column, value = sort
        ascending = value == "asc"
        column = fc.SORT_COLUMN_ALIASES.get(column, column)
        return query.order(column, desc=not ascending)
    return query.order("date", desc=True).order("created_at", desc=True)


def build_transactions_query(
    client: AsyncClient,
    team_id: str,
    sort: Optional[Sort] = None,
    search_query: Optional[str] = None,
    filter: Optional[TransactionFilter] = None,
):
    """Compose the list request without executing it (no range applied yet)."""
    f = filter or TransactionFilter()
    status = f.status

    query = (
        client.table("decrypted_transactions")
        .select(",".join(fc.TRANSACTION_COLUMNS), count="exact")
        .eq("team_id", team_id)
    )
    query = _apply_sort(query, sort)

    if f.date_from and f.date_to:
        query = query.gte("date", f.date_from).lte("date", f.date_to)

    if search_query:
        if is_amount_search(search_query):
            query = query.like("amount_text", f"%{search_query}%")
        else:
            query = query.ilike("decrypted_name", f"%{search_query}%")

    if fc.STATUS_FULFILLED in status or f.attachments == "include":
        query = query.eq("is_fulfilled", True)

    if fc.STATUS_UNFULFILLED in status or f.attachments == "exclude":
        query = query.eq("is_fulfilled", False)

    if fc.STATUS_EXCLUDED in status:
        query = query.eq("status", fc.EXCLUDED_STATUS)
    else:
        query = query.or_(",".join(f"status.eq.{s}" for s in fc.ACTIVE_STATUSES))

    if f.categories:
        query = query.or_(category_condition(f.categories))

    if f.type == "expense":
        query = query.lt("amount", 0).neq("category", fc.TRANSFER_CATEGORY)
    elif f.type == "income":
        query = query.eq("category", fc.INCOME_CATEGORY)

    return query


async def get_transactions_query(
    client: AsyncClient,
    team_id: str,
    to: int,
    from_: int = 0,
    sort: Optional[Sort] = None,
    search_query: Optional[str] = None,
    filter: Optional[TransactionFilter] = None,
) -> Dict[str, Any]:
    query = build_transactions_query(client, team_id, sort=sort, search_query=search_query, filter=filter)
    log.debug("transactions team=%s range=%s-%s sort=%s search=%r", team_id, from_, to, sort, search_query)

    result = await run_query(query.range(from_, to))
    data = result.data

    return {
        "meta": {
            "total_amount": total_amount_by_currency(data),
            "count": result.count,
        },
        "data": [with_category_fallback(tx) for tx in data] if data is not None else None,
    }


async def get_transaction_query(client: AsyncClient, transaction_id: str) -> Dict[str, Any]:
    query = (
        client.table("decrypted_transactions")
        .select(", ".join(fc.TRANSACTION_DETAIL_COLUMNS))
        .eq("id", transaction_id)
        .single()
    )
    result = await run_query(query)
    return with_category_fallback(result.data)


async def get_similar_transactions(client: AsyncClient, name: str, team_id: str) -> QueryResult:
    query = (
        client.table("decrypted_transactions")
        .select("id, amount, team_id", count="exact")
        .eq("decrypted_name", name)
        .eq("team_id", team_id)
    )
    return await run_query(query)


async def get_spending_query(
    client: AsyncClient,
    team_id: str,
    from_: Union[DateLike, None],
    to: Union[DateLike, None],
    currency: str,
) -> QueryResult:
    params = {
        "team_id": team_id,
        "date_from": iso(from_) if from_ else None,
        "date_to": iso(to) if to else None,
        "currency_target": currency,
    }
    return await run_query_quietly(client.rpc("get_spending", params))

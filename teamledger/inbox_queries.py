# teamledger/inbox_queries.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from supabase import AsyncClient

from teamledger import filter_config as fc
from teamledger.dates import parse_timestamp, utcnow
from teamledger.supabase_client import run_query_quietly
from teamledger.transaction_queries import is_amount_search

log = logging.getLogger(__name__)


def _with_review_flags(item: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    created = parse_timestamp(item.get("created_at"))
    pending = bool(created and created <= now <= created + timedelta(days=fc.INBOX_PENDING_DAYS))
    return {
        **item,
        "pending": pending,
        "review": not pending and not item.get("transaction_id"),
    }


async def get_inbox_query(
    client: AsyncClient,
    team_id: str,
    from_: int = 0,
    to: int = 10,
    done: bool = False,
    todo: bool = False,
    ascending: bool = False,
    search_query: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    query = (
        client.table("inbox")
        .select(",".join(fc.INBOX_COLUMNS))
        .eq("team_id", team_id)
        .order("created_at", desc=not ascending)
    )

    if done:
        query = query.not_.is_("transaction_id", "null")

    if todo:
        query = query.is_("transaction_id", "null")

    if search_query:
        if is_amount_search(search_query):
            query = query.like("inbox_amount_text", f"%{search_query}%")
        else:
            query = query.text_search("fts", f"{search_query}:*")

    log.debug("inbox team=%s range=%s-%s done=%s todo=%s search=%r", team_id, from_, to, done, todo, search_query)
    result = await run_query_quietly(query.range(from_, to))
    if result.data is None:
        return {"data": None}

    # deleted rows are dropped here rather than with a neq filter
    now = now or utcnow()
    rows = [item for item in result.data if item.get("status") != fc.INBOX_DELETED_STATUS]
    return {"data": [_with_review_flags(item, now) for item in rows]}

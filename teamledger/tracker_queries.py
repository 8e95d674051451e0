# teamledger/tracker_queries.py
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Dict, Optional, Tuple

from supabase import AsyncClient

from teamledger import filter_config as fc
from teamledger.dates import DateLike, iso
from teamledger.supabase_client import run_query_quietly

log = logging.getLogger(__name__)


async def get_tracker_projects_query(
    client: AsyncClient,
    team_id: str,
    to: int = 10,
    from_: int = 0,
    sort: Optional[Tuple[str, str]] = None,
    search: Optional[Dict[str, Any]] = None,
    status: Optional[str] = None,
) -> Dict[str, Any]:
    """
    search: {"query": str, "fuzzy": bool}; only a fuzzy search narrows.
    status: "in_progress" | "completed"
    """
    query = (
        client.table("tracker_projects")
        .select("*, total_duration", count="exact")
        .eq("team_id", team_id)
    )

    if status:
        query = query.eq("status", status)

    search = search or {}
    if search.get("query") and search.get("fuzzy"):
        query = query.ilike("name", f"%{search['query']}%")

    if sort:
        column, value = sort
        column = fc.TRACKER_SORT_ALIASES.get(column, column)
        query = query.order(column, desc=value != "asc")
    else:
        query = query.order("created_at", desc=True)

    result = await run_query_quietly(query.range(from_, to))
    return {
        "meta": {
            "count": result.count,
        },
        "data": result.data,
    }


async def get_tracker_records_by_range_query(
    client: AsyncClient,
    team_id: Optional[str],
    from_: DateLike,
    to: DateLike,
    project_id: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    if not team_id:
        return None

    query = (
        client.table("tracker_entries")
        .select("*, assigned:assigned_id(id, full_name, avatar_url), project:project_id(id, name)")
        .eq("team_id", team_id)
        .gte("date", iso(from_))
        .lte("date", iso(to))
        .order("created_at")
    )

    if project_id:
        query = query.eq("project_id", project_id)

    data = (await run_query_quietly(query)).data
    log.debug("tracker entries team=%s %s..%s project=%s rows=%s", team_id, iso(from_), iso(to), project_id, None if data is None else len(data))

    by_date = None
    total_duration = None
    if data is not None:
        grouped = defaultdict(list)
        for entry in data:
            grouped[entry.get("date")].append(entry)
        by_date = dict(grouped)
        total_duration = sum(entry.get("duration") or 0 for entry in data)

    return {
        "meta": {
            "total_duration": total_duration,
            "from": iso(from_),
            "to": iso(to),
        },
        "data": by_date,
    }

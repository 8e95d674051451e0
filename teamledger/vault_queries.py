# teamledger/vault_queries.py
"""
Vault (object storage) listings.

Storage has no real folders: a "folder" is any listed entry without an id,
and an empty one is kept alive by a placeholder file that we never show.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

from supabase import AsyncClient

from teamledger import filter_config as fc
from teamledger.supabase_client import QueryResult, list_storage, run_query_quietly

log = logging.getLogger(__name__)


def vault_path(team_id: str, *parts: Optional[str]) -> str:
    segs = [team_id] + [p.strip("/") for p in parts if p]
    return "/".join(s for s in segs if s)


def _is_folder(entry: Dict[str, Any]) -> bool:
    return entry.get("id") is None


def merge_vault_entries(
    defaults: List[Dict[str, Any]],
    listed: Optional[List[Dict[str, Any]]],
) -> List[Dict[str, Any]]:
    """
    Merge default folders with listed entries, one entry per name.
    A listed entry replaces a default of the same name but keeps its slot.
    """
    merged: Dict[str, Dict[str, Any]] = {}
    for entry in defaults:
        merged[entry["name"]] = entry
    for entry in listed or []:
        if entry.get("name") == fc.EMPTY_FOLDER_PLACEHOLDER_FILE_NAME:
            continue
        merged[entry["name"]] = {**entry, "is_folder": _is_folder(entry)}
    return list(merged.values())


async def get_vault_query(client: AsyncClient, team_id: str, path: Optional[str] = None) -> Dict[str, Any]:
    defaults = [] if path else [{"name": name, "is_folder": True} for name in fc.DEFAULT_VAULT_FOLDERS]
    base_path = vault_path(team_id, path)

    listed = await list_storage(
        client,
        base_path,
        {"sortBy": {"column": "name", "order": "asc"}},
        bucket=fc.VAULT_BUCKET_NAME,
    )
    return {"data": merge_vault_entries(defaults, listed)}


async def get_vault_activity_query(client: AsyncClient, user_id: str) -> QueryResult:
    query = (
        client.table("objects")
        .select("*")
        .eq("owner_id", user_id)
        .limit(fc.VAULT_ACTIVITY_LIMIT)
        .order("created_at", desc=True)
    )
    return await run_query_quietly(query)


async def _list_all_pages(client: AsyncClient, base_path: str, limit: int, offset: int) -> List[Dict[str, Any]]:
    contents: List[Dict[str, Any]] = []
    while True:
        page = await list_storage(
            client,
            base_path,
            {"limit": limit, "offset": offset},
            bucket=fc.VAULT_BUCKET_NAME,
        ) or []
        contents.extend(page)
        if len(page) < limit:
            break
        offset += limit
    return contents


async def get_vault_recursive_query(
    client: AsyncClient,
    team_id: str,
    path: Optional[str] = None,
    folder: Optional[str] = None,
    limit: int = fc.VAULT_PAGE_SIZE,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """
    Every file under <team_id>/<path>/<folder>, depth first in listing order.
    Each file carries the folder it was found in as ``base_path``.
    """
    if limit <= 0:
        raise ValueError("limit must be positive")

    base_path = vault_path(team_id, path, folder)
    contents = await _list_all_pages(client, base_path, limit, offset)

    subfolders = [item for item in contents if _is_folder(item)]
    items = [{**item, "base_path": base_path} for item in contents if not _is_folder(item)]
    log.debug("vault %s: %d files, %d subfolders", base_path, len(items), len(subfolders))

    # path below the team root for the children
    child_root = "/".join(p for p in (path, folder) if p) or None
    nested = await asyncio.gather(*[
        get_vault_recursive_query(
            client,
            team_id,
            path=child_root,
            folder=unquote(sub["name"]),
            limit=limit,
        )
        for sub in subfolders
    ])
    for sub_items in nested:
        items.extend(sub_items)
    return items

# teamledger/supabase_client.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional

from supabase import AsyncClient, PostgrestAPIError, StorageException, acreate_client

from teamledger.settings import VAULT_BUCKET, supabase_credentials

log = logging.getLogger(__name__)


@dataclass
class QueryResult:
    """What a passthrough query hands back: rows, exact count when asked, error text when tolerated."""
    data: Any = None
    count: Optional[int] = None
    error: Optional[str] = None


async def create_client_from_env() -> AsyncClient:
    url, key = supabase_credentials()
    return await acreate_client(url, key)


async def close_client(client: AsyncClient) -> None:
    """Close the HTTP sessions the client opened. Sub-clients are created lazily."""
    postgrest = getattr(client, "_postgrest", None)
    if postgrest is not None:
        await postgrest.aclose()
    storage = getattr(client, "_storage", None)
    if storage is not None:
        await storage.session.aclose()


@asynccontextmanager
async def supabase_session() -> AsyncIterator[AsyncClient]:
    """One client per request, closed before the event loop goes away."""
    client = await create_client_from_env()
    try:
        yield client
    finally:
        await close_client(client)


# --------------------
# Request runners
# --------------------
async def run_query(builder) -> QueryResult:
    """Execute a PostgREST builder. PostgrestAPIError propagates to the caller."""
    resp = await builder.execute()
    return QueryResult(data=resp.data, count=getattr(resp, "count", None))


async def run_query_quietly(builder) -> QueryResult:
    """Execute a PostgREST builder; a failed request comes back with data=None."""
    try:
        return await run_query(builder)
    except PostgrestAPIError as e:
        log.warning("Supabase request failed (tolerated): %s", e.message)
        return QueryResult(data=None, error=e.message or str(e))


async def list_storage(
    client: AsyncClient,
    path: str,
    options: Optional[Dict[str, Any]] = None,
    bucket: str = VAULT_BUCKET,
    quiet: bool = True,
) -> Optional[List[Dict[str, Any]]]:
    """List one folder of a storage bucket; None when a quiet listing fails."""
    try:
        if options:
            return await client.storage.from_(bucket).list(path, options)
        return await client.storage.from_(bucket).list(path)
    except StorageException as e:
        if not quiet:
            raise
        log.warning("Storage listing failed for %s/%s: %s", bucket, path, e)
        return None

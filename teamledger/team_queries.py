# teamledger/team_queries.py
"""Users, teams, members, bank connections and invites."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from supabase import AsyncClient

from teamledger import filter_config as fc
from teamledger.supabase_client import QueryResult, run_query, run_query_quietly

log = logging.getLogger(__name__)


async def get_user_query(client: AsyncClient, user_id: str) -> QueryResult:
    query = (
        client.table("users")
        .select("*, team:team_id(*)")
        .eq("id", user_id)
        .single()
    )
    return await run_query(query)


async def get_current_user_team_query(client: AsyncClient) -> QueryResult:
    """Look up the signed-in user (with their team) from the client's session."""
    resp = await client.auth.get_user()
    user = getattr(resp, "user", None)
    user_id = getattr(user, "id", None)
    if not user_id:
        log.warning("No authenticated user on this client; skipping user lookup")
        return QueryResult(data=None, error="not authenticated")
    return await get_user_query(client, user_id)


async def get_bank_connections_by_team_id_query(client: AsyncClient, team_id: str) -> QueryResult:
    query = (
        client.table("decrypted_bank_connections")
        .select("*, name:decrypted_name")
        .eq("team_id", team_id)
    )
    return await run_query(query)


async def get_team_bank_accounts_query(
    client: AsyncClient,
    team_id: str,
    enabled: Optional[bool] = None,
) -> QueryResult:
    query = (
        client.table("decrypted_bank_accounts")
        .select("*, name:decrypted_name, bank:decrypted_bank_connections(*, name:decrypted_name)")
        .eq("team_id", team_id)
        .order("created_at", desc=False)
        .order("name", desc=True)
    )
    # only "enabled only" narrows; False/None lists everything
    if enabled:
        query = query.eq("enabled", enabled)
    return await run_query(query)


async def get_team_members_query(client: AsyncClient, team_id: str) -> Dict[str, Any]:
    query = (
        client.table("users_on_team")
        .select(fc.TEAM_MEMBER_COLUMNS)
        .eq("team_id", team_id)
        .order("created_at")
    )
    result = await run_query(query)
    return {"data": result.data}


async def get_team_user_query(client: AsyncClient, team_id: str, user_id: str) -> Dict[str, Any]:
    query = (
        client.table("users_on_team")
        .select(fc.TEAM_MEMBER_COLUMNS)
        .eq("team_id", team_id)
        .eq("user_id", user_id)
        .single()
    )
    result = await run_query(query)
    return {"data": result.data}


async def get_teams_by_user_id_query(client: AsyncClient, user_id: str) -> QueryResult:
    query = (
        client.table("users_on_team")
        .select("id, role, team:team_id(*)")
        .eq("user_id", user_id)
    )
    return await run_query(query)


async def get_team_invites_query(client: AsyncClient, team_id: str) -> QueryResult:
    query = client.table("user_invites").select(fc.INVITE_COLUMNS).eq("team_id", team_id)
    return await run_query(query)


async def get_user_invites_query(client: AsyncClient, email: str) -> QueryResult:
    query = client.table("user_invites").select(fc.INVITE_COLUMNS).eq("email", email)
    return await run_query(query)


async def get_user_invite_query(client: AsyncClient, code: str, email: str) -> QueryResult:
    # an unknown code is an expected outcome here, so no raise
    query = (
        client.table("user_invites")
        .select("*")
        .eq("code", code)
        .eq("email", email)
        .single()
    )
    return await run_query_quietly(query)

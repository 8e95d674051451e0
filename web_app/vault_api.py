# web_app/vault_api.py
from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, jsonify

from teamledger.supabase_client import supabase_session
from teamledger.vault_queries import get_vault_activity_query, get_vault_query, get_vault_recursive_query
from web_app.request_args import required_arg, str_arg

vault_api = Blueprint("vault_api", __name__, url_prefix="/api/vault")


def _norm_path(raw) -> str:
    return "/".join(seg.strip() for seg in (raw or "").split("/") if seg.strip())


@vault_api.get("")
async def list_vault():
    team_id = required_arg("team_id")
    async with supabase_session() as client:
        result = await get_vault_query(client, team_id, path=_norm_path(str_arg("path")) or None)
    return jsonify(result)


@vault_api.get("/all")
async def list_vault_recursive():
    team_id = required_arg("team_id")
    async with supabase_session() as client:
        items = await get_vault_recursive_query(client, team_id, path=_norm_path(str_arg("path")) or None)
    return jsonify({"data": items, "count": len(items)})


@vault_api.get("/activity")
async def vault_activity():
    user_id = required_arg("user_id")
    async with supabase_session() as client:
        result = await get_vault_activity_query(client, user_id)
    return jsonify(asdict(result))

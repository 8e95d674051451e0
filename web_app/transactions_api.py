# web_app/transactions_api.py
from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify, render_template, request

from teamledger.supabase_client import supabase_session
from teamledger.transaction_queries import (
    TransactionFilter,
    get_similar_transactions,
    get_transaction_query,
    get_transactions_query,
)
from web_app.filter_sections import build_sections
from web_app.request_args import int_arg, list_arg, required_arg, sort_arg, str_arg
from web_app.transaction_sheet import transaction_sheet_for

transactions_api = Blueprint("transactions_api", __name__)

PAGE_SIZE = 50


def _filter_from_args() -> TransactionFilter:
    attachments = str_arg("attachments")
    if attachments == "all":
        attachments = None
    tx_type = str_arg("type")
    if tx_type not in (None, "income", "expense"):
        abort(400, description=f"Unknown type '{tx_type}'")
    return TransactionFilter(
        status=list_arg("status"),
        attachments=attachments,
        categories=list_arg("categories") or None,
        type=tx_type,
        date_from=str_arg("date_from"),
        date_to=str_arg("date_to"),
    )


# ------------------ Routes ------------------

@transactions_api.get("/api/transactions")
async def list_transactions():
    team_id = required_arg("team_id")
    start = int_arg("from", 0, minimum=0)
    end = int_arg("to", start + PAGE_SIZE - 1)
    if end < start:
        abort(400, description="'to' must not be before 'from'")

    sort = sort_arg()
    tx_filter = _filter_from_args()
    async with supabase_session() as client:
        result = await get_transactions_query(
            client,
            team_id,
            to=end,
            from_=start,
            sort=sort,
            search_query=str_arg("q"),
            filter=tx_filter,
        )
    return jsonify(result)


@transactions_api.get("/api/transactions/filters")
def transaction_filters():
    return jsonify({"sections": build_sections()})


@transactions_api.get("/api/transactions/<transaction_id>")
async def transaction_detail(transaction_id: str):
    async with supabase_session() as client:
        tx = await get_transaction_query(client, transaction_id)
    return jsonify(tx)


@transactions_api.get("/api/transactions/<transaction_id>/similar")
async def similar_transactions(transaction_id: str):
    team_id = required_arg("team_id")
    async with supabase_session() as client:
        tx = await get_transaction_query(client, transaction_id)
        name = tx.get("name")
        if not name:
            return jsonify({"data": [], "count": 0})
        result = await get_similar_transactions(client, name, team_id)
    return jsonify({"data": result.data, "count": result.count})


@transactions_api.get("/transactions/<transaction_id>/sheet")
async def transaction_sheet(transaction_id: str):
    """Detail view as a desktop side sheet or a mobile drawer."""
    async with supabase_session() as client:
        data = await get_transaction_query(client, transaction_id)
    sheet = transaction_sheet_for(request, data, ids=list_arg("ids"))
    current_app.logger.debug("transaction %s rendered as %s", transaction_id, sheet.variant)
    return render_template(sheet.template, **sheet.context())

# web_app/request_args.py
# Small query-string readers shared by the API blueprints.
from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from flask import abort, request

from teamledger.dates import to_date


def str_arg(name: str, default: Optional[str] = None) -> Optional[str]:
    val = (request.args.get(name) or "").strip()
    return val or default


def required_arg(name: str) -> str:
    val = str_arg(name)
    if not val:
        abort(400, description=f"Missing '{name}'")
    return val


def int_arg(name: str, default: Optional[int] = None, minimum: Optional[int] = None) -> Optional[int]:
    raw = str_arg(name)
    if raw is None:
        return default
    try:
        val = int(raw)
    except ValueError:
        abort(400, description=f"'{name}' must be an integer")
    if minimum is not None and val < minimum:
        abort(400, description=f"'{name}' must be at least {minimum}")
    return val


def date_arg(name: str) -> date:
    """Required date argument: YYYY-MM-DD or a full ISO timestamp."""
    raw = required_arg(name)
    try:
        return to_date(raw)
    except ValueError:
        abort(400, description=f"'{name}' must be an ISO date")


def bool_arg(name: str, default: bool = False) -> bool:
    raw = str_arg(name)
    if raw is None:
        return default
    return raw.lower() in ("1", "true", "yes", "on")


def list_arg(name: str) -> List[str]:
    """Accept both ?x=a&x=b and ?x=a,b."""
    out: List[str] = []
    for raw in request.args.getlist(name):
        out.extend(p.strip() for p in raw.split(",") if p.strip())
    return out


def sort_arg(name: str = "sort") -> Optional[Tuple[str, str]]:
    """?sort=column:asc|desc (direction defaults to asc)."""
    raw = str_arg(name)
    if not raw:
        return None
    column, _, direction = raw.partition(":")
    direction = (direction or "asc").lower()
    if direction not in ("asc", "desc"):
        abort(400, description=f"Bad sort direction '{direction}'")
    return column, direction

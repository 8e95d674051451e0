# web_app/transaction_sheet.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DESKTOP_MIN_WIDTH = 768

_MOBILE_UA = re.compile(r"Mobi|Android|iPhone|iPod", re.IGNORECASE)


def _viewport_width(req) -> Optional[int]:
    raw = (
        req.headers.get("Sec-CH-Viewport-Width")
        or req.headers.get("Viewport-Width")
        or req.args.get("vw")
        or ""
    ).strip()
    try:
        return int(float(raw)) if raw else None
    except ValueError:
        return None


def is_desktop(req) -> bool:
    """
    Server-side stand-in for the (min-width: 768px) media query.
    Order: viewport-width hint or ?vw=, then the UA-mobile hint, then the UA string.
    """
    width = _viewport_width(req)
    if width is not None:
        return width >= DESKTOP_MIN_WIDTH
    mobile_hint = (req.headers.get("Sec-CH-UA-Mobile") or "").strip()
    if mobile_hint:
        return mobile_hint != "?1"
    return not _MOBILE_UA.search(req.headers.get("User-Agent") or "")


@dataclass
class TransactionSheet:
    """Transaction detail shown in a side sheet on desktop, a bottom drawer on mobile."""
    is_open: bool
    data: Dict[str, Any]
    ids: List[str] = field(default_factory=list)
    desktop: bool = True

    @property
    def variant(self) -> str:
        return "sheet" if self.desktop else "drawer"

    @property
    def template(self) -> str:
        return f"transaction_{self.variant}.html"

    @property
    def content_class(self) -> str:
        return "" if self.desktop else "p-6"

    def on_open_change(self, open: bool) -> Optional[bool]:
        """
        New open state to hand back to the owner, or None to ignore the event.
        The drawer can only be dismissed from inside; re-opening is the owner's call.
        """
        if self.desktop:
            return open
        return False if not open else None

    def context(self) -> Dict[str, Any]:
        return {
            "sheet": self,
            "transaction": self.data,
            "ids": self.ids,
        }


def transaction_sheet_for(req, data: Dict[str, Any], ids: Optional[List[str]] = None, is_open: bool = True) -> TransactionSheet:
    return TransactionSheet(is_open=is_open, data=data, ids=list(ids or []), desktop=is_desktop(req))

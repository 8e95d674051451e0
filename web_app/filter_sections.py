# web_app/filter_sections.py
# Metadata for the transactions table filter menu (sections + options).
from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from dateutil.relativedelta import relativedelta

from teamledger import filter_config as fc
from teamledger.dates import end_of_month, start_of_month, start_of_year


class SectionType(str, Enum):
    date = "date"
    checkbox = "checkbox"
    radio = "radio"


def _range(option_id: str, label: str, start: date, end: date) -> Dict[str, Any]:
    return {"id": option_id, "label": label, "from": start.isoformat(), "to": end.isoformat()}


def date_options(today: date) -> List[Dict[str, Any]]:
    last_month = today - relativedelta(months=1)
    return [
        _range("today", "Today", today, today),
        _range("this_month", "This month", start_of_month(today), today),
        _range("last_month", "Last month", start_of_month(last_month), end_of_month(last_month)),
        _range("last_30_days", "Last 30 days", today - timedelta(days=30), today),
        # anchored one month back, so during January this is still last year
        _range("this_year", "This year", start_of_year(last_month), today),
    ]


def build_sections(today: Optional[date] = None) -> List[Dict[str, Any]]:
    today = today or date.today()
    return [
        {
            "id": "date",
            "label": "Date",
            "icon": "calendar",
            "type": SectionType.date.value,
            "options": date_options(today),
        },
        {
            "id": "status",
            "label": "Status",
            "icon": "tag",
            "type": SectionType.checkbox.value,
            "options": [
                {
                    "id": fc.STATUS_FULFILLED,
                    "label": "Fullfilled",
                    "description": "Transactions with the status Fullfilled",
                },
                {
                    "id": fc.STATUS_UNFULFILLED,
                    "label": "Unfulfilled",
                    "description": "Transactions with the status Unfulfilled",
                },
                {
                    "id": fc.STATUS_EXCLUDED,
                    "label": "Excluded",
                    "description": "Transactions with the status Excluded",
                },
            ],
        },
        {
            "id": "attachments",
            "label": "Attachments",
            "icon": "paperclip",
            "type": SectionType.radio.value,
            "defaultValue": "all",
            "options": [
                {"id": "all", "label": "All"},
                {"id": "include", "label": "Has attachment"},
                {"id": "exclude", "label": "No attachment"},
            ],
        },
        {
            "id": "categories",
            "label": "Categories",
            "icon": "archive",
            "type": SectionType.checkbox.value,
            "options": [
                {"id": slug, "label": label, "translationKey": f"categories.{slug}"}
                for slug, label in fc.CATEGORIES.items()
            ],
        },
    ]

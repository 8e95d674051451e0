"""Tests for the transaction sheet/drawer choice and the filter section metadata."""

from datetime import date

import pytest
from flask import Flask

from teamledger import filter_config as fc
from web_app.filter_sections import SectionType, build_sections
from web_app.transaction_sheet import TransactionSheet, is_desktop

_app = Flask(__name__)

IPHONE_UA = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) Mobile/15E148"
MAC_UA = "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/605.1.15"


@pytest.mark.parametrize("path,headers,expected", [
    ("/", {"User-Agent": MAC_UA}, True),
    ("/", {"User-Agent": IPHONE_UA}, False),
    ("/", {}, True),
    ("/", {"Sec-CH-Viewport-Width": "768", "User-Agent": IPHONE_UA}, True),
    ("/", {"Sec-CH-Viewport-Width": "767"}, False),
    ("/?vw=1024", {"User-Agent": IPHONE_UA}, True),
    ("/", {"Sec-CH-UA-Mobile": "?1", "User-Agent": MAC_UA}, False),
    ("/", {"Sec-CH-UA-Mobile": "?0", "User-Agent": IPHONE_UA}, True),
    ("/?vw=wide", {"User-Agent": IPHONE_UA}, False),
])
def test_is_desktop(path, headers, expected):
    with _app.test_request_context(path, headers=headers):
        from flask import request
        assert is_desktop(request) is expected


def test_sheet_forwards_every_open_change():
    sheet = TransactionSheet(is_open=True, data={"id": "x"}, desktop=True)
    assert sheet.variant == "sheet"
    assert sheet.template == "transaction_sheet.html"
    assert sheet.on_open_change(False) is False
    assert sheet.on_open_change(True) is True


def test_drawer_only_forwards_close():
    drawer = TransactionSheet(is_open=True, data={"id": "x"}, ids=["a"], desktop=False)
    assert drawer.variant == "drawer"
    assert drawer.content_class == "p-6"
    assert drawer.on_open_change(False) is False
    assert drawer.on_open_change(True) is None
    assert drawer.context()["ids"] == ["a"]


def test_sections_layout():
    sections = build_sections(today=date(2024, 3, 15))
    assert [s["id"] for s in sections] == ["date", "status", "attachments", "categories"]
    assert [s["type"] for s in sections] == [
        SectionType.date.value,
        SectionType.checkbox.value,
        SectionType.radio.value,
        SectionType.checkbox.value,
    ]
    attachments = sections[2]
    assert attachments["defaultValue"] == "all"
    assert [o["id"] for o in attachments["options"]] == ["all", "include", "exclude"]
    assert [o["id"] for o in sections[1]["options"]] == ["fullfilled", "unfulfilled", "excluded"]


def test_date_options_relative_to_today():
    options = {o["id"]: (o["from"], o["to"]) for o in build_sections(today=date(2024, 3, 15))[0]["options"]}
    assert options == {
        "today": ("2024-03-15", "2024-03-15"),
        "this_month": ("2024-03-01", "2024-03-15"),
        "last_month": ("2024-02-01", "2024-02-29"),
        "last_30_days": ("2024-02-14", "2024-03-15"),
        "this_year": ("2024-01-01", "2024-03-15"),
    }


def test_this_year_in_january_reaches_back_a_year():
    options = {o["id"]: o for o in build_sections(today=date(2024, 1, 10))[0]["options"]}
    assert options["this_year"]["from"] == "2023-01-01"
    assert options["last_month"]["from"] == "2023-12-01"
    assert options["last_month"]["to"] == "2023-12-31"


def test_category_options_have_translation_keys():
    categories = build_sections(today=date(2024, 3, 15))[3]["options"]
    assert [o["id"] for o in categories] == list(fc.CATEGORIES)
    assert categories[0]["translationKey"] == f"categories.{categories[0]['id']}"

from datetime import date, datetime, timezone

from teamledger.dates import (
    end_of_month,
    month_window,
    parse_timestamp,
    shift_years,
    start_of_month,
    to_date,
)


def test_to_date_accepts_strings_and_datetimes():
    assert to_date("2024-05-17") == date(2024, 5, 17)
    assert to_date("2024-05-17T23:30:00-02:00") == date(2024, 5, 18)
    assert to_date(datetime(2024, 5, 17, 8)) == date(2024, 5, 17)


def test_month_bounds():
    assert start_of_month("2024-02-17") == date(2024, 2, 1)
    assert end_of_month("2024-02-17") == date(2024, 2, 29)
    assert end_of_month("2023-02-01") == date(2023, 2, 28)


def test_shift_years_clamps_leap_day():
    assert shift_years(date(2024, 2, 29), -1) == date(2023, 2, 28)


def test_month_window():
    assert month_window("2024-01-20", "2024-03-02") == ("2024-01-01", "2024-03-31")
    assert month_window("2024-01-20", "2024-02-02", years_back=1) == ("2023-01-01", "2023-02-28")


def test_parse_timestamp_assumes_utc():
    assert parse_timestamp("2024-01-01T10:00:00") == datetime(2024, 1, 1, 10, tzinfo=timezone.utc)
    assert parse_timestamp(None) is None

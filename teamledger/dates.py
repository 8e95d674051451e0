# teamledger/dates.py
from datetime import date, datetime, timezone
from typing import Optional, Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

DateLike = Union[str, date, datetime]


# === Date helpers ===
def to_date(value: DateLike) -> date:
    """Accept 'YYYY-MM-DD', a full ISO timestamp, a date or a datetime."""
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc).date() if value.tzinfo else value.date()
    if isinstance(value, date):
        return value
    dt = isoparse(str(value).strip())
    if dt.tzinfo:
        dt = dt.astimezone(timezone.utc)
    return dt.date()


def start_of_month(value: DateLike) -> date:
    return to_date(value).replace(day=1)


def end_of_month(value: DateLike) -> date:
    # day=31 clamps to the last day of the month
    return to_date(value) + relativedelta(day=31)


def start_of_year(value: DateLike) -> date:
    return to_date(value).replace(month=1, day=1)


def shift_years(value: DateLike, years: int) -> date:
    return to_date(value) + relativedelta(years=years)


def iso(value: DateLike) -> str:
    return to_date(value).isoformat()


def month_window(from_: DateLike, to: DateLike, years_back: int = 0) -> tuple[str, str]:
    """Month-aligned (date_from, date_to) strings, optionally shifted back whole years."""
    start = start_of_month(from_)
    end = end_of_month(to)
    if years_back:
        start = shift_years(start, -years_back)
        end = shift_years(end, -years_back)
    return start.isoformat(), end.isoformat()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a Postgres timestamp string into an aware UTC datetime."""
    if not value:
        return None
    dt = isoparse(str(value))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def utcnow() -> datetime:
    return datetime.now(timezone.utc)

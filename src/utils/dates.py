from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from src.utils.datetime_tz import to_local_naive

RawDate = str | date | datetime | None

_DMY = re.compile(r"^(\d{1,2})[./](\d{1,2})[./](\d{4})$")
_DMY_SHORT = re.compile(r"^(\d{1,2})[./](\d{1,2})[./](\d{2})$")

_MON_RU = ["янв", "фев", "мар", "апр", "май", "июн", "июл", "авг", "сен", "окт", "ноя", "дек"]


def _safe_datetime(year: int, month: int, day: int) -> datetime | None:
    try:
        return datetime(year, month, day)
    except ValueError:
        return None


def parse_date(value: RawDate, tz: ZoneInfo | None = None) -> datetime | None:
    """Parse a record date into a naive local datetime, or None.

    Accepts date/datetime objects, ISO strings (optional trailing 'Z'),
    'DD.MM.YYYY' / 'DD/MM/YYYY' and 'DD.MM.YY' (yy <= 30 -> 20yy, else 19yy).
    Aware values are converted to `tz`, or the bound farm zone when omitted.
    Never raises.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_local_naive(value, tz)
    if isinstance(value, date):
        return datetime.combine(value, time(0, 0))
    if not isinstance(value, str):
        return None

    s = value.strip()
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return to_local_naive(datetime.fromisoformat(s), tz)
    except ValueError:
        pass

    m = _DMY.match(s)
    if m:
        return _safe_datetime(int(m.group(3)), int(m.group(2)), int(m.group(1)))
    m = _DMY_SHORT.match(s)
    if m:
        yy = int(m.group(3))
        year = 2000 + yy if yy <= 30 else 1900 + yy
        return _safe_datetime(year, int(m.group(2)), int(m.group(1)))
    return None


def days_between(start: datetime | None, end: datetime | None) -> int | None:
    """Whole calendar days from `start` to `end` (time of day ignored)."""
    if start is None or end is None:
        return None
    return (end.date() - start.date()).days


def add_days(d: datetime, days: int) -> datetime:
    return d + timedelta(days=days)


def shift_months(d: datetime, months: int) -> datetime:
    # relativedelta clamps to the last valid day (Mar 31 - 1 month -> Feb 29)
    return d + relativedelta(months=months)


def month_start(d: datetime) -> datetime:
    return datetime(d.year, d.month, 1)


def month_end(d: datetime) -> datetime:
    """Midnight of the last calendar day of `d`'s month."""
    return datetime(d.year, d.month, calendar.monthrange(d.year, d.month)[1])


def month_label(d: datetime) -> str:
    """Short month tag, e.g. 'мар 2024'."""
    return f"{_MON_RU[d.month - 1]} {d.year}"

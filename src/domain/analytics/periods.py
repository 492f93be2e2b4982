from __future__ import annotations

from datetime import datetime

from src.domain.models.report import PeriodBounds
from src.domain.value_objects.period_kind import PeriodKind
from src.utils.dates import RawDate, month_end, month_start, parse_date, shift_months
from src.utils.datetime_tz import local_now


def default_window(now: datetime) -> PeriodBounds:
    """First day of the previous month up to `now`."""
    return PeriodBounds(start=shift_months(month_start(now), -1), end=now)


def resolve_period(
    kind: str | PeriodKind | None,
    date_from: RawDate = None,
    date_to: RawDate = None,
    *,
    now: datetime | None = None,
) -> PeriodBounds:
    now = now or local_now()
    kind = PeriodKind.parse(kind)
    if kind is PeriodKind.CUSTOM:
        start = parse_date(date_from)
        end = parse_date(date_to)
        if start is not None and end is not None and start <= end:
            return PeriodBounds(start=start, end=end)
        return default_window(now)
    return PeriodBounds(start=shift_months(now, -kind.months_back), end=now)


def split_months(bounds: PeriodBounds) -> list[PeriodBounds]:
    """One [first day, last day] window per calendar month touched by `bounds`."""
    months: list[PeriodBounds] = []
    cursor = month_start(bounds.start)
    last = month_start(bounds.end)
    while cursor <= last:
        months.append(PeriodBounds(start=cursor, end=month_end(cursor)))
        cursor = shift_months(cursor, 1)
    return months

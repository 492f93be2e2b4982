from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from src.domain.analytics.timeline import dated_events, normalize_history
from src.domain.models.animal import AnimalRecord
from src.domain.models.report import PeriodBounds
from src.domain.value_objects.animal_status import StatusMarkers, is_culled
from src.utils.dates import add_days, parse_date


def coerce_pdo(value: Any) -> int:
    """Voluntary waiting period in days; anything invalid counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


def waiting_period_end(record: AnimalRecord, pdo: int) -> datetime | None:
    calving = parse_date(record.calving_date)
    return add_days(calving, pdo) if calving is not None else None


def anchor_date(record: AnimalRecord) -> datetime | None:
    """Latest insemination date, else calving date, else the date the record was added."""
    dated = dated_events(normalize_history(record))
    if dated:
        return dated[-1].parsed_date
    return parse_date(record.calving_date) or parse_date(record.date_added)


def is_eligible(
    record: AnimalRecord,
    bounds: PeriodBounds,
    pdo: int,
    markers: StatusMarkers | None = None,
) -> bool:
    if is_culled(record.status, markers):
        return False
    # Heifers (lactation 0) and unknown lactations stay out of KPI denominators
    if record.lactation_number is None or record.lactation_number < 1:
        return False
    pdo_end = waiting_period_end(record, pdo)
    if pdo_end is None or pdo_end > bounds.end:
        return False
    return bounds.contains(anchor_date(record))


def filter_eligible(
    records: Iterable[AnimalRecord],
    bounds: PeriodBounds,
    pdo: Any,
    markers: StatusMarkers | None = None,
) -> list[AnimalRecord]:
    pdo = coerce_pdo(pdo)
    return [r for r in records if is_eligible(r, bounds, pdo, markers)]

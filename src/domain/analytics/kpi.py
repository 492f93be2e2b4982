"""Reproductive KPIs over an eligible set of animals.

CR  = pregnant-from-period / inseminations-in-period
HDR = mean over inseminated animals of min(1, days(calving+PDO -> last insemination) / 21)
PR  = HDR * CR

All percentages carry one decimal and are rounded half away from zero in the
same order as the herd-management reference figures, so values reproduce
exactly.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime

from src.domain.analytics.eligibility import coerce_pdo, waiting_period_end
from src.domain.analytics.timeline import dated_events, normalize_history
from src.domain.models.animal import AnimalRecord
from src.domain.models.report import PeriodBounds, Report
from src.domain.value_objects.animal_status import StatusMarkers, is_culled, is_pregnant
from src.domain.value_objects.breakdown_dimension import BLANK_KEY
from src.utils.dates import days_between, parse_date

ESTRUS_CYCLE_DAYS = 21


def round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def inseminations_in_period(
    record: AnimalRecord, bounds: PeriodBounds, pdo: int
) -> list[datetime]:
    """Insemination dates inside `bounds` and not before calving + PDO."""
    pdo_end = waiting_period_end(record, pdo)
    dates: list[datetime] = []
    for ev in dated_events(normalize_history(record)):
        when = ev.parsed_date
        if not bounds.contains(when):
            continue
        if pdo_end is not None and when < pdo_end:
            continue
        dates.append(when)
    return dates


def last_insemination_in_period(
    record: AnimalRecord, bounds: PeriodBounds, pdo: int
) -> datetime | None:
    dates = inseminations_in_period(record, bounds, pdo)
    return dates[-1] if dates else None


def calculate_cr(
    records: Sequence[AnimalRecord],
    bounds: PeriodBounds,
    pdo: int,
    markers: StatusMarkers | None = None,
) -> float:
    total = 0
    pregnant_from_period = 0
    for record in records:
        dates = inseminations_in_period(record, bounds, pdo)
        total += len(dates)
        if dates and is_pregnant(record.status, markers):
            pregnant_from_period += 1
    if total == 0:
        return 0.0
    return round_half_away(pregnant_from_period / total * 1000) / 10


def calculate_hdr(records: Sequence[AnimalRecord], bounds: PeriodBounds, pdo: int) -> float:
    ratio_sum = 0.0
    count = 0
    for record in records:
        last = last_insemination_in_period(record, bounds, pdo)
        pdo_end = waiting_period_end(record, pdo)
        days = days_between(pdo_end, last)
        if days is None:
            continue
        ratio_sum += min(1.0, days / ESTRUS_CYCLE_DAYS)
        count += 1
    if count == 0:
        return 0.0
    average = ratio_sum / count * 100
    return round_half_away(min(100.0, average) * 10) / 10


def calculate_pr(hdr: float, cr: float) -> float:
    return round_half_away(hdr / 100 * (cr / 100) * 1000) / 10


def average_service_period(records: Sequence[AnimalRecord]) -> int | None:
    """Mean days from calving to first insemination, over animals where it is >= 0."""
    total = 0
    count = 0
    for record in records:
        calving = parse_date(record.calving_date)
        dated = dated_events(normalize_history(record))
        if calving is None or not dated:
            continue
        first = dated[0].parsed_date
        if first < calving:
            continue
        total += days_between(calving, first)
        count += 1
    if count == 0:
        return None
    return round_half_away(total / count)


def count_statuses(
    records: Sequence[AnimalRecord], markers: StatusMarkers | None = None
) -> dict[str, int]:
    counts: dict[str, int] = {}
    for record in records:
        if is_culled(record.status, markers):
            continue
        key = (record.status or "").strip() or BLANK_KEY
        counts[key] = counts.get(key, 0) + 1
    return counts


def build_report(
    records: Sequence[AnimalRecord],
    bounds: PeriodBounds,
    pdo: int,
    markers: StatusMarkers | None = None,
) -> Report:
    pdo = coerce_pdo(pdo)
    cr = calculate_cr(records, bounds, pdo, markers)
    hdr = calculate_hdr(records, bounds, pdo)

    inseminated = 0
    pregnant = 0
    total_inseminations = 0
    for record in records:
        n = len(inseminations_in_period(record, bounds, pdo))
        total_inseminations += n
        if n > 0:
            inseminated += 1
        if is_pregnant(record.status, markers):
            pregnant += 1

    return Report(
        bounds=bounds,
        pdo=pdo,
        total_animals=len(records),
        pr=calculate_pr(hdr, cr),
        cr=cr,
        hdr=hdr,
        service_period_days=average_service_period(records),
        inseminated_count=inseminated,
        pregnant_count=pregnant,
        total_inseminations=total_inseminations,
        status_counts=count_statuses(records, markers),
    )

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from enum import Enum

from src.domain.models.animal import AnimalRecord, coerce_lactation
from src.domain.models.insemination import InseminationEvent, TimelineEvent
from src.domain.value_objects.animal_status import StatusMarkers, is_gestating
from src.utils.dates import RawDate, days_between, parse_date


class LactationInference(str, Enum):
    """How to assign a lactation to events when the record has none."""

    CALVING_DATE = "calving_date"  # before calving -> 1, on/after -> 2
    STRICT = "strict"  # leave unknown


def resolve_lactation(
    event_date: datetime | None,
    calving_date: datetime | None,
    lactation_number: int | None,
    inference: LactationInference = LactationInference.CALVING_DATE,
) -> int | None:
    if lactation_number is not None and lactation_number >= 0:
        return lactation_number
    if inference is LactationInference.STRICT:
        return None
    if event_date is None or calving_date is None:
        return 1
    return 1 if event_date < calving_date else 2


def normalize_events(
    events: Iterable[InseminationEvent],
    *,
    lactation_number: int | None,
    calving_date: RawDate,
    inference: LactationInference = LactationInference.CALVING_DATE,
) -> list[TimelineEvent]:
    parsed = [(parse_date(ev.date), ev) for ev in events]
    # Stable sort: dated events ascending, undated ones last in input order
    parsed.sort(key=lambda pair: (pair[0] is None, pair[0] or datetime.min))

    lactation_number = coerce_lactation(lactation_number)
    calving = parse_date(calving_date)
    timeline: list[TimelineEvent] = []
    for when, ev in parsed:
        lactation = resolve_lactation(when, calving, lactation_number, inference)
        days: int | None = None
        if timeline:
            prev = timeline[-1]
            if lactation is not None and lactation == prev.lactation:
                days = days_between(prev.parsed_date, when)
        timeline.append(
            TimelineEvent(
                date=ev.date,
                attempt_number=ev.attempt_number,
                bull=ev.bull,
                inseminator=ev.inseminator,
                code=ev.code,
                parsed_date=when,
                lactation=lactation,
                days_from_previous=days,
            )
        )
    return timeline


def normalize_history(
    record: AnimalRecord,
    inference: LactationInference = LactationInference.CALVING_DATE,
) -> list[TimelineEvent]:
    """Sorted, lactation-tagged insemination timeline of one animal."""
    return normalize_events(
        record.raw_inseminations(),
        lactation_number=record.lactation_number,
        calving_date=record.calving_date,
        inference=inference,
    )


def dated_events(timeline: Iterable[TimelineEvent]) -> list[TimelineEvent]:
    return [ev for ev in timeline if ev.parsed_date is not None]


def next_attempt_number(
    record: AnimalRecord,
    lactation: int | None = None,
    inference: LactationInference = LactationInference.CALVING_DATE,
) -> int:
    """Attempt number the next insemination in `lactation` would get.

    Defaults to the record's own lactation (1 when unknown).
    """
    if lactation is None:
        lactation = record.lactation_number if record.lactation_number is not None else 1
    timeline = normalize_history(record, inference)
    return sum(1 for ev in dated_events(timeline) if ev.lactation == lactation) + 1


def service_period_for(record: AnimalRecord) -> int | None:
    """Days from calving to the earliest insemination; None if not computable."""
    calving = parse_date(record.calving_date)
    dated = dated_events(normalize_history(record))
    if calving is None or not dated:
        return None
    days = days_between(calving, dated[0].parsed_date)
    return days if days is not None and days >= 0 else None


def _last_insemination_date(record: AnimalRecord) -> datetime | None:
    dated = dated_events(normalize_history(record))
    return dated[-1].parsed_date if dated else None


def days_since_last_insemination(record: AnimalRecord, today: datetime) -> int | None:
    days = days_between(_last_insemination_date(record), today)
    return days if days is not None and days >= 0 else None


def days_pregnant(
    record: AnimalRecord,
    today: datetime,
    markers: StatusMarkers | None = None,
) -> int | None:
    """Days since the last insemination, only while the status says in calf."""
    if not is_gestating(record.status, markers):
        return None
    return days_since_last_insemination(record, today)

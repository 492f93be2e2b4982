from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from src.config.settings import Settings
from src.domain.analytics.timeline import normalize_history
from src.domain.models.animal import AnimalRecord
from src.utils.dates import RawDate, parse_date

logger = logging.getLogger(__name__)


class JournalSortKey(str, Enum):
    DATE = "date"
    ANIMAL_ID = "animal_id"
    NICKNAME = "nickname"
    LACTATION = "lactation"
    ATTEMPT_NUMBER = "attempt_number"
    BULL = "bull"
    INSEMINATOR = "inseminator"
    CODE = "code"
    DAYS_FROM_PREVIOUS = "days_from_previous"


@dataclass(slots=True)
class JournalRow:
    animal_id: str
    nickname: str
    lactation: int | None
    date: RawDate
    parsed_date: datetime | None
    attempt_number: int
    bull: str
    inseminator: str
    code: str
    days_from_previous: int | None


@dataclass(slots=True)
class ListInseminationsInput:
    query: str = ""
    date_from: RawDate = None
    date_to: RawDate = None
    lactation: int | None = None
    sort_by: JournalSortKey = JournalSortKey.DATE
    descending: bool = False


def flatten_journal(records: Sequence[AnimalRecord], settings: Settings) -> list[JournalRow]:
    rows: list[JournalRow] = []
    for record in records:
        for event in normalize_history(record, settings.lactation_inference):
            rows.append(
                JournalRow(
                    animal_id=record.animal_id,
                    nickname=record.nickname or "",
                    lactation=event.lactation,
                    date=event.date,
                    parsed_date=event.parsed_date,
                    attempt_number=event.attempt_number,
                    bull=event.bull or "",
                    inseminator=event.inseminator or "",
                    code=event.code or "",
                    days_from_previous=event.days_from_previous,
                )
            )
    return rows


def _matches_query(row: JournalRow, query: str) -> bool:
    haystack = (row.animal_id, row.nickname, row.bull, row.code, row.inseminator)
    return any(query in (value or "").lower() for value in haystack)


def _sort_value(row: JournalRow, key: JournalSortKey) -> Any:
    if key is JournalSortKey.LACTATION:
        return row.lactation if row.lactation is not None else 0
    if key is JournalSortKey.ATTEMPT_NUMBER:
        return row.attempt_number or 0
    if key is JournalSortKey.DAYS_FROM_PREVIOUS:
        return row.days_from_previous if row.days_from_previous is not None else -1
    return str(getattr(row, key.value) or "").lower()


def _sort_rows(rows: list[JournalRow], key: JournalSortKey, descending: bool) -> list[JournalRow]:
    if key is JournalSortKey.DATE:
        # Undated rows stay at the end in either direction
        dated = [r for r in rows if r.parsed_date is not None]
        undated = [r for r in rows if r.parsed_date is None]
        dated.sort(key=lambda r: r.parsed_date, reverse=descending)
        return dated + undated
    return sorted(rows, key=lambda r: _sort_value(r, key), reverse=descending)


def execute(
    records: Sequence[AnimalRecord],
    payload: ListInseminationsInput,
    settings: Settings,
) -> list[JournalRow]:
    rows = flatten_journal(records, settings)

    query = payload.query.strip().lower()
    if query:
        rows = [r for r in rows if _matches_query(r, query)]
    date_from = parse_date(payload.date_from)
    if date_from is not None:
        rows = [r for r in rows if r.parsed_date is not None and r.parsed_date >= date_from]
    date_to = parse_date(payload.date_to)
    if date_to is not None:
        rows = [r for r in rows if r.parsed_date is not None and r.parsed_date <= date_to]
    if payload.lactation is not None:
        rows = [r for r in rows if r.lactation == payload.lactation]

    rows = _sort_rows(rows, payload.sort_by, payload.descending)
    logger.debug("Insemination journal: %d rows from %d animals", len(rows), len(records))
    return rows

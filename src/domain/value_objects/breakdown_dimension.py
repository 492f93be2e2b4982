from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from src.domain.models.animal import AnimalRecord

BLANK_KEY = "—"


def _label_key(value: str | None) -> str:
    return (value or "").strip() or BLANK_KEY


def _group_key(record: AnimalRecord) -> str:
    return _label_key(record.group)


def _lactation_key(record: AnimalRecord) -> str:
    if record.lactation_number is None:
        return BLANK_KEY
    return str(record.lactation_number)


def _inseminator_key(record: AnimalRecord) -> str:
    return _label_key(record.inseminator)


def _bull_key(record: AnimalRecord) -> str:
    return _label_key(record.bull)


class BreakdownDimension(str, Enum):
    GROUP = "group"
    LACTATION = "lactation"
    INSEMINATOR = "inseminator"
    BULL = "bull"

    @property
    def title(self) -> str:
        return _TITLES[self]

    def key_for(self, record: AnimalRecord) -> str:
        return _EXTRACTORS[self](record)


_EXTRACTORS: dict[BreakdownDimension, Callable[[AnimalRecord], str]] = {
    BreakdownDimension.GROUP: _group_key,
    BreakdownDimension.LACTATION: _lactation_key,
    BreakdownDimension.INSEMINATOR: _inseminator_key,
    BreakdownDimension.BULL: _bull_key,
}

_TITLES: dict[BreakdownDimension, str] = {
    BreakdownDimension.GROUP: "Группа",
    BreakdownDimension.LACTATION: "Лактация",
    BreakdownDimension.INSEMINATOR: "Осеменатор",
    BreakdownDimension.BULL: "Бык",
}

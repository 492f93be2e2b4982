from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from src.utils.dates import RawDate


@dataclass(slots=True)
class InseminationEvent:
    date: RawDate
    attempt_number: int = 1
    bull: str = ""
    inseminator: str = ""
    code: str = ""


@dataclass(slots=True)
class TimelineEvent(InseminationEvent):
    """An insemination placed on an animal's normalized timeline.

    `parsed_date`, `lactation` and `days_from_previous` are derived on every
    query and never written back to the source record.
    """

    parsed_date: datetime | None = None
    lactation: int | None = None
    days_from_previous: int | None = None

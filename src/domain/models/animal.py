from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.domain.models.insemination import InseminationEvent
from src.utils.dates import RawDate


def coerce_lactation(value: Any) -> int | None:
    """Return a non-negative lactation number, or None when unknown/invalid."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        return int(value) if value >= 0 and value == int(value) else None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = int(text)
    except ValueError:
        return None
    return number if number >= 0 else None


@dataclass(slots=True)
class AnimalRecord:
    animal_id: str
    nickname: str | None = None
    lactation_number: int | None = None
    calving_date: RawDate = None
    status: str | None = None
    group: str | None = None

    # Legacy single-insemination fields; inseminator/bull also key breakdowns
    insemination_date: RawDate = None
    attempt_number: int | None = None
    bull: str | None = None
    inseminator: str | None = None
    code: str | None = None

    insemination_history: list[InseminationEvent] = field(default_factory=list)
    date_added: RawDate = None

    def __post_init__(self) -> None:
        self.lactation_number = coerce_lactation(self.lactation_number)

    def legacy_insemination(self) -> list[InseminationEvent]:
        if not self.insemination_date:
            return []
        return [
            InseminationEvent(
                date=self.insemination_date,
                attempt_number=self.attempt_number or 1,
                bull=self.bull or "",
                inseminator=self.inseminator or "",
                code=self.code or "",
            )
        ]

    def raw_inseminations(self) -> list[InseminationEvent]:
        """History when present and non-empty, otherwise the legacy event."""
        if self.insemination_history:
            return list(self.insemination_history)
        return self.legacy_insemination()

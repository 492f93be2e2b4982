from __future__ import annotations

from enum import Enum


class PeriodKind(str, Enum):
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"

    @property
    def months_back(self) -> int:
        if self is PeriodKind.QUARTER:
            return 3
        if self is PeriodKind.YEAR:
            return 12
        return 1

    @classmethod
    def parse(cls, value: str | PeriodKind | None) -> PeriodKind:
        """Unrecognized kinds fall back to MONTH."""
        if isinstance(value, PeriodKind):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.MONTH

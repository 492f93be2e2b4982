from __future__ import annotations

from enum import Enum


class LactationFilter(str, Enum):
    ALL = ""
    HEIFERS = "0"
    FIRST = "1"
    SECOND_PLUS = "2+"
    LACTATING = "1+2+"

    def matches(self, lactation: int | None) -> bool:
        if self is LactationFilter.ALL:
            return True
        # Unknown lactation never matches an active filter
        if lactation is None:
            return False
        if self is LactationFilter.HEIFERS:
            return lactation == 0
        if self is LactationFilter.FIRST:
            return lactation == 1
        if self is LactationFilter.SECOND_PLUS:
            return lactation >= 2
        return lactation >= 1

    @classmethod
    def parse(cls, value: str | LactationFilter | None) -> LactationFilter:
        if isinstance(value, LactationFilter):
            return value
        try:
            return cls((value or "").strip())
        except ValueError:
            return cls.ALL

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class PeriodBounds:
    """Inclusive reporting window, start <= end."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime | None) -> bool:
        return moment is not None and self.start <= moment <= self.end


@dataclass(slots=True)
class Report:
    bounds: PeriodBounds
    pdo: int
    total_animals: int = 0
    pr: float = 0.0
    cr: float = 0.0
    hdr: float = 0.0
    service_period_days: int | None = None
    inseminated_count: int = 0
    pregnant_count: int = 0
    total_inseminations: int = 0
    status_counts: dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class BreakdownRow:
    key: str
    report: Report


@dataclass(slots=True)
class MonthlyPoint:
    label: str
    start: datetime
    end: datetime
    pr: float
    cr: float
    hdr: float


@dataclass(slots=True, frozen=True)
class IntervalBucket:
    label: str
    min_days: int
    max_days: int | None = None  # None = open-ended

    def contains(self, days: int) -> bool:
        if days < self.min_days:
            return False
        return self.max_days is None or days <= self.max_days


INTERVAL_BUCKETS: tuple[IntervalBucket, ...] = (
    IntervalBucket("1-3 дня", 1, 3),
    IntervalBucket("4-17 дней", 4, 17),
    IntervalBucket("18-24 дня", 18, 24),
    IntervalBucket("25-35 дней", 25, 35),
    IntervalBucket("36-48 дней", 36, 48),
    IntervalBucket("Свыше 48 дней", 49, None),
)


@dataclass(slots=True)
class BucketCount:
    label: str
    count: int = 0


@dataclass(slots=True)
class IntervalDistribution:
    buckets: list[BucketCount]
    no_data_count: int = 0
    total: int = 0

from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.domain.analytics.timeline import LactationInference, normalize_history
from src.domain.models.animal import AnimalRecord
from src.domain.models.report import (
    INTERVAL_BUCKETS,
    BucketCount,
    IntervalBucket,
    IntervalDistribution,
)
from src.domain.value_objects.lactation_filter import LactationFilter


def find_bucket(days: int, buckets: Sequence[IntervalBucket]) -> IntervalBucket | None:
    for bucket in buckets:
        if bucket.contains(days):
            return bucket
    return None


def analyze_intervals(
    records: Iterable[AnimalRecord],
    *,
    lactation_filter: LactationFilter = LactationFilter.ALL,
    buckets: Sequence[IntervalBucket] = INTERVAL_BUCKETS,
    inference: LactationInference = LactationInference.CALVING_DATE,
) -> IntervalDistribution:
    """Distribution of days between consecutive inseminations, herd-wide.

    Animals with fewer than two inseminations have no interval and are left
    out. Every later insemination yields one gap: either a bucket hit or a
    "no data" entry (new lactation, undated event, or a value no bucket
    covers).
    """
    counts = {bucket.label: 0 for bucket in buckets}
    no_data = 0
    for record in records:
        if not lactation_filter.matches(record.lactation_number):
            continue
        timeline = normalize_history(record, inference)
        if len(timeline) < 2:
            continue
        for event in timeline[1:]:
            days = event.days_from_previous
            bucket = find_bucket(days, buckets) if days is not None else None
            if bucket is None:
                no_data += 1
            else:
                counts[bucket.label] += 1

    return IntervalDistribution(
        buckets=[BucketCount(label=b.label, count=counts[b.label]) for b in buckets],
        no_data_count=no_data,
        total=sum(counts.values()) + no_data,
    )

from __future__ import annotations

from collections.abc import Sequence

from src.domain.analytics.kpi import build_report
from src.domain.models.animal import AnimalRecord
from src.domain.models.report import BreakdownRow, PeriodBounds
from src.domain.value_objects.animal_status import StatusMarkers
from src.domain.value_objects.breakdown_dimension import BreakdownDimension


def partition(
    records: Sequence[AnimalRecord], dimension: BreakdownDimension
) -> dict[str, list[AnimalRecord]]:
    groups: dict[str, list[AnimalRecord]] = {}
    for record in records:
        groups.setdefault(dimension.key_for(record), []).append(record)
    return groups


def build_breakdown(
    records: Sequence[AnimalRecord],
    dimension: BreakdownDimension,
    bounds: PeriodBounds,
    pdo: int,
    markers: StatusMarkers | None = None,
) -> list[BreakdownRow]:
    groups = partition(records, dimension)
    return [
        BreakdownRow(key=key, report=build_report(groups[key], bounds, pdo, markers))
        for key in sorted(groups)
    ]

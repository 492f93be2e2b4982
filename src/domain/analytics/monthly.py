from __future__ import annotations

from collections.abc import Sequence

from src.domain.analytics.eligibility import filter_eligible
from src.domain.analytics.kpi import build_report
from src.domain.analytics.periods import split_months
from src.domain.models.animal import AnimalRecord
from src.domain.models.report import MonthlyPoint, PeriodBounds
from src.domain.value_objects.animal_status import StatusMarkers
from src.utils.dates import month_label


def build_monthly_series(
    records: Sequence[AnimalRecord],
    bounds: PeriodBounds,
    pdo: int,
    markers: StatusMarkers | None = None,
) -> list[MonthlyPoint]:
    """PR/CR/HDR per calendar month, each month filtered on its own window."""
    series: list[MonthlyPoint] = []
    for month in split_months(bounds):
        eligible = filter_eligible(records, month, pdo, markers)
        report = build_report(eligible, month, pdo, markers)
        series.append(
            MonthlyPoint(
                label=month_label(month.start),
                start=month.start,
                end=month.end,
                pr=report.pr,
                cr=report.cr,
                hdr=report.hdr,
            )
        )
    return series

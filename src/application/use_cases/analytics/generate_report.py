from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from src.config.settings import Settings
from src.domain.analytics.breakdown import build_breakdown
from src.domain.analytics.eligibility import coerce_pdo, filter_eligible
from src.domain.analytics.kpi import build_report
from src.domain.analytics.monthly import build_monthly_series
from src.domain.analytics.periods import resolve_period
from src.domain.models.animal import AnimalRecord
from src.domain.models.report import BreakdownRow, MonthlyPoint, Report
from src.domain.value_objects.breakdown_dimension import BreakdownDimension
from src.domain.value_objects.period_kind import PeriodKind
from src.utils.dates import RawDate
from src.utils.datetime_tz import get_farm_tz, local_now

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GenerateReportInput:
    period: PeriodKind | str | None = None
    date_from: RawDate = None
    date_to: RawDate = None
    pdo: int | str | None = None
    breakdown_by: BreakdownDimension | None = None
    include_monthly: bool = True
    now: datetime | None = None


@dataclass(slots=True)
class GenerateReportOutput:
    report: Report
    breakdown: list[BreakdownRow] = field(default_factory=list)
    monthly: list[MonthlyPoint] = field(default_factory=list)
    breakdown_by: BreakdownDimension | None = None


def execute(
    records: Sequence[AnimalRecord],
    payload: GenerateReportInput,
    settings: Settings,
) -> GenerateReportOutput:
    period = payload.period if payload.period is not None else settings.default_period
    pdo = coerce_pdo(payload.pdo) if payload.pdo is not None else settings.default_pdo
    now = payload.now or local_now(get_farm_tz(settings.timezone_name))
    markers = settings.status_markers()

    bounds = resolve_period(period, payload.date_from, payload.date_to, now=now)
    eligible = filter_eligible(records, bounds, pdo, markers)
    logger.info(
        "Reproduction report %s..%s (pdo=%d): %d of %d animals eligible",
        bounds.start.isoformat(),
        bounds.end.isoformat(),
        pdo,
        len(eligible),
        len(records),
    )

    report = build_report(eligible, bounds, pdo, markers)
    breakdown: list[BreakdownRow] = []
    if payload.breakdown_by is not None:
        breakdown = build_breakdown(eligible, payload.breakdown_by, bounds, pdo, markers)
    monthly: list[MonthlyPoint] = []
    if payload.include_monthly:
        monthly = build_monthly_series(records, bounds, pdo, markers)
    logger.debug(
        "Report computed: pr=%s cr=%s hdr=%s, %d breakdown rows, %d months",
        report.pr,
        report.cr,
        report.hdr,
        len(breakdown),
        len(monthly),
    )
    return GenerateReportOutput(
        report=report,
        breakdown=breakdown,
        monthly=monthly,
        breakdown_by=payload.breakdown_by,
    )

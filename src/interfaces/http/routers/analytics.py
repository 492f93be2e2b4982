from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.errors import ValidationError
from src.application.use_cases.analytics import (
    animal_timeline,
    generate_report,
    interval_analysis,
    list_inseminations,
)
from src.config.settings import Settings
from src.domain.value_objects.breakdown_dimension import BreakdownDimension
from src.domain.value_objects.lactation_filter import LactationFilter
from src.domain.value_objects.period_kind import PeriodKind
from src.interfaces.http.deps import get_app_settings
from src.interfaces.http.schemas.analytics import (
    AnimalTimelineRequest,
    AnimalTimelineResponse,
    InseminationJournalRequest,
    InseminationJournalResponse,
    IntervalAnalysisRequest,
    IntervalAnalysisResponse,
    JournalRowOut,
    RecordsSnapshot,
    ReportDefinition,
    ReportDefinitionsResponse,
    ReportParameter,
    ReportRequest,
    ReportResponse,
)
from src.utils.dates import parse_date

router = APIRouter(prefix="/analytics", tags=["analytics"])


def _ensure_snapshot_size(payload: RecordsSnapshot, settings: Settings) -> None:
    if len(payload.records) > settings.max_records:
        raise ValidationError(
            f"Records snapshot cannot exceed {settings.max_records} animals",
            details={"received": len(payload.records)},
        )


@router.get("/definitions", response_model=ReportDefinitionsResponse)
async def get_report_definitions(
    settings: Settings = Depends(get_app_settings),
) -> ReportDefinitionsResponse:
    """Get available analytics definitions"""
    reports = [
        ReportDefinition(
            id="reproduction",
            title="Воспроизводство: PR, CR, HDR",
            description="Показатели воспроизводства за период с разбивкой и динамикой по месяцам",
            parameters=[
                ReportParameter(name="records", type="records", required=True),
                ReportParameter(
                    name="period",
                    type="select",
                    required=False,
                    options=[k.value for k in PeriodKind],
                    default_value=settings.default_period.value,
                ),
                ReportParameter(name="date_from", type="date", required=False),
                ReportParameter(name="date_to", type="date", required=False),
                ReportParameter(
                    name="pdo", type="integer", required=False, default_value=settings.default_pdo
                ),
                ReportParameter(
                    name="breakdown_by",
                    type="select",
                    required=False,
                    options=[d.value for d in BreakdownDimension],
                    option_labels={d.value: d.title for d in BreakdownDimension},
                ),
                ReportParameter(
                    name="include_monthly", type="boolean", required=False, default_value=True
                ),
            ],
        ),
        ReportDefinition(
            id="intervals",
            title="Интервалы между осеменениями",
            description="Распределение интервалов между осеменениями внутри лактации",
            parameters=[
                ReportParameter(name="records", type="records", required=True),
                ReportParameter(
                    name="lactation",
                    type="select",
                    required=False,
                    options=[f.value for f in LactationFilter],
                    default_value=LactationFilter.ALL.value,
                ),
            ],
        ),
        ReportDefinition(
            id="inseminations",
            title="Журнал осеменений",
            description="Все осеменения стада с интервалами и фильтрами",
            parameters=[
                ReportParameter(name="records", type="records", required=True),
                ReportParameter(name="query", type="text", required=False),
                ReportParameter(name="date_from", type="date", required=False),
                ReportParameter(name="date_to", type="date", required=False),
                ReportParameter(name="lactation", type="integer", required=False),
                ReportParameter(
                    name="sort_by",
                    type="select",
                    required=False,
                    options=[k.value for k in list_inseminations.JournalSortKey],
                    default_value=list_inseminations.JournalSortKey.DATE.value,
                ),
            ],
        ),
    ]
    return ReportDefinitionsResponse(reports=reports)


@router.post("/report", response_model=ReportResponse)
def generate_reproduction_report(
    payload: ReportRequest,
    settings: Settings = Depends(get_app_settings),
) -> ReportResponse:
    """Generate reproduction KPIs for a period"""
    _ensure_snapshot_size(payload, settings)

    if payload.period is PeriodKind.CUSTOM:
        start = parse_date(payload.date_from)
        end = parse_date(payload.date_to)
        if start is not None and end is not None and start > end:
            raise ValidationError("date_from must be before or equal to date_to")

    result = generate_report.execute(
        payload.to_domain(),
        generate_report.GenerateReportInput(
            period=payload.period,
            date_from=payload.date_from,
            date_to=payload.date_to,
            pdo=payload.pdo,
            breakdown_by=payload.breakdown_by,
            include_monthly=payload.include_monthly,
        ),
        settings,
    )
    return ReportResponse.model_validate(result)


@router.post("/intervals", response_model=IntervalAnalysisResponse)
def analyze_insemination_intervals(
    payload: IntervalAnalysisRequest,
    settings: Settings = Depends(get_app_settings),
) -> IntervalAnalysisResponse:
    _ensure_snapshot_size(payload, settings)
    result = interval_analysis.execute(
        payload.to_domain(),
        interval_analysis.IntervalAnalysisInput(lactation=payload.lactation),
        settings,
    )
    return IntervalAnalysisResponse.model_validate(result)


@router.post("/inseminations", response_model=InseminationJournalResponse)
def list_herd_inseminations(
    payload: InseminationJournalRequest,
    settings: Settings = Depends(get_app_settings),
) -> InseminationJournalResponse:
    _ensure_snapshot_size(payload, settings)
    rows = list_inseminations.execute(
        payload.to_domain(),
        list_inseminations.ListInseminationsInput(
            query=payload.query,
            date_from=payload.date_from,
            date_to=payload.date_to,
            lactation=payload.lactation,
            sort_by=payload.sort_by,
            descending=payload.descending,
        ),
        settings,
    )
    items = [JournalRowOut.model_validate(row) for row in rows]
    return InseminationJournalResponse(items=items, total=len(items))


@router.post("/timeline", response_model=AnimalTimelineResponse)
def get_animal_timeline(
    payload: AnimalTimelineRequest,
    settings: Settings = Depends(get_app_settings),
) -> AnimalTimelineResponse:
    result = animal_timeline.execute(
        payload.record.to_domain(),
        animal_timeline.AnimalTimelineInput(today=payload.today),
        settings,
    )
    return AnimalTimelineResponse.model_validate(result)

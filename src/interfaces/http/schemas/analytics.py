from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.application.use_cases.analytics.list_inseminations import JournalSortKey
from src.domain.analytics.eligibility import coerce_pdo
from src.domain.models.animal import AnimalRecord, coerce_lactation
from src.domain.models.insemination import InseminationEvent
from src.domain.value_objects.breakdown_dimension import BreakdownDimension
from src.domain.value_objects.lactation_filter import LactationFilter
from src.domain.value_objects.period_kind import PeriodKind


class _InputModel(BaseModel):
    # Storage snapshots use camelCase keys; snake_case is accepted too
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _attempt(value: Any) -> int:
    number = coerce_lactation(value)
    return number if number else 1


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class InseminationEventIn(_InputModel):
    date: str | None = None
    attempt_number: int = 1
    bull: str = ""
    inseminator: str = ""
    code: str = ""

    @field_validator("attempt_number", mode="before")
    @classmethod
    def coerce_attempt(cls, value: Any) -> int:
        return _attempt(value)

    @field_validator("bull", "inseminator", "code", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def to_domain(self) -> InseminationEvent:
        return InseminationEvent(
            date=self.date,
            attempt_number=self.attempt_number,
            bull=self.bull,
            inseminator=self.inseminator,
            code=self.code,
        )


class AnimalRecordIn(_InputModel):
    animal_id: str = Field(validation_alias=AliasChoices("animal_id", "animalId", "cattleId"))
    nickname: str | None = None
    lactation_number: int | None = Field(
        default=None,
        validation_alias=AliasChoices("lactation_number", "lactationNumber", "lactation"),
    )
    calving_date: str | None = None
    status: str | None = None
    group: str | None = None
    insemination_date: str | None = None
    attempt_number: int | None = None
    bull: str | None = None
    inseminator: str | None = None
    code: str | None = None
    insemination_history: list[InseminationEventIn] | None = None
    date_added: str | None = None

    @field_validator("animal_id", mode="before")
    @classmethod
    def stringify_id(cls, value: Any) -> str:
        return str(value).strip()

    @field_validator("lactation_number", mode="before")
    @classmethod
    def coerce_lactation_number(cls, value: Any) -> int | None:
        return coerce_lactation(value)

    @field_validator("attempt_number", mode="before")
    @classmethod
    def coerce_attempt(cls, value: Any) -> int | None:
        return None if _blank_to_none(value) is None else _attempt(value)

    def to_domain(self) -> AnimalRecord:
        return AnimalRecord(
            animal_id=self.animal_id,
            nickname=self.nickname,
            lactation_number=self.lactation_number,
            calving_date=self.calving_date,
            status=self.status,
            group=self.group,
            insemination_date=self.insemination_date,
            attempt_number=self.attempt_number,
            bull=self.bull,
            inseminator=self.inseminator,
            code=self.code,
            insemination_history=[ev.to_domain() for ev in self.insemination_history or []],
            date_added=self.date_added,
        )


class RecordsSnapshot(_InputModel):
    records: list[AnimalRecordIn] = Field(default_factory=list)

    def to_domain(self) -> list[AnimalRecord]:
        return [r.to_domain() for r in self.records]


class ReportRequest(RecordsSnapshot):
    period: PeriodKind | None = None
    date_from: str | None = None
    date_to: str | None = None
    pdo: int | None = None
    breakdown_by: BreakdownDimension | None = None
    include_monthly: bool = True

    @field_validator("period", mode="before")
    @classmethod
    def parse_period(cls, value: Any) -> PeriodKind | None:
        if value is None or value == "":
            return None
        return PeriodKind.parse(value)

    @field_validator("pdo", mode="before")
    @classmethod
    def parse_pdo(cls, value: Any) -> int | None:
        return None if _blank_to_none(value) is None else coerce_pdo(value)

    @field_validator("breakdown_by", mode="before")
    @classmethod
    def blank_breakdown(cls, value: Any) -> Any:
        return _blank_to_none(value)


class IntervalAnalysisRequest(RecordsSnapshot):
    lactation: LactationFilter = LactationFilter.ALL

    @field_validator("lactation", mode="before")
    @classmethod
    def parse_lactation(cls, value: Any) -> LactationFilter:
        return LactationFilter.parse(None if value is None else str(value))


class InseminationJournalRequest(RecordsSnapshot):
    query: str = ""
    date_from: str | None = None
    date_to: str | None = None
    lactation: int | None = None
    sort_by: JournalSortKey = JournalSortKey.DATE
    descending: bool = False

    @field_validator("lactation", mode="before")
    @classmethod
    def coerce_lactation_filter(cls, value: Any) -> int | None:
        return coerce_lactation(value)


class AnimalTimelineRequest(_InputModel):
    record: AnimalRecordIn
    today: str | None = None


class _OutputModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PeriodBoundsOut(_OutputModel):
    start: datetime
    end: datetime


class ReportOut(_OutputModel):
    bounds: PeriodBoundsOut
    pdo: int
    total_animals: int
    pr: float
    cr: float
    hdr: float
    service_period_days: int | None
    inseminated_count: int
    pregnant_count: int
    total_inseminations: int
    status_counts: dict[str, int]


class BreakdownRowOut(_OutputModel):
    key: str
    report: ReportOut


class MonthlyPointOut(_OutputModel):
    label: str
    start: datetime
    end: datetime
    pr: float
    cr: float
    hdr: float


class ReportResponse(_OutputModel):
    report: ReportOut
    breakdown_by: BreakdownDimension | None = None
    breakdown: list[BreakdownRowOut]
    monthly: list[MonthlyPointOut]


class BucketCountOut(_OutputModel):
    label: str
    count: int


class IntervalAnalysisResponse(_OutputModel):
    buckets: list[BucketCountOut]
    no_data_count: int
    total: int


class JournalRowOut(_OutputModel):
    animal_id: str
    nickname: str
    lactation: int | None
    date: str | None
    attempt_number: int
    bull: str
    inseminator: str
    code: str
    days_from_previous: int | None


class InseminationJournalResponse(BaseModel):
    items: list[JournalRowOut]
    total: int


class TimelineEventOut(_OutputModel):
    date: str | None
    attempt_number: int
    bull: str
    inseminator: str
    code: str
    lactation: int | None
    days_from_previous: int | None


class AnimalTimelineResponse(_OutputModel):
    animal_id: str
    events: list[TimelineEventOut]
    next_attempt_number: int
    service_period_days: int | None
    days_since_last_insemination: int | None
    days_pregnant: int | None


class ReportParameter(BaseModel):
    name: str
    type: Literal["date", "select", "integer", "records", "boolean", "text"]
    required: bool
    options: list[str] | None = None
    option_labels: dict[str, str] | None = None
    default_value: Any | None = None


class ReportDefinition(BaseModel):
    id: str
    title: str
    description: str
    parameters: list[ReportParameter]


class ReportDefinitionsResponse(BaseModel):
    reports: list[ReportDefinition]

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from src.config.settings import Settings
from src.domain.analytics.timeline import (
    days_pregnant,
    days_since_last_insemination,
    next_attempt_number,
    normalize_history,
    service_period_for,
)
from src.domain.models.animal import AnimalRecord
from src.domain.models.insemination import TimelineEvent
from src.utils.dates import parse_date
from src.utils.datetime_tz import get_farm_tz, local_now


@dataclass(slots=True)
class AnimalTimelineInput:
    today: datetime | str | None = None


@dataclass(slots=True)
class AnimalTimelineOutput:
    animal_id: str
    events: list[TimelineEvent]
    next_attempt_number: int
    service_period_days: int | None
    days_since_last_insemination: int | None
    days_pregnant: int | None


def execute(
    record: AnimalRecord,
    payload: AnimalTimelineInput,
    settings: Settings,
) -> AnimalTimelineOutput:
    today = parse_date(payload.today) or local_now(get_farm_tz(settings.timezone_name))
    inference = settings.lactation_inference
    return AnimalTimelineOutput(
        animal_id=record.animal_id,
        events=normalize_history(record, inference),
        next_attempt_number=next_attempt_number(record, inference=inference),
        service_period_days=service_period_for(record),
        days_since_last_insemination=days_since_last_insemination(record, today),
        days_pregnant=days_pregnant(record, today, settings.status_markers()),
    )

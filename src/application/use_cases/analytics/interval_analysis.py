from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from src.config.settings import Settings
from src.domain.analytics.intervals import analyze_intervals
from src.domain.models.animal import AnimalRecord
from src.domain.models.report import IntervalDistribution
from src.domain.value_objects.lactation_filter import LactationFilter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IntervalAnalysisInput:
    lactation: LactationFilter = LactationFilter.ALL


def execute(
    records: Sequence[AnimalRecord],
    payload: IntervalAnalysisInput,
    settings: Settings,
) -> IntervalDistribution:
    result = analyze_intervals(
        records,
        lactation_filter=payload.lactation,
        inference=settings.lactation_inference,
    )
    logger.info(
        "Interval analysis (lactation=%r) over %d animals: %d gaps, %d without data",
        payload.lactation.value,
        len(records),
        result.total,
        result.no_data_count,
    )
    return result

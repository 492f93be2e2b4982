from __future__ import annotations

from src.domain.models.animal import AnimalRecord
from src.domain.models.insemination import InseminationEvent


def make_record(animal_id: str = "101", *dates: str, **fields) -> AnimalRecord:
    """Animal with an insemination history built from plain date strings."""
    history = [InseminationEvent(date=d, attempt_number=i + 1) for i, d in enumerate(dates)]
    fields.setdefault("insemination_history", history)
    return AnimalRecord(animal_id=animal_id, **fields)

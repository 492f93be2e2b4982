from __future__ import annotations

from datetime import datetime

import pytest

from src.domain.analytics.eligibility import anchor_date, coerce_pdo, filter_eligible
from src.domain.models.animal import AnimalRecord
from src.domain.models.report import PeriodBounds
from src.domain.value_objects.animal_status import StatusMarkers
from tests.factories import make_record

PERIOD = PeriodBounds(datetime(2024, 2, 1), datetime(2024, 3, 31))


def _eligible_ids(records, pdo=50, markers=None):
    return [r.animal_id for r in filter_eligible(records, PERIOD, pdo, markers)]


def test_keeps_animal_past_waiting_period_with_insemination_in_period():
    record = make_record("1", "2024-03-05", lactation_number=1, calving_date="2024-01-10")

    assert _eligible_ids([record]) == ["1"]


def test_excludes_animal_still_in_waiting_period_at_period_end():
    # calving + 50 days = 2024-04-20, after the period even though the insemination is inside
    record = make_record("2", "2024-03-20", lactation_number=2, calving_date="2024-03-01")

    assert _eligible_ids([record]) == []


@pytest.mark.parametrize(
    "fields",
    [
        {"status": "Брак", "lactation_number": 1, "calving_date": "2024-01-10"},
        {"status": "Брак (продана)", "lactation_number": 3, "calving_date": "2024-01-10"},
        {"lactation_number": 0, "calving_date": "2024-01-10"},
        {"lactation_number": None, "calving_date": "2024-01-10"},
        {"lactation_number": 1, "calving_date": None},
        {"lactation_number": 1, "calving_date": "когда-то"},
    ],
)
def test_excluded_records(fields):
    record = make_record("3", "2024-03-05", **fields)

    assert _eligible_ids([record]) == []


def test_anchor_falls_back_to_calving_date():
    record = AnimalRecord(animal_id="4", lactation_number=1, calving_date="2024-02-05")

    assert anchor_date(record) == datetime(2024, 2, 5)
    assert _eligible_ids([record], pdo=0) == ["4"]


def test_anchor_uses_latest_insemination_even_if_outside_period():
    record = make_record("5", "2024-01-20", lactation_number=1, calving_date="2023-11-01")

    assert _eligible_ids([record]) == []


def test_anchor_falls_back_to_date_added():
    record = AnimalRecord(animal_id="6", date_added="2024-02-10")

    assert anchor_date(record) == datetime(2024, 2, 10)


def test_custom_culled_markers():
    record = make_record(
        "7", "2024-03-05", status="sold", lactation_number=1, calving_date="2024-01-10"
    )
    markers = StatusMarkers(culled=("sold",), pregnant=())

    assert _eligible_ids([record], markers=markers) == []
    assert _eligible_ids([record]) == ["7"]


def test_preserves_input_order():
    records = [
        make_record(str(i), "2024-03-05", lactation_number=1, calving_date="2024-01-10")
        for i in (3, 1, 2)
    ]

    assert _eligible_ids(records) == ["3", "1", "2"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(50, 50), ("45", 45), (" 30 ", 30), ("", 0), (None, 0), ("abc", 0), (True, 0)],
)
def test_coerce_pdo(raw, expected):
    assert coerce_pdo(raw) == expected


def test_invalid_pdo_counts_as_zero():
    # With pdo=0 the waiting period ends on the calving date itself
    record = make_record("8", "2024-03-30", lactation_number=1, calving_date="2024-03-15")

    assert _eligible_ids([record], pdo="n/a") == ["8"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("2", ["9"]), (" 1 ", ["9"]), (2.0, ["9"]), ("0", []), ("-1", []), ("вторая", [])],
)
def test_lactation_stored_as_text_is_coerced(raw, expected):
    record = make_record("9", "2024-03-05", lactation_number=raw, calving_date="2024-01-10")

    assert _eligible_ids([record]) == expected

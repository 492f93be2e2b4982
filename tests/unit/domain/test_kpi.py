from __future__ import annotations

from datetime import datetime

import pytest

from src.domain.analytics.kpi import (
    build_report,
    calculate_cr,
    calculate_hdr,
    calculate_pr,
    inseminations_in_period,
    round_half_away,
)
from src.domain.models.report import PeriodBounds
from tests.factories import make_record

PERIOD = PeriodBounds(datetime(2024, 2, 1), datetime(2024, 3, 31))
PDO = 50


def _pregnant(animal_id, *dates, calving="2024-01-10"):
    return make_record(
        animal_id, *dates, lactation_number=1, calving_date=calving, status="Стельная"
    )


def _open(animal_id, *dates, calving="2024-01-10"):
    return make_record(
        animal_id, *dates, lactation_number=1, calving_date=calving, status="Осеменена"
    )


def test_single_pregnant_animal_gives_full_conception_rate():
    record = _pregnant("1", "2024-03-05")

    report = build_report([record], PERIOD, PDO)

    assert report.total_inseminations == 1
    assert report.inseminated_count == 1
    assert report.pregnant_count == 1
    assert report.cr == 100.0


def test_heat_detection_rate_for_four_days_after_waiting_period():
    # 2024-01-11 + 50 days = 2024-03-01
    record = _pregnant("1", "2024-03-05", calving="2024-01-11")

    report = build_report([record], PERIOD, PDO)

    assert report.hdr == 19.0
    assert report.pr == 19.0


def test_empty_set_gives_zeroed_report():
    report = build_report([], PERIOD, PDO)

    assert (report.cr, report.hdr, report.pr) == (0.0, 0.0, 0.0)
    assert report.service_period_days is None
    assert report.total_animals == 0
    assert report.total_inseminations == 0
    assert report.bounds == PERIOD


def test_inseminations_before_waiting_period_end_are_not_counted():
    # waiting period ends 2024-02-29
    record = _open("1", "2024-02-10", "2024-03-10", "2024-04-02")

    dates = inseminations_in_period(record, PERIOD, PDO)

    assert dates == [datetime(2024, 3, 10)]


def test_conception_rate_over_several_animals():
    records = [
        _pregnant("1", "2024-03-02", "2024-03-25"),
        _open("2", "2024-03-05"),
        _open("3", "2024-03-06"),
    ]

    assert calculate_cr(records, PERIOD, PDO) == 25.0


def test_pregnant_animal_without_qualifying_insemination_is_not_a_conception():
    records = [
        _pregnant("1", "2024-02-10"),  # before waiting period end
        _open("2", "2024-03-05"),
    ]

    report = build_report(records, PERIOD, PDO)

    assert report.cr == 0.0
    assert report.pregnant_count == 1
    assert report.inseminated_count == 1


def test_heat_detection_rate_is_capped_per_animal():
    records = [
        _open("1", "2024-03-25"),  # 25 days after 2024-02-29 -> ratio 1
        _open("2", "2024-03-05", calving="2024-01-11"),  # 4 days -> 4/21
    ]

    # (1 + 4/21) / 2 * 100 = 59.52...
    assert calculate_hdr(records, PERIOD, PDO) == 59.5


def test_heat_detection_uses_last_insemination_in_period():
    record = _open("1", "2024-03-01", "2024-03-08")  # 8 days after 2024-02-29

    assert calculate_hdr([record], PERIOD, PDO) == round_half_away(8 / 21 * 1000) / 10


@pytest.mark.parametrize(
    ("hdr", "cr", "expected"),
    [(50, 40, 20.0), (33, 33, 10.9), (0, 80, 0.0), (100, 100, 100.0)],
)
def test_pregnancy_rate(hdr, cr, expected):
    assert calculate_pr(hdr, cr) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (-2.5, -3), (0, 0)],
)
def test_round_half_away_from_zero(value, expected):
    assert round_half_away(value) == expected


def test_service_period_average_rounds_half_away():
    records = [
        _open("1", "2024-03-01", calving="2024-01-10"),  # 51 days
        _open("2", "2024-02-16", calving="2024-01-01"),  # 46 days
        _open("3", "2023-12-20", "2024-03-01", calving="2024-01-10"),  # first before calving
        _open("4"),  # no inseminations
    ]

    report = build_report(records, PERIOD, PDO)

    assert report.service_period_days == 49


def test_report_invariants_hold():
    records = [
        _pregnant("1", "2024-03-02", "2024-03-25"),
        _pregnant("2", "2024-03-12"),
        _open("3", "2024-03-05", calving="2024-01-11"),
        _open("4", "2024-02-10"),
    ]

    report = build_report(records, PERIOD, PDO)

    assert 0 <= report.cr <= 100
    assert 0 <= report.hdr <= 100
    assert report.pr == round_half_away(report.hdr / 100 * (report.cr / 100) * 1000) / 10
    assert report.total_inseminations == 4
    assert report.inseminated_count == 3


def test_status_counts_skip_culled_animals():
    records = [
        _pregnant("1", "2024-03-05"),
        _pregnant("2", "2024-03-06"),
        make_record("3", lactation_number=1, status="Брак"),
        make_record("4", lactation_number=1, status="  "),
    ]

    report = build_report(records, PERIOD, PDO)

    assert report.status_counts == {"Стельная": 2, "—": 1}

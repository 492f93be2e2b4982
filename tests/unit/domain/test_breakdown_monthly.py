from __future__ import annotations

from datetime import datetime

import pytest

from src.domain.analytics.breakdown import build_breakdown, partition
from src.domain.analytics.monthly import build_monthly_series
from src.domain.models.report import PeriodBounds
from src.domain.value_objects.breakdown_dimension import BLANK_KEY, BreakdownDimension
from tests.factories import make_record

PERIOD = PeriodBounds(datetime(2024, 2, 1), datetime(2024, 3, 31))


@pytest.fixture
def herd():
    return [
        make_record("1", "2024-03-05", lactation_number=1, calving_date="2024-01-10",
                    status="Стельная", group="Б", bull="Орлик", inseminator="Петров"),
        make_record("2", "2024-03-06", lactation_number=2, calving_date="2024-01-10",
                    group="А", bull="Орлик", inseminator="Иванов"),
        make_record("3", "2024-03-07", lactation_number=2, calving_date="2024-01-10",
                    group="  ", inseminator="Иванов"),
        make_record("4", "2024-03-08", lactation_number=3, calving_date="2024-01-10",
                    group="А"),
    ]


@pytest.mark.parametrize("dimension", list(BreakdownDimension))
def test_partitions_are_disjoint_and_cover_the_set(herd, dimension):
    rows = build_breakdown(herd, dimension, PERIOD, 50)

    assert sum(row.report.total_animals for row in rows) == len(herd)
    assert len({row.key for row in rows}) == len(rows)


def test_group_rows_are_sorted_with_blank_bucket(herd):
    rows = build_breakdown(herd, BreakdownDimension.GROUP, PERIOD, 50)

    assert [(row.key, row.report.total_animals) for row in rows] == [
        ("А", 2),
        ("Б", 1),
        (BLANK_KEY, 1),
    ]


def test_lactation_keys(herd):
    groups = partition(herd, BreakdownDimension.LACTATION)

    assert {key: len(members) for key, members in groups.items()} == {"1": 1, "2": 2, "3": 1}


def test_each_row_carries_its_own_kpis(herd):
    rows = build_breakdown(herd, BreakdownDimension.BULL, PERIOD, 50)
    rows = {row.key: row.report for row in rows}

    assert rows["Орлик"].cr == 50.0
    assert rows[BLANK_KEY].cr == 0.0
    assert rows[BLANK_KEY].total_inseminations == 2


def test_empty_set_gives_no_rows():
    assert build_breakdown([], BreakdownDimension.GROUP, PERIOD, 50) == []


def test_dimension_titles():
    assert BreakdownDimension.INSEMINATOR.title == "Осеменатор"


def test_monthly_series_filters_each_month_separately():
    record = make_record(
        "1", "2024-03-05", lactation_number=1, calving_date="2024-01-10", status="Стельная"
    )

    series = build_monthly_series([record], PERIOD, 50)

    assert [point.label for point in series] == ["фев 2024", "мар 2024"]
    february, march = series
    assert (february.pr, february.cr, february.hdr) == (0.0, 0.0, 0.0)
    assert march.start == datetime(2024, 3, 1)
    assert march.end == datetime(2024, 3, 31)
    assert march.cr == 100.0
    # 5 days after 2024-02-29 -> 5/21
    assert march.hdr == 23.8
    assert march.pr == 23.8


def test_monthly_series_for_empty_herd():
    series = build_monthly_series([], PERIOD, 50)

    assert len(series) == 2
    assert all(point.pr == 0.0 for point in series)


def test_lactation_key_from_text_value():
    records = [
        make_record("1", lactation_number="2"),
        make_record("2", lactation_number=2),
        make_record("3", lactation_number="?"),
    ]

    groups = partition(records, BreakdownDimension.LACTATION)

    assert {key: len(members) for key, members in groups.items()} == {"2": 2, BLANK_KEY: 1}

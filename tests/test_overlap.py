from __future__ import annotations

from datetime import date, datetime, timedelta

import pandas as pd

from allocplan.core.models import Allocation
from allocplan.core.overlap import is_active_on, overlaps, to_day


def _alloc(start: date, end: date, pct: float | None = 50) -> Allocation:
    return Allocation(
        id="a1",
        employee_id="E",
        employee_name="Eve",
        project_name="P",
        start_date=start,
        end_date=end,
        allocation_percentage=pct,
    )


def test_single_day_is_inclusive_on_both_ends():
    a = _alloc(date(2024, 3, 1), date(2024, 3, 5))
    assert is_active_on(a, date(2024, 3, 1))
    assert is_active_on(a, date(2024, 3, 5))
    assert not is_active_on(a, date(2024, 2, 29))
    assert not is_active_on(a, date(2024, 3, 6))


def test_single_day_matches_range_check_for_every_day():
    a = _alloc(date(2024, 3, 10), date(2024, 3, 20))
    day = date(2024, 3, 1)
    while day <= date(2024, 3, 31):
        assert overlaps(a, day, day) == (a.start_date <= day <= a.end_date)
        day += timedelta(days=1)


def test_window_touching_endpoints_count_as_overlap():
    a = _alloc(date(2024, 3, 1), date(2024, 3, 10))
    assert overlaps(a, date(2024, 3, 10), date(2024, 3, 16))
    assert overlaps(a, date(2024, 2, 25), date(2024, 3, 1))
    assert not overlaps(a, date(2024, 3, 11), date(2024, 3, 17))
    assert not overlaps(a, date(2024, 2, 23), date(2024, 2, 29))


def test_window_fully_inside_allocation():
    a = _alloc(date(2024, 1, 1), date(2024, 12, 31))
    assert overlaps(a, date(2024, 3, 10), date(2024, 3, 16))


def test_malformed_interval_never_matches_a_day():
    a = _alloc(date(2024, 3, 10), date(2024, 3, 5))
    day = date(2024, 3, 1)
    while day <= date(2024, 3, 15):
        assert not is_active_on(a, day)
        day += timedelta(days=1)
    assert not overlaps(a, date(2024, 3, 1), date(2024, 3, 31))


def test_time_of_day_is_ignored():
    a = _alloc(date(2024, 3, 1), date(2024, 3, 5))
    assert is_active_on(a, datetime(2024, 3, 5, 23, 59))
    assert is_active_on(a, datetime(2024, 3, 1, 0, 0))

    late = Allocation(
        id="a2",
        employee_id="E",
        employee_name="Eve",
        project_name="P",
        start_date=datetime(2024, 3, 1, 18, 30),
        end_date=datetime(2024, 3, 5, 9, 0),
        allocation_percentage=10,
    )
    assert is_active_on(late, date(2024, 3, 1))
    assert is_active_on(late, date(2024, 3, 5))


def test_to_day_accepts_common_representations():
    assert to_day(date(2024, 3, 1)) == date(2024, 3, 1)
    assert to_day(datetime(2024, 3, 1, 12, 0)) == date(2024, 3, 1)
    assert to_day(pd.Timestamp("2024-03-01 08:00")) == date(2024, 3, 1)
    assert to_day("2024-03-01") == date(2024, 3, 1)

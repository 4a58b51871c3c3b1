from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import date, timedelta

from allocplan.core.models import Allocation, Window
from allocplan.core.overlap import overlaps, to_day

DEFAULT_WEEK_COUNT = 12


def week_range(anchor: date, *, week_start: int = calendar.SUNDAY) -> tuple[date, date]:
    """Return the 7-day week containing `anchor`.

    The week begins on the most recent `week_start` weekday on or before the
    anchor (Python numbering, Monday=0 .. Sunday=6).
    """
    anchor = to_day(anchor)
    start = anchor - timedelta(days=(anchor.weekday() - week_start) % 7)
    return start, start + timedelta(days=6)


def build_trailing_weeks(
    allocations: Iterable[Allocation],
    now: date,
    week_count: int = DEFAULT_WEEK_COUNT,
    *,
    week_start: int = calendar.SUNDAY,
) -> list[Window]:
    """Consecutive weekly windows ending with the week that contains `now`.

    Windows are returned oldest first. Each lists the raw allocations that
    overlap it, in input order; no grouping by employee happens here.
    """
    if week_count <= 0:
        return []

    items = tuple(allocations)
    now = to_day(now)

    windows: list[Window] = []
    for i in range(week_count):
        start, end = week_range(now - timedelta(days=7 * i), week_start=week_start)
        windows.append(
            Window(
                start=start,
                end=end,
                allocations=tuple(a for a in items if overlaps(a, start, end)),
            )
        )
    windows.reverse()
    return windows

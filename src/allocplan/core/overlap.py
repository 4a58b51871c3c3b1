from __future__ import annotations

from datetime import date, datetime

from allocplan.core.models import Allocation


def to_day(value) -> date:
    """Reduce a date-like value to a calendar day.

    Accepts `date`, `datetime`, pandas `Timestamp` and ISO strings. Any
    time-of-day component is dropped so that comparisons happen per day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # pandas Timestamp
    if hasattr(value, "to_pydatetime"):
        return value.to_pydatetime().date()
    return datetime.fromisoformat(str(value).strip()).date()


def overlaps(allocation: Allocation, window_start: date, window_end: date) -> bool:
    """True when the allocation's inclusive range touches [window_start, window_end].

    With window_start == window_end this is the single-day check
    start_date <= d <= end_date. An allocation whose start is after its end
    never overlaps anything.
    """
    start = to_day(allocation.start_date)
    end = to_day(allocation.end_date)
    if start > end:
        return False
    return start <= to_day(window_end) and end >= to_day(window_start)


def is_active_on(allocation: Allocation, day: date) -> bool:
    return overlaps(allocation, day, day)

from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import date, timedelta

from allocplan.core.aggregator import aggregate_for_day
from allocplan.core.models import MONTH_NAMES, Allocation, CalendarDay, CalendarMonth
from allocplan.core.overlap import to_day


def month_bounds(reference_date: date) -> tuple[date, date]:
    """First and last calendar day of the month containing `reference_date`."""
    ref = to_day(reference_date)
    last = calendar.monthrange(ref.year, ref.month)[1]
    return ref.replace(day=1), ref.replace(day=last)


def month_label(reference_date: date) -> str:
    ref = to_day(reference_date)
    return f"{MONTH_NAMES[ref.month - 1]} {ref.year}"


def shift_month(reference_date: date, months: int) -> date:
    """Move by whole calendar months, clamping the day to the target month."""
    ref = to_day(reference_date)
    idx = ref.year * 12 + (ref.month - 1) + months
    year, month = divmod(idx, 12)
    month += 1
    day = min(ref.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def next_month(reference_date: date) -> date:
    return shift_month(reference_date, 1)


def prev_month(reference_date: date) -> date:
    return shift_month(reference_date, -1)


def build_month(
    allocations: Iterable[Allocation],
    reference_date: date,
    *,
    week_start: int = calendar.SUNDAY,
) -> CalendarMonth:
    """Build the day -> employee aggregates structure for one month.

    Args:
        allocations: Flat allocation list; it is only read.
        reference_date: Any day inside the month to show.
        week_start: Python weekday number the grid starts on (Sunday by default).

    Returns:
        CalendarMonth with one CalendarDay per day of the month, ascending.
    """
    items = tuple(allocations)
    first, last = month_bounds(reference_date)

    days: list[CalendarDay] = []
    day = first
    while day <= last:
        days.append(CalendarDay(date=day, aggregates=tuple(aggregate_for_day(items, day))))
        day += timedelta(days=1)

    return CalendarMonth(
        month_label=month_label(first),
        first_day=first,
        last_day=last,
        days=tuple(days),
        leading_blanks=(first.weekday() - week_start) % 7,
    )

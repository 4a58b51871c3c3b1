"""Allocation aggregation and windowing engine.

Builds calendar (day -> employee totals) and trailing-week views from a flat
list of date-ranged allocation records and flags over/under allocation.
"""

from allocplan.core.aggregator import aggregate_for_day
from allocplan.core.classifier import classify
from allocplan.core.departments import (
    employees_in_department,
    filter_allocations_by_employees,
    sub_department_ids,
)
from allocplan.core.models import (
    Allocation,
    AllocationState,
    CalendarDay,
    CalendarMonth,
    Department,
    Employee,
    EmployeeDayAggregate,
    Window,
)
from allocplan.core.overlap import is_active_on, overlaps
from allocplan.views.calendar import build_month, month_bounds, next_month, prev_month
from allocplan.views.weeks import build_trailing_weeks, week_range

__all__ = [
    "Allocation",
    "AllocationState",
    "CalendarDay",
    "CalendarMonth",
    "Department",
    "Employee",
    "EmployeeDayAggregate",
    "Window",
    "aggregate_for_day",
    "build_month",
    "build_trailing_weeks",
    "classify",
    "employees_in_department",
    "filter_allocations_by_employees",
    "is_active_on",
    "month_bounds",
    "next_month",
    "overlaps",
    "prev_month",
    "sub_department_ids",
    "week_range",
]

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from allocplan.core.classifier import AllocationState, classify

# Fixed English names; labels must not depend on the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_ABBRS = tuple(name[:3] for name in MONTH_NAMES)


def _clean_percentage(value: float | None) -> float | None:
    # NaN is treated like a missing value
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    return value


@dataclass(frozen=True)
class Allocation:
    id: str
    employee_id: str
    employee_name: str
    project_name: str
    start_date: date
    end_date: date
    allocation_percentage: float | None = None

    @property
    def percentage(self) -> float:
        # Missing percentages count as zero when summing
        return _clean_percentage(self.allocation_percentage) or 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "project_name": self.project_name,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "allocation_percentage": _clean_percentage(self.allocation_percentage),
        }


@dataclass(frozen=True)
class EmployeeDayAggregate:
    """Allocations of one employee that are active on the same day."""
    employee_id: str
    employee_name: str
    allocations: tuple[Allocation, ...]
    total_percentage: float = field(init=False)
    state: AllocationState = field(init=False)

    def __post_init__(self) -> None:
        # total and state are always derived from the listed allocations
        total = math.fsum(a.percentage for a in self.allocations)
        object.__setattr__(self, "total_percentage", total)
        object.__setattr__(self, "state", classify(total))

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "total_percentage": self.total_percentage,
            "state": self.state.value,
            "allocations": [a.to_dict() for a in self.allocations],
        }


@dataclass(frozen=True)
class CalendarDay:
    date: date
    aggregates: tuple[EmployeeDayAggregate, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "aggregates": [agg.to_dict() for agg in self.aggregates],
        }


@dataclass(frozen=True)
class CalendarMonth:
    month_label: str
    first_day: date
    last_day: date
    days: tuple[CalendarDay, ...]
    leading_blanks: int = 0  # empty grid cells before day 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "month_label": self.month_label,
            "first_day": self.first_day.isoformat(),
            "last_day": self.last_day.isoformat(),
            "leading_blanks": self.leading_blanks,
            "days": [d.to_dict() for d in self.days],
        }


@dataclass(frozen=True)
class Window:
    """A 7-day span with the raw allocations touching it."""
    start: date
    end: date
    allocations: tuple[Allocation, ...]

    @property
    def label(self) -> str:
        # e.g. "Mar 10 - Mar 16, 2024"
        start_abbr = MONTH_ABBRS[self.start.month - 1]
        end_abbr = MONTH_ABBRS[self.end.month - 1]
        return f"{start_abbr} {self.start.day} - {end_abbr} {self.end.day}, {self.end.year}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "label": self.label,
            "allocations": [a.to_dict() for a in self.allocations],
        }


@dataclass(frozen=True)
class Department:
    id: str
    name: str
    parent_department_id: str | None = None


@dataclass(frozen=True)
class Employee:
    id: str
    name: str
    department_id: str | None = None
    is_active: bool = True

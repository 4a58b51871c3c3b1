from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from allocplan.core.models import Allocation, EmployeeDayAggregate
from allocplan.core.overlap import is_active_on, to_day

logger = logging.getLogger(__name__)


def aggregate_for_day(allocations: Iterable[Allocation], day: date) -> list[EmployeeDayAggregate]:
    """Group the allocations active on `day` by employee.

    Employees appear in the order of their first active allocation in the
    input; each employee's allocations keep input order. When the same
    employee_id shows up with different names, the first name seen is kept.
    """
    day = to_day(day)

    # dict keeps insertion order -> first-seen employee order
    groups: dict[str, tuple[str, list[Allocation]]] = {}
    for allocation in allocations:
        if not is_active_on(allocation, day):
            continue
        entry = groups.get(allocation.employee_id)
        if entry is None:
            groups[allocation.employee_id] = (allocation.employee_name, [allocation])
            continue
        name, items = entry
        if allocation.employee_name != name:
            logger.debug(
                "Employee %s has conflicting names (%r kept, %r ignored) on %s",
                allocation.employee_id,
                name,
                allocation.employee_name,
                day.isoformat(),
            )
        items.append(allocation)

    # totals and states are derived by EmployeeDayAggregate itself
    return [
        EmployeeDayAggregate(employee_id=employee_id, employee_name=name, allocations=tuple(items))
        for employee_id, (name, items) in groups.items()
    ]

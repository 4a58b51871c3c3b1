"""Department hierarchy helpers.

Departments reference their parent by id. Descendants are collected with an
explicit worklist so deep hierarchies do not hit the recursion limit.
"""

from __future__ import annotations

from collections import defaultdict, deque
from collections.abc import Iterable

from allocplan.core.models import Allocation, Department, Employee


def sub_department_ids(departments: Iterable[Department], department_id: str) -> list[str]:
    """Return ids of every department below `department_id`, breadth-first."""
    children: dict[str, list[str]] = defaultdict(list)
    for dept in departments:
        if dept.parent_department_id is not None:
            children[dept.parent_department_id].append(dept.id)

    out: list[str] = []
    seen = {department_id}
    queue = deque(children.get(department_id, []))
    while queue:
        current = queue.popleft()
        if current in seen:
            # parent links form a cycle
            continue
        seen.add(current)
        out.append(current)
        queue.extend(children.get(current, []))
    return out


def employees_in_department(
    employees: Iterable[Employee],
    departments: Iterable[Department],
    department_id: str,
) -> list[Employee]:
    """Employees of the department and all of its sub-departments, in input order."""
    scope = {department_id, *sub_department_ids(departments, department_id)}
    return [e for e in employees if e.department_id in scope]


def filter_allocations_by_employees(
    allocations: Iterable[Allocation],
    employee_ids: Iterable[str],
) -> list[Allocation]:
    wanted = set(employee_ids)
    return [a for a in allocations if a.employee_id in wanted]

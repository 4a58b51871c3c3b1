from __future__ import annotations

from datetime import date

from allocplan.core.departments import (
    employees_in_department,
    filter_allocations_by_employees,
    sub_department_ids,
)
from allocplan.core.models import Allocation, Department, Employee


DEPARTMENTS = [
    Department(id="root", name="Company"),
    Department(id="eng", name="Engineering", parent_department_id="root"),
    Department(id="ops", name="Operations", parent_department_id="root"),
    Department(id="web", name="Web", parent_department_id="eng"),
    Department(id="data", name="Data", parent_department_id="eng"),
    Department(id="ml", name="ML", parent_department_id="data"),
]


def test_sub_departments_breadth_first():
    assert sub_department_ids(DEPARTMENTS, "root") == ["eng", "ops", "web", "data", "ml"]
    assert sub_department_ids(DEPARTMENTS, "eng") == ["web", "data", "ml"]
    assert sub_department_ids(DEPARTMENTS, "ml") == []
    assert sub_department_ids(DEPARTMENTS, "missing") == []


def test_deep_hierarchy_does_not_recurse():
    depth = 5000
    chain = [Department(id="d0", name="d0")]
    chain += [Department(id=f"d{i}", name=f"d{i}", parent_department_id=f"d{i - 1}") for i in range(1, depth)]
    ids = sub_department_ids(chain, "d0")
    assert len(ids) == depth - 1
    assert ids[-1] == f"d{depth - 1}"


def test_cycle_is_visited_once():
    cyclic = [
        Department(id="a", name="A", parent_department_id="c"),
        Department(id="b", name="B", parent_department_id="a"),
        Department(id="c", name="C", parent_department_id="b"),
    ]
    assert sub_department_ids(cyclic, "a") == ["b", "c"]


def test_employees_in_department_includes_children():
    employees = [
        Employee(id="1", name="Ann", department_id="web"),
        Employee(id="2", name="Bob", department_id="ops"),
        Employee(id="3", name="Cid", department_id="ml", is_active=False),
        Employee(id="4", name="Dee", department_id="eng"),
        Employee(id="5", name="Eli", department_id=None),
    ]
    assert [e.id for e in employees_in_department(employees, DEPARTMENTS, "eng")] == ["1", "3", "4"]
    assert [e.id for e in employees_in_department(employees, DEPARTMENTS, "ops")] == ["2"]


def test_filter_allocations_keeps_order():
    d = date(2024, 3, 1)
    allocations = [
        Allocation(id=str(i), employee_id=emp, employee_name=emp, project_name="P", start_date=d, end_date=d, allocation_percentage=10)
        for i, emp in enumerate(["x", "y", "x", "z"])
    ]
    out = filter_allocations_by_employees(allocations, ["x", "z"])
    assert [a.id for a in out] == ["0", "2", "3"]

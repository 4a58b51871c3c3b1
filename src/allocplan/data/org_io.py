"""Read department and employee exports used to scope the views."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from allocplan.core.models import Department, Employee
from allocplan.data.excel_io import apply_aliases, is_blank, normalize_columns, read_table_file, to_bool

logger = logging.getLogger(__name__)

DEPARTMENT_ALIASES = {
    "department_id": "id",
    "department": "name",
    "department_name": "name",
    "parent_id": "parent_department_id",
    "parent": "parent_department_id",
}

EMPLOYEE_ALIASES = {
    "employee_id": "id",
    "employee_name": "name",
    "given_name": "name",
    "department": "department_id",
    "active": "is_active",
}


def _text(value) -> str | None:
    if is_blank(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _require(df: pd.DataFrame, columns: tuple[str, ...], what: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"{what}: missing required columns: {', '.join(missing)}")


def departments_from_frame(df: pd.DataFrame) -> list[Department]:
    df = apply_aliases(normalize_columns(df), DEPARTMENT_ALIASES)
    _require(df, ("id",), "departments")

    out: list[Department] = []
    for row in df.to_dict(orient="records"):
        dept_id = _text(row.get("id"))
        if dept_id is None:
            logger.warning("Skipping department row without id: %r", row)
            continue
        out.append(
            Department(
                id=dept_id,
                name=_text(row.get("name")) or dept_id,
                parent_department_id=_text(row.get("parent_department_id")),
            )
        )
    return out


def employees_from_frame(df: pd.DataFrame) -> list[Employee]:
    df = apply_aliases(normalize_columns(df), EMPLOYEE_ALIASES)
    _require(df, ("id", "department_id"), "employees")

    out: list[Employee] = []
    for row in df.to_dict(orient="records"):
        emp_id = _text(row.get("id"))
        if emp_id is None:
            logger.warning("Skipping employee row without id: %r", row)
            continue
        try:
            active = to_bool(row.get("is_active"), default=True)
        except ValueError as e:
            raise ValueError(f"employee {emp_id}: is_active {e}") from None
        out.append(
            Employee(
                id=emp_id,
                name=_text(row.get("name")) or "",
                department_id=_text(row.get("department_id")),
                is_active=active,
            )
        )
    return out


def read_departments(path: str | Path) -> list[Department]:
    return departments_from_frame(read_table_file(path))


def read_employees(path: str | Path) -> list[Employee]:
    return employees_from_frame(read_table_file(path))

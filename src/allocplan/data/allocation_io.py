"""Turn exported allocation rows into `Allocation` records.

The data source hands over flat rows (dicts, a DataFrame, or an .xlsx/.csv
export). Rows that cannot be parsed are skipped and reported back; one bad row
does not fail the whole batch.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import pandas as pd

from allocplan.core.models import Allocation
from allocplan.data.excel_io import (
    apply_aliases,
    coerce_date,
    coerce_float,
    is_blank,
    normalize_columns,
    read_table_file,
)

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("id", "employee_id", "start_date", "end_date")

# Common export headers -> canonical field names (after normalize_col_name)
COLUMN_ALIASES = {
    "allocation_id": "id",
    "employee": "employee_name",
    "project": "project_name",
    "start": "start_date",
    "end": "end_date",
    "allocation": "allocation_percentage",
    "percentage": "allocation_percentage",
    "pct": "allocation_percentage",
}


def _clean_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            # Excel turns numeric ids into floats (42 -> 42.0)
            return str(int(value))
    s = str(value).strip()
    return "" if s.lower() == "nan" else s


def _parse_percentage(value: Any) -> float | None:
    # blank -> None (summed as 0); anything else must be a non-negative number
    if is_blank(value):
        return None
    pct = coerce_float(value)
    if pct is None or math.isnan(pct):
        raise ValueError(f"allocation_percentage is not a number: {value!r}")
    if pct < 0:
        raise ValueError(f"allocation_percentage is negative: {value!r}")
    return pct


def allocation_from_row(row: Mapping[str, Any]) -> Allocation:
    """Build one Allocation from a mapping with canonical keys.

    Raises:
        ValueError: a required field is missing, a date cannot be parsed, or
            the percentage is not a non-negative number.
    """
    for key in ("id", "employee_id"):
        if not _clean_str(row.get(key)):
            raise ValueError(f"{key} is empty")

    start = coerce_date(row.get("start_date"), field="start_date")
    end = coerce_date(row.get("end_date"), field="end_date")

    return Allocation(
        id=_clean_str(row.get("id")),
        employee_id=_clean_str(row.get("employee_id")),
        employee_name=_clean_str(row.get("employee_name")),
        project_name=_clean_str(row.get("project_name")),
        start_date=start,
        end_date=end,
        allocation_percentage=_parse_percentage(row.get("allocation_percentage")),
    )


def allocations_from_records(
    records: Iterable[Mapping[str, Any]],
) -> tuple[list[Allocation], list[dict]]:
    """Parse rows into allocations.

    Returns:
        (allocations, errors):
            allocations: parsed records, in input order
            errors: one dict per skipped row with keys row, id, error
    """
    allocations: list[Allocation] = []
    errors: list[dict] = []
    for idx, row in enumerate(records):
        try:
            allocations.append(allocation_from_row(row))
        except ValueError as e:
            errors.append({"row": idx, "id": _clean_str(row.get("id")) or None, "error": str(e)})

    if errors:
        logger.warning("Skipped %d of %d allocation rows", len(errors), len(errors) + len(allocations))
    return allocations, errors


def allocations_from_frame(df: pd.DataFrame) -> tuple[list[Allocation], list[dict]]:
    """Parse a DataFrame export; column names are normalized and aliased first."""
    df = apply_aliases(normalize_columns(df), COLUMN_ALIASES)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")

    records = df.to_dict(orient="records")
    return allocations_from_records(records)


def read_allocations(path: str | Path) -> tuple[list[Allocation], list[dict]]:
    """Load allocations from an .xlsx/.csv export.

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: unsupported or unreadable file, or required columns missing.
    """
    logger.info("Reading allocations from %s", path)
    return allocations_from_frame(read_table_file(path))

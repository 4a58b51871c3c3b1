from __future__ import annotations

import io
import re
import unicodedata
import zipfile
from datetime import date, datetime
from pathlib import Path

import pandas as pd


SUPPORTED_SUFFIXES = (".xlsx", ".csv")


def read_table_bytes(content: bytes, *, suffix: str = ".xlsx") -> pd.DataFrame:
    """Read an export (.xlsx / .csv bytes) into a DataFrame.

    Excel files: reads the first sheet.
    """
    bio = io.BytesIO(content)
    if suffix.lower() == ".csv":
        df = pd.read_csv(bio, dtype=str, keep_default_na=False)
    else:
        df = pd.read_excel(bio, engine="openpyxl")
    df.columns = [str(c).strip() for c in df.columns]
    return df


def normalize_col_name(name: str) -> str:
    """Normalize export column names to an ASCII snake_case token.

    "Employee Name" -> "employee_name", "Allocation %" -> "allocation".
    """
    s = str(name or "").strip().lower()
    s = unicodedata.normalize("NFKD", s)
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = s.replace("\u00a0", " ")
    s = re.sub(r"[^a-z0-9 ]+", " ", s)
    s = re.sub(r"\s+", "_", s).strip("_")
    return s


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [normalize_col_name(c) for c in df.columns]
    return df


def is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and pd.isna(value):
        return True
    if value is pd.NaT:
        return True
    s = str(value).strip()
    return not s or s.lower() in {"nan", "nat", "none", "null"}


def coerce_date(value, *, field: str = "date") -> date:
    """Coerce common Excel/pandas/string date representations to a `date`."""
    if is_blank(value):
        raise ValueError(f"{field} is empty")

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    # pandas Timestamp
    if hasattr(value, "to_pydatetime"):
        return value.to_pydatetime().date()

    s = str(value).strip()
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in ("%d-%m-%Y", "%d/%m/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue

    raise ValueError(f"{field} is not a valid date: {value!r}")


def coerce_float(value) -> float | None:
    """Coerce numbers and numeric strings to float.

    Returns None when the value is empty/NaN or not numeric. Accepts ',' as
    decimal separator and a trailing '%'.
    """
    if is_blank(value):
        return None

    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)

    s = str(value).strip().rstrip("%").strip()

    # 1.234,56 -> 1234.56
    if "," in s and "." in s:
        s = s.replace(".", "").replace(",", ".")
    elif "," in s:
        s = s.replace(",", ".")

    try:
        return float(s)
    except ValueError:
        return None


def read_table_file(path: str | Path) -> pd.DataFrame:
    """Read an .xlsx/.csv export from disk.

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: unsupported suffix, or the content cannot be read as a table.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported file type {path.suffix!r} (expected {', '.join(SUPPORTED_SUFFIXES)})")

    content = path.read_bytes()
    try:
        return read_table_bytes(content, suffix=suffix)
    except (ValueError, KeyError, ImportError, zipfile.BadZipFile) as e:
        raise ValueError(f"Could not read {path.name}: {e}") from e


def to_bool(value, *, default: bool = True) -> bool:
    """Coerce Excel/CSV flag cells (1/0, true/false, yes/no, x) to bool."""
    if is_blank(value):
        return default
    s = str(value).strip().lower()
    if s in {"1", "1.0", "true", "yes", "y", "x", "active"}:
        return True
    if s in {"0", "0.0", "false", "no", "n", "inactive"}:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def apply_aliases(df: pd.DataFrame, aliases: dict[str, str]) -> pd.DataFrame:
    """Rename alias columns to canonical names unless the canonical column exists."""
    renames: dict[str, str] = {}
    for col in df.columns:
        target = aliases.get(col)
        if target and target not in df.columns and target not in renames.values():
            renames[col] = target
    return df.rename(columns=renames)

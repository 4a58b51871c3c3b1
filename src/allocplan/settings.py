from __future__ import annotations

import calendar
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    week_start: int = calendar.SUNDAY  # Python weekday number, Monday=0
    trailing_weeks: int = 12
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Read overrides from ALLOCPLAN_* environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()

        week_start = _int_env(env, "ALLOCPLAN_WEEK_START", defaults.week_start)
        if not 0 <= week_start <= 6:
            raise ValueError(f"ALLOCPLAN_WEEK_START must be between 0 and 6, got {week_start}")

        return cls(
            week_start=week_start,
            trailing_weeks=_int_env(env, "ALLOCPLAN_TRAILING_WEEKS", defaults.trailing_weeks),
            log_level=(env.get("ALLOCPLAN_LOG_LEVEL") or defaults.log_level).strip().upper(),
        )


def _int_env(env, key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None

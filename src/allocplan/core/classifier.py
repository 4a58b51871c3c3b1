from __future__ import annotations

from enum import Enum

FULL_ALLOCATION = 100


class AllocationState(str, Enum):
    UNDER = "under"
    EXACT = "exact"
    OVER = "over"


def classify(total_percentage: float | None) -> AllocationState:
    """Map a summed percentage to under / exact / over.

    The comparison against 100 is exact. Fractional inputs such as 99.999 stay
    `under`; callers that accumulate floats should sum with `math.fsum`.
    """
    total = total_percentage or 0
    if total > FULL_ALLOCATION:
        return AllocationState.OVER
    if total == FULL_ALLOCATION:
        return AllocationState.EXACT
    return AllocationState.UNDER

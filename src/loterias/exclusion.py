from __future__ import annotations
from enum import Enum
from typing import Dict, FrozenSet, Mapping

from .history import History

ExclusionSet = FrozenSet[int]

LIGHT_WINDOW = 3    # numbers from the last 3 draws
HEAVY_WINDOW = 18   # numbers from the last 18 draws

class ExclusionFilter(str, Enum):
    LIGHT = "light"
    HEAVY = "heavy"

    @property
    def window(self) -> int:
        return DEFAULT_WINDOWS[self]

DEFAULT_WINDOWS: Dict[ExclusionFilter, int] = {
    ExclusionFilter.LIGHT: LIGHT_WINDOW,
    ExclusionFilter.HEAVY: HEAVY_WINDOW,
}

def build_exclusion_set(history: History, window: int) -> ExclusionSet:
    """Union of the numbers drawn in the first ``window`` records of ``history``."""
    if window < 0:
        raise ValueError(f"window must be >= 0, got {window}")
    blocked = set()
    for record in history[:window]:
        if not isinstance(record.numbers, (list, tuple)):
            continue
        blocked.update(int(n) for n in record.numbers)
    return frozenset(blocked)

def build_exclusion_sets(
    history: History,
    windows: Mapping[ExclusionFilter, int] | None = None,
) -> Dict[ExclusionFilter, ExclusionSet]:
    windows = DEFAULT_WINDOWS if windows is None else windows
    return {name: build_exclusion_set(history, size) for name, size in windows.items()}

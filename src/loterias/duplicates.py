from __future__ import annotations
from typing import Iterable, Optional

from .history import DrawRecord, History
from .rules import GameConfig

SEPARATOR = "-"

def _fmt(n: int, game: GameConfig | None) -> str:
    if game is not None:
        return game.format_number(n)
    return f"{n:02d}"

def signature(numbers: Iterable, game: GameConfig | None = None) -> str:
    """Canonical key for a set of numbers: two-digit, ascending, dash-joined.

    Accepts ints or numeric strings, so a formatted Combination and a raw
    DrawRecord produce the same key for the same numbers.
    """
    return SEPARATOR.join(_fmt(n, game) for n in sorted(int(x) for x in numbers))

def find_match(combination: Iterable, history: History, game: GameConfig | None = None) -> Optional[DrawRecord]:
    """Most recent draw whose numbers equal ``combination``, or None.

    History is newest first, so the first hit is the latest occurrence.
    """
    if not history:
        return None
    target = signature(combination, game)
    for record in history:
        if not isinstance(record.numbers, (list, tuple)) or not record.numbers:
            continue
        if signature(record.numbers, game) == target:
            return record
    return None

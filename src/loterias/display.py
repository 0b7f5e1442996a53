"""Text helpers the CLI uses to render core results."""

from __future__ import annotations
from typing import AbstractSet, List, Optional

from .history import DrawRecord
from .rules import Combination, GameConfig

def format_draw_numbers(record: DrawRecord, game: GameConfig) -> str:
    if not record.numbers:
        return "-"
    return " ".join(game.format_number(n) for n in record.numbers)

def blocked_numbers(exclusion: AbstractSet[int], game: GameConfig) -> List[str]:
    return [game.format_number(n) for n in sorted(exclusion)]

def format_combination_line(index: int, combination: Combination, match: Optional[DrawRecord] = None) -> str:
    line = f"JOGO {index}: {' - '.join(combination)}"
    if match is not None:
        line += f"  !! already drawn in draw {match.draw_id} ({match.date})"
    return line

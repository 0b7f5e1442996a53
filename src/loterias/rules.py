from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple

from .errors import InvalidCountError, UnknownGameError

Combination = Tuple[str, ...]  # ascending, two-digit strings

@dataclass(frozen=True)
class GameConfig:
    key: str
    name: str
    lower: int
    upper: int
    min_count: int
    max_count: int
    default_count: int
    shows_zero: bool = False

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(f"{self.key}: lower bound {self.lower} above upper bound {self.upper}")
        if not (self.min_count <= self.default_count <= self.max_count):
            raise ValueError(
                f"{self.key}: counts must satisfy min <= default <= max "
                f"(got {self.min_count}/{self.default_count}/{self.max_count})"
            )

    @property
    def pool_size(self) -> int:
        return self.upper - self.lower + 1

    @property
    def fixed_count(self) -> bool:
        """True when the game only accepts one combination size (e.g. Lotomania)."""
        return self.min_count == self.max_count

    def validate_count(self, count: int) -> None:
        """Check that a requested combination size is allowed for this game."""
        if not (self.min_count <= count <= self.max_count):
            raise InvalidCountError(self, count)

    def format_number(self, n: int) -> str:
        if self.shows_zero and n == 0:
            return "00"
        return f"{n:02d}"


GAMES: Dict[str, GameConfig] = {
    "mega-sena": GameConfig("mega-sena", "Mega-Sena", 1, 60, 6, 15, 6),
    "lotofacil": GameConfig("lotofacil", "Lotofácil", 1, 25, 15, 20, 15),
    "quina": GameConfig("quina", "Quina", 1, 80, 5, 15, 5),
    # Lotomania is played 00-99 with a fixed 50-number ticket
    "lotomania": GameConfig("lotomania", "Lotomania", 0, 99, 50, 50, 50, shows_zero=True),
}

def get_game(key: str) -> GameConfig:
    try:
        return GAMES[key]
    except KeyError:
        raise UnknownGameError(key) from None

from __future__ import annotations
from math import comb
from typing import AbstractSet, List

from .errors import FilterTooRestrictiveError
from .rules import Combination, GameConfig
from .sampler import IndexSampler

def total_space(game: GameConfig, count: int | None = None) -> int:
    """Number of distinct combinations of ``count`` numbers (default size if omitted)."""
    k = game.default_count if count is None else count
    return comb(game.pool_size, k)

def candidate_pool(game: GameConfig, exclusion: AbstractSet[int] | None = None) -> List[int]:
    blocked = exclusion or ()
    return [n for n in range(game.lower, game.upper + 1) if n not in blocked]

def format_combination(game: GameConfig, numbers) -> Combination:
    return tuple(game.format_number(n) for n in sorted(numbers))

def generate_combination(
    game: GameConfig,
    count: int,
    exclusion: AbstractSet[int] | None = None,
    sampler: IndexSampler | None = None,
) -> Combination:
    """
    Draw ``count`` distinct numbers from the game's range minus ``exclusion``.

    Each pick takes a uniform index into what is left of the pool and removes
    that element (a partial Fisher-Yates shuffle), so every subset of size
    ``count`` is equally likely. Raises FilterTooRestrictiveError, without
    drawing anything, when the filtered pool is smaller than ``count``.
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    sampler = sampler or IndexSampler()

    pool = candidate_pool(game, exclusion)
    if len(pool) < count:
        raise FilterTooRestrictiveError(count, len(pool))

    picks: List[int] = []
    for _ in range(count):
        idx = sampler.sample(len(pool))
        picks.append(pool.pop(idx))
    return format_combination(game, picks)

def generate_combinations(
    game: GameConfig,
    games: int,
    count: int,
    exclusion: AbstractSet[int] | None = None,
    sampler: IndexSampler | None = None,
) -> List[Combination]:
    if games < 1:
        raise ValueError(f"games must be >= 1, got {games}")
    sampler = sampler or IndexSampler()
    return [generate_combination(game, count, exclusion, sampler) for _ in range(games)]

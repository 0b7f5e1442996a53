"""
Per-game generator session.

A session owns everything that changes at runtime: the draw history, the
exclusion sets derived from it and the load status. It is built once per
game, initialized once (the only async step) and then answers generation
and duplicate-check calls synchronously.
"""

from __future__ import annotations
import asyncio
from dataclasses import dataclass
from enum import Enum
from functools import partial
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from loguru import logger

from .config import settings
from .duplicates import find_match
from .errors import HistoryUnavailableError
from .exclusion import DEFAULT_WINDOWS, ExclusionFilter, ExclusionSet, build_exclusion_sets
from .generate import generate_combination
from .history import DrawRecord, History, fetch_history, load_history_file, normalize_history
from .rules import Combination, GameConfig, get_game
from .sampler import IndexSampler

Fetcher = Callable[[str], list]


class SessionStatus(str, Enum):
    NOT_INITIALIZED = "not-initialized"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class InitResult:
    ok: bool
    message: str
    draws: int = 0


class GeneratorSession:
    def __init__(
        self,
        game_key: str,
        *,
        source_url: str | None = None,
        history_file: str | Path | None = None,
        fetcher: Fetcher | None = None,
        sampler: IndexSampler | None = None,
        windows: Mapping[ExclusionFilter, int] | None = None,
    ) -> None:
        # unknown keys fail here, before anything is fetched
        self.game: GameConfig = get_game(game_key)
        self.source_url = source_url or settings.history_url(self.game.key)
        self.history_file = Path(history_file) if history_file is not None else None
        self._fetch = fetcher or fetch_history
        self.sampler = sampler or IndexSampler()
        self.windows: Dict[ExclusionFilter, int] = dict(DEFAULT_WINDOWS if windows is None else windows)

        self.status = SessionStatus.NOT_INITIALIZED
        self.status_message = f"Loading {self.game.name} results..."
        self.history: History = []
        self.exclusions: Dict[ExclusionFilter, ExclusionSet] = {f: frozenset() for f in self.windows}

    @property
    def ready(self) -> bool:
        return self.status is SessionStatus.READY

    def _load_remote(self) -> History:
        return normalize_history(self._fetch(self.source_url))

    async def initialize(self) -> InitResult:
        """Fetch and normalize the history once, then derive the exclusion sets.

        Never raises for source problems: a failed load leaves the session in
        the FAILED state, where generation still works without filters.
        """
        if self.history_file is not None:
            load = partial(load_history_file, self.history_file)
        else:
            load = self._load_remote
        loop = asyncio.get_running_loop()
        try:
            history = await loop.run_in_executor(None, load)
        except HistoryUnavailableError as e:
            logger.warning("{}: history unavailable, running offline ({})", self.game.name, e)
            self.status = SessionStatus.FAILED
            self.history = []
            self.exclusions = {f: frozenset() for f in self.windows}
            self.status_message = "Error downloading data. Offline mode."
            return InitResult(False, f"{self.status_message} {e}")

        self.load_history(history)
        return InitResult(True, self.status_message, len(self.history))

    def load_history(self, history: History) -> None:
        """Replace the history and rebuild every exclusion set from it."""
        ordered = sorted(history, key=lambda r: r.draw_id, reverse=True)
        exclusions = build_exclusion_sets(ordered, self.windows)
        self.history, self.exclusions = ordered, exclusions
        self.status = SessionStatus.READY
        if ordered:
            self.status_message = (
                f"Base {self.game.name}: latest draw {ordered[0].draw_id}, {len(ordered)} draws loaded."
            )
        else:
            self.status_message = f"Base {self.game.name}: no draws found."
        logger.info(self.status_message)
        logger.debug(
            "Exclusion sets: {}",
            {f.value: len(s) for f, s in self.exclusions.items()},
        )

    def exclusion(self, flt: ExclusionFilter | str) -> ExclusionSet:
        flt = ExclusionFilter(flt)
        if flt not in self.exclusions:
            logger.warning("No {} window configured for this session; nothing is blocked", flt.value)
            return frozenset()
        return self.exclusions[flt]

    def _active_exclusion(self, flt: ExclusionFilter | str | None, strict: bool) -> Optional[ExclusionSet]:
        if flt is None:
            return None
        flt = ExclusionFilter(flt)
        if not self.ready:
            if strict:
                raise HistoryUnavailableError(
                    f"Cannot apply the {flt.value} filter: history is {self.status.value}"
                )
            logger.warning("Ignoring {} filter: history is {}", flt.value, self.status.value)
            return None
        if flt not in self.exclusions:
            logger.warning("Ignoring {} filter: no window configured for it", flt.value)
            return None
        return self.exclusions[flt]

    def generate(
        self,
        count: int | None = None,
        flt: ExclusionFilter | str | None = None,
        strict: bool = False,
    ) -> Combination:
        count = self.game.default_count if count is None else count
        self.game.validate_count(count)
        return generate_combination(self.game, count, self._active_exclusion(flt, strict), self.sampler)

    def check(self, combination: Combination) -> Optional[DrawRecord]:
        """Duplicate check; always None unless the history loaded."""
        if not self.ready:
            return None
        return find_match(combination, self.history, self.game)

    def generate_many(
        self,
        games: int,
        count: int | None = None,
        flt: ExclusionFilter | str | None = None,
        strict: bool = False,
    ) -> List[Tuple[Combination, Optional[DrawRecord]]]:
        """Generate ``games`` combinations, each paired with its matching past draw (if any)."""
        out = []
        for _ in range(games):
            combo = self.generate(count, flt, strict)
            out.append((combo, self.check(combo)))
        return out

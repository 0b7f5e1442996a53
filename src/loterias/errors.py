"""Exceptions raised by the generator core."""

from __future__ import annotations

from typing import Any


class LotteryError(Exception):
    """Base error. ``code`` is a stable identifier a front end can switch on."""

    code = "lottery_error"

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class UnknownGameError(LotteryError, KeyError):
    """No game is configured under the requested key."""

    code = "unknown_game"

    def __init__(self, key: str) -> None:
        super().__init__(f"Game not configured: {key}", details={"key": key})
        self.key = key

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class InvalidCountError(LotteryError, ValueError):
    """Requested combination size is outside the game's allowed range."""

    code = "invalid_count"

    def __init__(self, game: Any, count: int) -> None:
        super().__init__(
            f"{game.name} combinations take {game.min_count} to {game.max_count} numbers, got {count}",
            details={"game": game.key, "count": count},
        )
        self.count = count


class FilterTooRestrictiveError(LotteryError):
    """The exclusion filter left fewer candidates than numbers requested."""

    code = "filter_too_restrictive"

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"Filter too restrictive: {requested} numbers requested but only "
            f"{available} remain. Try a lighter filter.",
            details={"requested": requested, "available": available},
        )
        self.requested = requested
        self.available = available


class HistoryUnavailableError(LotteryError):
    """Draw history could not be fetched or decoded."""

    code = "history_unavailable"

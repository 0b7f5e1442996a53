from __future__ import annotations
import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

import requests
from loguru import logger
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .config import settings
from .errors import HistoryUnavailableError

UNKNOWN_DATE = "unknown date"

@dataclass(frozen=True)
class DrawRecord:
    draw_id: int
    date: str
    numbers: Tuple[int, ...]

History = List[DrawRecord]  # always sorted by draw_id, newest first

# --- helpers ---
ALIASES = frozenset({"concurso", "Concurso", "data", "Data", "resultado", "dezenas", "Dezenas"})

def _is_blank(value: Any) -> bool:
    if value is None or value is False or value == "":
        return True
    return isinstance(value, (int, float)) and value == 0

def _as_int(value: Any) -> Optional[int]:
    """int(value) for ints, integral floats and digit strings; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        s = value.strip()
        if s.lstrip("-").isdigit():
            return int(s)
    return None


class RawDraw(BaseModel):
    """One entry of the upstream JSON feed.

    The feed has renamed its fields over time, so every field accepts each
    spelling seen so far. A spelling holding null, "" or 0 counts as absent,
    so the next one is tried; the first remaining one wins.
    """

    model_config = ConfigDict(extra="ignore")

    draw_id: int = Field(0, validation_alias=AliasChoices("concurso", "Concurso"))
    date: str = Field(UNKNOWN_DATE, validation_alias=AliasChoices("data", "Data"))
    numbers: Tuple[int, ...] = Field((), validation_alias=AliasChoices("resultado", "dezenas", "Dezenas"))

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_aliases(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {k: v for k, v in data.items() if not (k in ALIASES and _is_blank(v))}

    @field_validator("draw_id", mode="before")
    @classmethod
    def _lenient_id(cls, v: Any) -> int:
        n = _as_int(v)
        return n if n is not None else 0

    @field_validator("date", mode="before")
    @classmethod
    def _lenient_date(cls, v: Any) -> str:
        if v is None or v == "":
            return UNKNOWN_DATE
        return str(v)

    @field_validator("numbers", mode="before")
    @classmethod
    def _lenient_numbers(cls, v: Any) -> Tuple[int, ...]:
        if not isinstance(v, (list, tuple)):
            return ()
        out = []
        for item in v:
            n = _as_int(item)
            if n is None:
                return ()
            out.append(n)
        return tuple(out)

    def to_record(self) -> DrawRecord:
        return DrawRecord(self.draw_id, self.date, self.numbers)


def normalize_record(raw: Mapping[str, Any]) -> DrawRecord:
    return RawDraw.model_validate(dict(raw)).to_record()

def normalize_history(raw_items: Iterable[Any]) -> History:
    """
    Turn a raw feed into a History: each mapping normalized into a
    DrawRecord, anything else skipped, result sorted newest first.
    The input is not modified.
    """
    records: History = []
    for i, raw in enumerate(raw_items):
        if not isinstance(raw, Mapping):
            logger.debug("Skipping history entry {}: not an object ({})", i, type(raw).__name__)
            continue
        try:
            records.append(normalize_record(raw))
        except ValidationError as e:
            # every field has a lenient validator, so this only trips on odd key types
            logger.debug("Skipping history entry {}: {}", i, e)
            continue
    records.sort(key=lambda r: r.draw_id, reverse=True)
    return records

def recent_draws(history: History, limit: int = 20) -> History:
    """The newest ``limit`` draws, as shown in the history table."""
    return history[:max(0, limit)]

# --- sources ---
def fetch_history(
    url: str,
    timeout: float | None = None,
    session: requests.Session | None = None,
) -> list:
    """Download the raw JSON feed. Any failure surfaces as HistoryUnavailableError."""
    sess = session
    if sess is None:
        sess = requests.Session()
        sess.headers.update({"User-Agent": settings.USER_AGENT})
    timeout = settings.HTTP_TIMEOUT if timeout is None else timeout

    logger.info("Downloading draw history from {}", url)
    try:
        resp = sess.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise HistoryUnavailableError(f"Network error fetching {url}: {e}", details={"url": url}) from e
    if resp.status_code != 200:
        raise HistoryUnavailableError(
            f"History source answered HTTP {resp.status_code}",
            details={"url": url, "status": resp.status_code},
        )
    try:
        data = resp.json()
    except ValueError as e:
        raise HistoryUnavailableError(f"History source returned invalid JSON: {e}", details={"url": url}) from e
    if not isinstance(data, list):
        raise HistoryUnavailableError("History source did not return a JSON array", details={"url": url})
    logger.info("Downloaded {} raw draws", len(data))
    return data

def load_history_file(path: str | Path) -> History:
    """Read a local snapshot of the feed (same JSON shape) and normalize it."""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise HistoryUnavailableError(f"Could not read history file {p}: {e}", details={"path": str(p)}) from e
    if not isinstance(data, list):
        raise HistoryUnavailableError(f"{p} does not contain a JSON array", details={"path": str(p)})
    return normalize_history(data)

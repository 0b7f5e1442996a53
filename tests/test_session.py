import asyncio

import pytest
from loguru import logger

from loterias.errors import (
    FilterTooRestrictiveError,
    HistoryUnavailableError,
    InvalidCountError,
    UnknownGameError,
)
from loterias.exclusion import ExclusionFilter
from loterias.sampler import IndexSampler
from loterias.session import GeneratorSession, SessionStatus

def _ready(raw, key="mega-sena", **kwargs):
    calls = []

    def fetcher(url):
        calls.append(url)
        return raw

    session = GeneratorSession(key, fetcher=fetcher, source_url="https://example/feed.json", **kwargs)
    result = asyncio.run(session.initialize())
    return session, result, calls

def _offline(key="mega-sena", **kwargs):
    def fetcher(url):
        raise HistoryUnavailableError("History source answered HTTP 503")

    session = GeneratorSession(key, fetcher=fetcher, **kwargs)
    result = asyncio.run(session.initialize())
    return session, result

def test_unknown_game_fails_at_construction():
    with pytest.raises(UnknownGameError):
        GeneratorSession("euromillions")

def test_default_source_url():
    session = GeneratorSession("quina")
    assert session.source_url.endswith("/quina.json")

def test_not_initialized_state():
    session = GeneratorSession("mega-sena")
    assert session.status is SessionStatus.NOT_INITIALIZED
    assert session.status_message == "Loading Mega-Sena results..."
    combo = session.generate()
    assert len(combo) == 6
    assert session.check(combo) is None
    assert session.exclusion("light") == frozenset()

def test_initialize_loads_sorted_history(raw_feed):
    session, result, calls = _ready(raw_feed)
    assert calls == ["https://example/feed.json"]
    assert result.ok and result.draws == 5
    assert session.status is SessionStatus.READY
    assert [r.draw_id for r in session.history] == [5, 4, 3, 2, 1]
    assert "latest draw 5" in session.status_message
    assert session.exclusion(ExclusionFilter.LIGHT) == {7, 8, 9, 10, 11, 12, 1, 2, 3, 4, 5, 6, 15, 22, 33, 41, 58}

def test_initialize_from_file(snapshot):
    session = GeneratorSession("mega-sena", history_file=snapshot)
    result = asyncio.run(session.initialize())
    assert result.ok
    assert session.history[0].draw_id == 5

def test_missing_file_degrades(tmp_path):
    session = GeneratorSession("mega-sena", history_file=tmp_path / "missing.json")
    result = asyncio.run(session.initialize())
    assert not result.ok
    assert session.status is SessionStatus.FAILED

def test_fetch_failure_degrades_but_generation_works():
    session, result = _offline()
    assert not result.ok
    assert "Offline mode" in result.message
    assert session.status is SessionStatus.FAILED
    assert session.history == []
    combo = session.generate(flt="heavy")
    assert len(combo) == 6
    assert session.check(combo) is None

def test_strict_filter_requires_history():
    session, _ = _offline()
    with pytest.raises(HistoryUnavailableError):
        session.generate(flt="light", strict=True)

def test_filtered_generation_respects_blocklist(raw_feed):
    session, _, _ = _ready(raw_feed)
    blocked = session.exclusion("heavy")
    for _ in range(50):
        combo = session.generate(flt="heavy")
        assert not {int(x) for x in combo} & blocked

def test_count_validated_against_game(raw_feed):
    session, _, _ = _ready(raw_feed)
    with pytest.raises(InvalidCountError):
        session.generate(5)
    with pytest.raises(InvalidCountError):
        session.generate(16)
    assert len(session.generate(15)) == 15

def test_generate_many_flags_past_draws(raw_feed, scripted):
    # index 0 every time -> 01..06, which draws 4 and 1 produced
    session, _, _ = _ready(raw_feed, sampler=IndexSampler(scripted([0])))
    picks = session.generate_many(2)
    assert len(picks) == 2
    for combo, match in picks:
        assert combo == ("01", "02", "03", "04", "05", "06")
        assert match.draw_id == 4

def test_filter_too_restrictive_surfaces(history_of):
    session = GeneratorSession("lotofacil", fetcher=lambda url: [])
    session.load_history(history_of((1, range(1, 26))))
    with pytest.raises(FilterTooRestrictiveError):
        session.generate(flt="light")
    assert session.ready

def test_reload_rebuilds_exclusions(history_of):
    session = GeneratorSession("quina")
    session.load_history(history_of((1, [1, 2, 3, 4, 5])))
    assert session.exclusion("light") == {1, 2, 3, 4, 5}
    session.load_history(history_of((2, [10, 11, 12, 13, 14])))
    assert session.exclusion("light") == {10, 11, 12, 13, 14}

def test_empty_history_is_ready():
    session, result, _ = _ready([])
    assert result.ok and result.draws == 0
    assert session.ready
    assert session.status_message == "Base Mega-Sena: no draws found."

def test_failed_reload_clears_previous_history():
    calls = []

    def fetcher(url):
        calls.append(url)
        if len(calls) > 1:
            raise HistoryUnavailableError("History source answered HTTP 503")
        return [{"concurso": 1, "dezenas": [1, 2, 3, 4, 5, 6]}]

    session = GeneratorSession("mega-sena", fetcher=fetcher)
    assert asyncio.run(session.initialize()).ok
    assert session.exclusion("light") == {1, 2, 3, 4, 5, 6}

    result = asyncio.run(session.initialize())
    assert not result.ok
    assert session.status is SessionStatus.FAILED
    assert session.history == []
    assert session.exclusion("light") == frozenset()
    assert session.exclusion("heavy") == frozenset()
    assert session.check(("01", "02", "03", "04", "05", "06")) is None

def test_filter_without_window_warns(history_of):
    messages = []
    handler = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        session = GeneratorSession("quina", windows={ExclusionFilter.LIGHT: 1})
        session.load_history(history_of((1, [1, 2, 3, 4, 5])))
        assert len(session.generate(flt="heavy")) == 5
        assert session.exclusion("heavy") == frozenset()
    finally:
        logger.remove(handler)
    assert any("Ignoring heavy filter: no window configured" in m for m in messages)
    assert any("No heavy window configured" in m for m in messages)

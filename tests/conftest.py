import json

import pytest

from loterias.history import DrawRecord


class ScriptedBits:
    """Stand-in for secrets.randbits that replays fixed values (cycling)."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def __call__(self, bits):
        assert bits == 32
        v = self.values[self.calls % len(self.values)]
        self.calls += 1
        return v


@pytest.fixture
def scripted():
    return ScriptedBits


@pytest.fixture
def raw_feed():
    # mixes every field spelling the upstream feed has used
    return [
        {"concurso": 3, "data": "08/01/2025", "dezenas": ["04", "15", "22", "33", "41", "58"]},
        {"Concurso": 1, "Data": "01/01/2025", "Dezenas": ["01", "02", "03", "04", "05", "06"]},
        {"concurso": 5, "data": "15/01/2025", "resultado": [7, 8, 9, 10, 11, 12]},
        {"concurso": 2, "data": "04/01/2025", "dezenas": ["10", "20", "30", "40", "50", "60"]},
        {"concurso": 4, "data": "11/01/2025", "dezenas": ["01", "02", "03", "04", "05", "06"]},
    ]


@pytest.fixture
def snapshot(tmp_path, raw_feed):
    p = tmp_path / "mega-sena.json"
    p.write_text(json.dumps(raw_feed), encoding="utf-8")
    return p


def make_history(*draws):
    """DrawRecords from (id, numbers) pairs, newest first."""
    records = [DrawRecord(i, f"day {i}", tuple(nums)) for i, nums in draws]
    return sorted(records, key=lambda r: r.draw_id, reverse=True)


@pytest.fixture
def history_of():
    return make_history

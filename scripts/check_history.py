#!/usr/bin/env python3
"""Peek at a game's draw history: newest and oldest draws plus any gaps in draw ids."""
import sys

from loterias.config import settings
from loterias.errors import HistoryUnavailableError
from loterias.history import fetch_history, load_history_file, normalize_history
from loterias.rules import get_game

def peek(history, n_head=5, n_tail=5):
    print("Total draws:", len(history))
    print("\nNewest:")
    for r in history[:n_head]:
        print(r)
    print("\nOldest:")
    for r in history[-n_tail:]:
        print(r)

    ids = [r.draw_id for r in history]
    missing = sorted(set(range(min(ids), max(ids) + 1)) - set(ids)) if ids else []
    empty = [r.draw_id for r in history if not r.numbers]
    print(f"\nMissing draw ids: {len(missing)}")
    for m in missing[:50]:
        print(m)
    print(f"Draws without numbers: {len(empty)}")

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python3 scripts/check_history.py <game> [snapshot.json]")
        sys.exit(2)
    game = get_game(sys.argv[1])
    try:
        if len(sys.argv) > 2:
            history = load_history_file(sys.argv[2])
        else:
            history = normalize_history(fetch_history(settings.history_url(game.key)))
    except HistoryUnavailableError as e:
        print("History unavailable:", e)
        sys.exit(1)
    peek(history)

from __future__ import annotations
import argparse
import asyncio
import sys

from loguru import logger

from .config import settings
from .display import blocked_numbers, format_combination_line, format_draw_numbers
from .errors import FilterTooRestrictiveError, InvalidCountError
from .exclusion import ExclusionFilter
from .generate import total_space
from .history import recent_draws
from .log import configure_logging
from .rules import GAMES
from .session import GeneratorSession

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="loterias-unique",
        description="Generate lottery combinations, optionally skipping recently drawn numbers.",
    )
    ap.add_argument("game", choices=sorted(GAMES), help="Which lottery to play")
    ap.add_argument("--games", type=int, default=1, help="How many combinations to produce")
    ap.add_argument("--count", type=int, default=None, help="Numbers per combination (game default if omitted)")
    ap.add_argument(
        "--filter",
        choices=[f.value for f in ExclusionFilter],
        default=None,
        help="light: skip numbers from the last 3 draws; heavy: from the last 18 draws",
    )
    ap.add_argument("--file", default=None, help="Local JSON snapshot of the history instead of downloading it")
    ap.add_argument("--history", action="store_true", help="Print the 20 most recent draws")
    ap.add_argument("--show-blocked", action="store_true", help="Print the numbers the active filter blocks")
    ap.add_argument("--log-level", default=settings.LOG_LEVEL, help="loguru level for diagnostics on stderr")
    return ap

def main(argv: list[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.games < 1:
        ap.error("--games must be at least 1")
    configure_logging(args.log_level)

    session = GeneratorSession(args.game, history_file=args.file)
    game = session.game
    count = game.default_count if args.count is None else args.count
    if game.fixed_count and count != game.default_count:
        print(f"{game.name} always uses {game.default_count} numbers; ignoring --count {count}.")
        count = game.default_count

    print(session.status_message)
    result = asyncio.run(session.initialize())
    print(result.message)

    if args.history:
        print(f"\nLatest draws ({game.name}):")
        for rec in recent_draws(session.history):
            print(f"{rec.draw_id:>6}  {rec.date:<12}  {format_draw_numbers(rec, game)}")

    if args.filter and args.show_blocked:
        blocked = blocked_numbers(session.exclusion(args.filter), game)
        print(f"\nShowing {len(blocked)} blocked numbers:")
        print(" ".join(blocked))
    elif args.show_blocked:
        logger.warning("--show-blocked needs --filter light or --filter heavy; nothing to show")

    try:
        picks = session.generate_many(args.games, count, args.filter)
    except (FilterTooRestrictiveError, InvalidCountError) as e:
        print(f"\n{e.message}", file=sys.stderr)
        return 1

    print(f"\n{len(picks)} combination(s) of {count} out of {total_space(game, count):,} possible:")
    for i, (combo, match) in enumerate(picks, start=1):
        print(format_combination_line(i, combo, match))
    return 0

if __name__ == "__main__":
    sys.exit(main())

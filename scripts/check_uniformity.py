#!/usr/bin/env python3
"""Tabulate IndexSampler output for one range and compare it with a flat distribution."""
from __future__ import annotations
import argparse
from collections import Counter

from tqdm import tqdm

from loterias.sampler import IndexSampler, acceptance_limit, SOURCE_SPAN

def tabulate(range_: int, samples: int) -> Counter:
    sampler = IndexSampler()
    counts: Counter = Counter()
    for _ in tqdm(range(samples), desc=f"Sampling [0, {range_})", unit="draw", mininterval=0.5):
        counts[sampler.sample(range_)] += 1
    return counts

def chi_square(counts: Counter, range_: int, samples: int) -> float:
    expected = samples / range_
    return sum((counts.get(v, 0) - expected) ** 2 / expected for v in range(range_))

def main():
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("range", type=int, help="Sample from [0, range)")
    ap.add_argument("--samples", type=int, default=1_000_000)
    args = ap.parse_args()

    limit = acceptance_limit(args.range)
    print(f"Acceptance limit: {limit:,} (rejects {SOURCE_SPAN - limit} of 2**32 source values)")

    counts = tabulate(args.range, args.samples)
    expected = args.samples / args.range
    for v in range(args.range):
        c = counts.get(v, 0)
        print(f"{v:>4}  {c:>9}  {c / expected - 1:+.4%}")
    out_of_range = [v for v in counts if not 0 <= v < args.range]
    print(f"\nchi-square: {chi_square(counts, args.range, args.samples):.2f} "
          f"with {args.range - 1} degrees of freedom")
    if out_of_range:
        print("Out of range values:", out_of_range)

if __name__ == "__main__":
    main()

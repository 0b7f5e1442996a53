from __future__ import annotations
import secrets
from typing import Callable

RandomBits = Callable[[int], int]

SOURCE_BITS = 32
SOURCE_SPAN = 1 << SOURCE_BITS  # 2**32 distinct source values

def acceptance_limit(range_: int) -> int:
    """Largest multiple of ``range_`` that fits in the 32-bit source.

    Source values at or above the limit are rejected so every residue
    ``value % range_`` is produced by the same number of source values.
    """
    if range_ <= 0:
        raise ValueError(f"range must be positive, got {range_}")
    if range_ > SOURCE_SPAN:
        raise ValueError(f"range must not exceed 2**{SOURCE_BITS}, got {range_}")
    return (SOURCE_SPAN // range_) * range_


class IndexSampler:
    """Uniform integers in [0, range) via rejection sampling.

    ``randbits`` defaults to :func:`secrets.randbits`; tests inject a
    deterministic source with the same signature.
    """

    def __init__(self, randbits: RandomBits | None = None) -> None:
        self._randbits = randbits or secrets.randbits
        self.draws = 0  # raw source values consumed, rejections included

    def sample(self, range_: int) -> int:
        limit = acceptance_limit(range_)
        while True:
            value = self._randbits(SOURCE_BITS)
            self.draws += 1
            if value < limit:
                return value % range_


"""
Index pattern generators bounded by a 128-bit limit.

Each generator produces integers in [0, bound) through ``next()`` and the
iterator protocol.
"""

from typing import Optional

import numpy as np

UINT64_MAX = 2**64 - 1
UINT128_BOUND = 2**128


class PatternGenerator128:
    """
    Base class for index pattern generators.

    Attributes:
        bound: Exclusive upper limit of generated values
    """

    def __init__(self, bound: int):
        if not 0 < bound <= UINT128_BOUND:
            raise ValueError(f"Bound must be in (0, 2**128], got {bound}")
        self.bound = bound

    def next(self) -> int:
        raise NotImplementedError

    def __iter__(self):
        return self

    def __next__(self) -> int:
        return self.next()


class SequenceGenerator128(PatternGenerator128):
    """
    Sequential indices 0, 1, ..., bound - 1.

    With ``autoloop`` the sequence wraps back to 0 forever; otherwise the
    generator is exhausted after bound - 1 and raises StopIteration.
    """

    def __init__(self, bound: int, autoloop: bool = False):
        super().__init__(bound)
        self.autoloop = autoloop
        self._cur = 0

    def next(self) -> int:
        if self._cur is None:
            raise StopIteration
        value = self._cur
        if self._cur == self.bound - 1:
            self._cur = 0 if self.autoloop else None
        else:
            self._cur += 1
        return value

    def reset(self):
        """Restart the sequence from 0."""
        self._cur = 0


class RandomGenerator128(PatternGenerator128):
    """
    Uniformly distributed indices in [0, bound).

    Bounds above 2**64 compose a high and a low 64-bit word and redraw when
    the combined value falls outside the bound.
    """

    def __init__(self, bound: int, seed: Optional[int] = None):
        super().__init__(bound)
        self.use_two_generators = bound > UINT64_MAX + 1
        self._rng = np.random.default_rng(seed)
        self._high_max = (bound - 1) >> 64

    def _draw_word(self, high: int) -> int:
        return int(self._rng.integers(0, high, endpoint=True, dtype=np.uint64))

    def next(self) -> int:
        if not self.use_two_generators:
            return self._draw_word(self.bound - 1)

        while True:
            value = (self._draw_word(self._high_max) << 64) | self._draw_word(UINT64_MAX)
            if value < self.bound:
                return value

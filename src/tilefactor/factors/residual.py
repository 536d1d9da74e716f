"""
Boundary-aware factorization with residual (edge) tiles.

Exact factorizations only exist when a dimension divides evenly across the
tiling levels. ResidualFactors relaxes this: each level i carries a tile
count f_i and a residual r_i in [1, f_i], the number of iterations actually
executed at that level on the boundary. A (factors, residuals) pair covers n
exactly when its mixed-radix value equals n - 1:

    V = sum_i (r_i - 1) * prod_{m < i} f_m        (innermost level first)

Levels mapped onto a fixed hardware resource ("spatial" levels) have their
tile count capped by the resource width and choose their residual freely;
every other level runs to completion (r_i = f_i).

Positions passed in and returned are ordered outermost level first.

Example:
    >>> rf = ResidualFactors(10, 2, spatial_bounds=[4], spatial_indices=[1])
    >>> ((3, 4), (3, 2)) in list(rf)
    True

    10 = two full passes over a 4-wide array plus a boundary pass using 2.
"""

import itertools
import logging
import math
from typing import Iterator, Optional, Sequence

from tilefactor.factors.base import FactorSpace
from tilefactor.factors.divisors import divisor_set
from tilefactor.factors.given import check_positions, splice_given, validate_given

logger = logging.getLogger(__name__)

FactorPair = tuple[tuple[int, ...], tuple[int, ...]]


def reconstruct(factors: Sequence[int], residuals: Sequence[int]) -> int:
    """
    Evaluate the mixed-radix value of a (factors, residuals) pair.

    Both sequences are ordered outermost level first, so the last position
    is the least significant digit with radix factors[-1].

    Returns:
        sum_i (residuals[i] - 1) * prod_{m > i} factors[m]
    """
    value = 0
    for factor, residual in zip(factors, residuals):
        value = value * factor + (residual - 1)
    return value


def _reduced_product(factors: tuple[int, ...]) -> int:
    product = 1
    for f in factors:
        if f != 1:
            product *= f - 1
    return product


class ResidualFactors(FactorSpace):
    """
    All (factors, residuals) pairs whose mixed-radix value reproduces n.

    Attributes:
        n: Dimension size
        order: Tuple length
        spatial_bounds: Capacity of each spatial level
        spatial_indices: Tuple position of each spatial level (parallel to
            spatial_bounds)
        given: Accepted caller-pinned factors (position -> value)
        all_factors: Candidate factor pool, ascending
    """

    def __init__(
        self,
        n: int,
        order: int,
        spatial_bounds: Sequence[int] = (),
        spatial_indices: Sequence[int] = (),
        given: Optional[dict[int, int]] = None,
    ):
        """
        Enumerate boundary-aware decompositions of n.

        Args:
            n: Dimension size
            order: Number of tiling levels
            spatial_bounds: Hardware capacity of each spatial level
            spatial_indices: Position of each spatial level, outermost first
            given: Optional fixed factors keyed by position. Entries that do
                not divide n (together with the previously accepted ones) are
                dropped with a warning.
        """
        super().__init__(n, order)
        self.spatial_bounds = list(spatial_bounds)
        self.spatial_indices = list(spatial_indices)
        self._check_spatial()

        self.given, partial_product = validate_given(n, order, given)

        self.all_factors = sorted(divisor_set(n) | self._spatial_factors())

        if order == 0:
            self._solutions = [((), ())]
            return

        reduced_n = n // partial_product
        free_order = order - len(self.given)

        # Internal positions run innermost first.
        internal_given = {order - 1 - pos: value for pos, value in self.given.items()}
        self._slots = {
            order - 1 - pos: slot for slot, pos in enumerate(self.spatial_indices)
        }

        candidates = self._factor_candidates(reduced_n, free_order)
        residuals = self._residual_candidates(reduced_n, free_order)
        logger.debug(
            "ResidualFactors(n=%d, order=%d): %d factor candidates x %d residual candidates",
            n, order, len(candidates), len(residuals),
        )

        self._solutions = list(self._solve(candidates, residuals, internal_given))

    def _check_spatial(self):
        if len(self.spatial_bounds) != len(self.spatial_indices):
            raise ValueError(
                f"Got {len(self.spatial_bounds)} spatial bounds for "
                f"{len(self.spatial_indices)} spatial indices"
            )
        if len(set(self.spatial_indices)) != len(self.spatial_indices):
            raise ValueError(f"Duplicate spatial indices: {self.spatial_indices}")
        check_positions(self.spatial_indices, self.order, "Spatial")
        for bound in self.spatial_bounds:
            if bound < 1:
                raise ValueError(f"Spatial bound must be positive, got {bound}")

    def _spatial_factors(self) -> set[int]:
        """
        Widen the candidate pool for boundary tiles.

        For every width w a spatial level can use, admit each i < n that
        divides w * n * ceil(n / w). These need not divide n.
        """
        n = self.n
        widths = {w for bound in self.spatial_bounds for w in range(1, bound + 1)}
        extra = set()
        for w in sorted(widths):
            g = w * n * -(-n // w)
            extra.update(i for i in range(1, n) if g % i == 0)
        return extra

    def _factor_candidates(self, n: int, order: int) -> list[tuple[int, ...]]:
        """
        Build factor tuples (innermost first) for the free positions.

        One Cartesian product per rotation: the rotated position draws from
        the large factors (any factor on the first rotation), all others
        from the small ones.
        """
        if order == 0:
            return [()]

        threshold = int(math.sqrt(self.n) + 1.5)
        small = [f for f in self.all_factors if f <= threshold]
        large = [f for f in self.all_factors if f >= threshold]

        candidates = {}
        for rec in range(order):
            pools = [small] * order
            pools[rec] = self.all_factors if rec == 0 else large
            for factors in itertools.product(*pools):
                if factors not in candidates and _reduced_product(factors) <= n:
                    candidates[factors] = None
        return list(candidates)

    def _residual_candidates(self, n: int, order: int) -> list[tuple[int, ...]]:
        """Residual choices for the spatial levels, one entry per bound."""
        ranges = [range(1, bound + 1) for bound in self.spatial_bounds]
        return [r for r in itertools.product(*ranges) if sum(r) <= n + order]

    def _solve(
        self,
        candidates: list[tuple[int, ...]],
        residuals: list[tuple[int, ...]],
        given: dict[int, int],
    ) -> Iterator[FactorPair]:
        for candidate in candidates:
            factors = splice_given(candidate, given)
            if any(factors[pos] > self.spatial_bounds[slot] for pos, slot in self._slots.items()):
                continue

            for choice in residuals:
                rfactors = tuple(
                    choice[self._slots[i]] if i in self._slots else f
                    for i, f in enumerate(factors)
                )
                if any(r > f for f, r in zip(factors, rfactors)):
                    continue

                outer_first = tuple(reversed(factors)), tuple(reversed(rfactors))
                if reconstruct(*outer_first) + 1 == self.n:
                    yield outer_first

    @property
    def cofactors(self) -> list[tuple[int, ...]]:
        """Factor tuples of every retained pair."""
        return [factors for factors, _ in self._solutions]

    @property
    def residuals(self) -> list[tuple[int, ...]]:
        """Residual tuples of every retained pair."""
        return [rfactors for _, rfactors in self._solutions]

    def _format_solution(self, solution) -> str:
        factors, rfactors = solution
        return " * ".join(str(f) for f in factors) + f" (residuals: {', '.join(str(r) for r in rfactors)})"

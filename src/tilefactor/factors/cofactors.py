"""
Ordered multiplicative factorization of a dimension size.

Factors(n, order) holds every ordered tuple of ``order`` positive integers
whose product is n. Order matters: (2, 6) and (6, 2) are distinct tiling
choices.

Example:
    >>> f = Factors(12, 2)
    >>> sorted(f)
    [(1, 12), (2, 6), (3, 4), (4, 3), (6, 2), (12, 1)]
"""

import logging
from typing import Optional

from tilefactor.factors.base import FactorSpace
from tilefactor.factors.divisors import get_divisors
from tilefactor.factors.given import check_positions, splice_given, validate_given

logger = logging.getLogger(__name__)


class Factors(FactorSpace):
    """
    All ordered ``order``-way cofactor sets of n.

    Attributes:
        n: Dimension size
        order: Tuple length
        given: Accepted caller-pinned factors (position -> value)
        all_factors: Divisors of n, ascending
    """

    def __init__(self, n: int, order: int, given: Optional[dict[int, int]] = None):
        """
        Enumerate the ordered factorizations of n.

        Args:
            n: Dimension size to factorize
            order: Number of factors per tuple
            given: Optional fixed factors keyed by tuple position. Entries
                that do not divide n (together with the previously accepted
                ones) are dropped with a warning.
        """
        super().__init__(n, order)
        self.given, partial_product = validate_given(n, order, given)
        self.all_factors = get_divisors(n)

        residual = n // partial_product
        free_order = order - len(self.given)
        if self.given and free_order == 0 and residual != 1:
            # Every position is pinned but the pinned product falls short of n.
            cofactors = []
        else:
            cofactors = self._split(residual, free_order)

        if self.given:
            cofactors = [splice_given(c, self.given) for c in cofactors]
        self._solutions = cofactors

        logger.debug(
            "Factors(n=%d, order=%d, given=%s): %d cofactor sets",
            n, order, self.given, len(self._solutions),
        )

    def _split(self, residual: int, order: int) -> list[tuple[int, ...]]:
        """Return all order-way cofactor sets of residual."""
        if order == 0:
            return [()]
        if order == 1:
            return [(residual,)]

        cofactors = []
        for factor in self.all_factors:
            # Only acceptable if the residue is divisible by it.
            if residual % factor != 0:
                continue
            for sub in self._split(residual // factor, order - 1):
                cofactors.append(sub + (factor,))
        return cofactors

    def prune_max(self, max_factors: dict[int, int]) -> int:
        """
        Remove cofactor sets that exceed a per-position maximum.

        This runs after generation rather than inside it: given factors are
        scattered across positions, so the recursion only sees compressed
        positions.

        Args:
            max_factors: Mapping of position -> largest allowed value

        Returns:
            Number of removed cofactor sets
        """
        check_positions(max_factors, self.order, "Max factor")

        before = len(self._solutions)
        self._solutions = [
            cofactors for cofactors in self._solutions
            if all(cofactors[pos] <= limit for pos, limit in max_factors.items())
        ]
        removed = before - len(self._solutions)
        logger.debug("prune_max(%s) removed %d of %d cofactor sets", max_factors, removed, before)
        return removed

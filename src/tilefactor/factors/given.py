"""
Caller-pinned ("given") factor handling shared by the enumerators.

A given assignment maps a tuple position to a fixed factor value. Entries
that cannot be honoured are downgraded to free positions with a warning
instead of failing the enumeration.
"""

import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


def check_positions(positions: Iterable[int], order: int, what: str) -> None:
    """Raise ValueError if any position falls outside [0, order)."""
    for pos in positions:
        if not 0 <= pos < order:
            raise ValueError(
                f"{what} position {pos} is out of range for order {order}"
            )


def validate_given(
    n: int,
    order: int,
    given: Optional[dict[int, int]],
) -> tuple[dict[int, int], int]:
    """
    Validate a given assignment against n.

    Positions are visited in ascending order while a partial product is
    accumulated. An entry is kept only if n is divisible by its value times
    the partial product so far; rejected entries are logged and dropped.

    Args:
        n: Dimension size being factorized
        order: Decomposition order (final tuple length)
        given: Mapping of position -> fixed factor value

    Returns:
        Tuple of (accepted assignment in ascending position order,
        partial product of the accepted values)
    """
    if not given:
        return {}, 1

    if len(given) > order:
        raise ValueError(
            f"{len(given)} given factors cannot fit in a decomposition of order {order}"
        )
    check_positions(given, order, "Given factor")

    accepted = {}
    partial_product = 1
    for pos in sorted(given):
        factor = given[pos]
        if factor > 0 and n % (factor * partial_product) == 0:
            partial_product *= factor
            accepted[pos] = factor
        else:
            logger.warning(
                "Cannot accept %d as a factor of %d with current partial product %d, "
                "ignoring mapping constraint and setting position %d to a free variable.",
                factor, n, partial_product, pos,
            )
    return accepted, partial_product


def splice_given(factors: tuple[int, ...], given: dict[int, int]) -> tuple[int, ...]:
    """
    Insert given values into a reduced-length tuple.

    Values are inserted in ascending position order, each one pushing later
    entries back, so every given value lands at its declared position of the
    final tuple.
    """
    result = list(factors)
    for pos in sorted(given):
        result.insert(pos, given[pos])
    return tuple(result)

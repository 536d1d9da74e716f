"""
Common state and diagnostic rendering for the factor enumerators.
"""

from typing import Any, Iterator

# Recursion depth and tuple length both equal the order.
MAX_ORDER = 64


class FactorSpace:
    """
    Base class for an eagerly built collection of decompositions of n.

    Subclasses fill ``all_factors`` (the candidate pool) and ``_solutions``
    (the Decomposition Collection) during construction.

    Attributes:
        n: Dimension size being decomposed
        order: Number of tiling levels (tuple length)
        all_factors: Candidate factors, ascending
    """

    def __init__(self, n: int, order: int):
        if n < 0:
            raise ValueError(f"Dimension size must be non-negative, got {n}")
        if not 0 <= order <= MAX_ORDER:
            raise ValueError(f"Order must be in [0, {MAX_ORDER}], got {order}")
        self.n = n
        self.order = order
        self.all_factors: list[int] = []
        self._solutions: list = []

    def __getitem__(self, index: int) -> Any:
        return self._solutions[index]

    def __len__(self) -> int:
        return len(self._solutions)

    def __iter__(self) -> Iterator:
        return iter(self._solutions)

    def size(self) -> int:
        """Number of retained decompositions."""
        return len(self._solutions)

    def format_all_factors(self) -> str:
        """Render the candidate factor pool."""
        factors = ", ".join(str(f) for f in self.all_factors)
        return f"All factors of {self.n}: {factors}"

    def format_cofactors(self) -> str:
        """Render one line per retained decomposition."""
        lines = [f"Co-factors of {self.n} are: "]
        for solution in self._solutions:
            lines.append(f"    {self.n} = {self._format_solution(solution)}")
        return "\n".join(lines)

    def _format_solution(self, solution) -> str:
        return " * ".join(str(f) for f in solution)

    def print_all_factors(self):
        print(self.format_all_factors())

    def print_cofactors(self):
        print(self.format_cofactors())

    def print(self):
        """Print the factor pool followed by every decomposition."""
        self.print_all_factors()
        self.print_cofactors()

    def __str__(self) -> str:
        return self.format_cofactors()

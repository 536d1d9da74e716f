"""
Numeric helper functions for tilefactor.
"""

import math
import time


def isqrt(x: int) -> int:
    """Floor of the square root of a non-negative integer."""
    if x < 0:
        raise ValueError(f"isqrt() of negative number {x}")
    return math.isqrt(x)


def smallest_factor(n: int) -> tuple[int, int]:
    """
    Get the smallest factor of n and the quotient after dividing by it.

    Args:
        n: Number to split

    Returns:
        Tuple of (factor, residue). Primes (and n < 4) return (n, 1).
    """
    for i in range(2, isqrt(n) + 1):
        if n % i == 0:
            return i, n // i
    return n, 1


def get_prime_factors(n: int) -> list[int]:
    """
    Get prime factorization of a number.

    Args:
        n: Number to factorize

    Returns:
        List of prime factors (with repetition), smallest first
    """
    factors = []
    residue = n
    while residue > 1:
        factor, residue = smallest_factor(residue)
        factors.append(factor)
    return factors


def get_tiling(num_elems: int) -> tuple[int, int]:
    """
    Get a close-to-square (height, width) layout holding num_elems nodes.

    Prime factors are dealt alternately to height and width, and the result
    is ordered so that height <= width.
    """
    height = 1
    width = 1
    for i, factor in enumerate(get_prime_factors(num_elems)):
        if i % 2 == 0:
            height *= factor
        else:
            width *= factor

    if height > width:
        height, width = width, height
    return height, width


def linear_interpolate(x: float, x0: float, x1: float, q0: float, q1: float) -> float:
    """
    Linearly interpolate (or extrapolate) q at x from (x0, q0) and (x1, q1).

    A degenerate interval (x0 == x1) has zero slope and returns q0.
    """
    slope = 0.0 if x0 == x1 else (q1 - q0) / float(x1 - x0)
    return q0 + slope * (x - x0)


def bilinear_interpolate(
    x: float,
    y: float,
    x0: float,
    x1: float,
    y0: float,
    y1: float,
    q00: float,
    q01: float,
    q10: float,
    q11: float,
) -> float:
    """
    Bilinear interpolation over the rectangle [x0, x1] x [y0, y1].

    Args:
        x, y: Query point
        x0, x1: Rectangle bounds along x
        y0, y1: Rectangle bounds along y
        q00, q01, q10, q11: Values at (x0, y0), (x0, y1), (x1, y0), (x1, y1)

    Returns:
        Interpolated value
    """
    # Along x first, then along y.
    qx0 = linear_interpolate(x, x0, x1, q00, q10)
    qx1 = linear_interpolate(x, x0, x1, q01, q11)
    return linear_interpolate(y, y0, y1, qx0, qx1)


def format_number(n: float, precision: int = 2) -> str:
    """
    Format a number for display.

    Integers are printed with thousands separators; floats use scientific
    notation for very large/small magnitudes.
    """
    if isinstance(n, int):
        return f"{n:,}"
    if abs(n) >= 1e6 or (abs(n) < 1e-3 and n != 0):
        return f"{n:.{precision}e}"
    return f"{n:.{precision}f}"


class Timer:
    """Simple timer for profiling."""

    def __init__(self):
        self.times = {}
        self._starts = {}

    def start(self, name: str):
        """Start timing a section."""
        self._starts[name] = time.perf_counter()

    def stop(self, name: str):
        """Stop timing a section."""
        if name in self._starts:
            elapsed = time.perf_counter() - self._starts.pop(name)
            self.times[name] = self.times.get(name, 0.0) + elapsed

    def report(self) -> str:
        """Generate timing report."""
        lines = ["Timing Report:"]
        for name, elapsed in sorted(self.times.items(), key=lambda x: -x[1]):
            lines.append(f"  {name}: {elapsed:.3f}s")
        return "\n".join(lines)

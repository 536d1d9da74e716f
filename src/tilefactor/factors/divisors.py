"""
Divisor enumeration by trial division.
"""

from tilefactor.utils import isqrt


def get_divisors(n: int) -> list[int]:
    """
    Get all divisors of n in ascending order.

    Scans 1..isqrt(n) and records both i and n // i for every hit, so the
    cost is O(sqrt(n)). n = 0 has no scanned candidates and yields [].

    Args:
        n: Non-negative integer to factorize

    Returns:
        Sorted list of divisors
    """
    if n < 0:
        raise ValueError(f"Cannot compute divisors of negative number {n}")

    divisors = []
    large_divisors = []
    for i in range(1, isqrt(n) + 1):
        if n % i == 0:
            divisors.append(i)
            if i * i != n:
                large_divisors.append(n // i)
    divisors.extend(reversed(large_divisors))
    return divisors


def divisor_set(n: int) -> set[int]:
    """Get all divisors of n as a set."""
    return set(get_divisors(n))


def divisor_count(n: int) -> int:
    """Number-theoretic divisor count d(n)."""
    return len(get_divisors(n))

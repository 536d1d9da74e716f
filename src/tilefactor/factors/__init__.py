"""
Factor enumeration for loop tiling.
"""

from tilefactor.factors.base import MAX_ORDER, FactorSpace
from tilefactor.factors.divisors import get_divisors, divisor_set, divisor_count
from tilefactor.factors.cofactors import Factors
from tilefactor.factors.residual import ResidualFactors, reconstruct

__all__ = [
    "MAX_ORDER",
    "FactorSpace",
    "Factors",
    "ResidualFactors",
    "reconstruct",
    "get_divisors",
    "divisor_set",
    "divisor_count",
]

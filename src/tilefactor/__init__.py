"""
tilefactor - Loop tiling factor enumeration for dataflow mappers.

This package enumerates the ways a problem dimension can be split across
tiling levels, exactly (Factors) or with boundary tiles (ResidualFactors).

Main components:
- Factors: Ordered multiplicative factorizations of a dimension size
- ResidualFactors: Factorizations with per-level residual (edge) tiles
- WorkloadConfig: Convolution workload shape
- IndexFactorization: Per-dimension factorizations of a workload

Quick Start:
    from tilefactor import Factors, ResidualFactors

    factors = Factors(56, 3, given={0: 2})
    factors.prune_max({2: 8})
    print(factors)

    residual = ResidualFactors(10, 2, spatial_bounds=[4], spatial_indices=[1])
    for tile_counts, residuals in residual:
        print(tile_counts, residuals)
"""

__version__ = "0.1.0"

from tilefactor.factors import Factors, ResidualFactors, get_divisors, reconstruct
from tilefactor.workload import WorkloadConfig, PerDataSpace, PerProblemDimension
from tilefactor.arch import PEArray, PhyDim2
from tilefactor.mapspace import IndexFactorization, ResidualIndexFactorization
from tilefactor.pattern import SequenceGenerator128, RandomGenerator128

__all__ = [
    # Main classes
    "Factors",
    "ResidualFactors",
    "WorkloadConfig",
    "IndexFactorization",
    "ResidualIndexFactorization",

    # Helper classes
    "PerDataSpace",
    "PerProblemDimension",
    "PEArray",
    "PhyDim2",
    "SequenceGenerator128",
    "RandomGenerator128",

    # Functions
    "get_divisors",
    "reconstruct",
]

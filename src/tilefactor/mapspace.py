"""
Per-dimension factorization of a workload across tiling levels.

A mapper picks one decomposition per problem dimension; the mapspace is the
Cartesian product of those per-dimension choices. The classes here only
build and count the choices, they do not rank them.
"""

import logging
import math
from typing import Optional

from tilefactor.arch import PEArray
from tilefactor.factors import Factors, ResidualFactors
from tilefactor.workload import Dimension, WorkloadConfig

logger = logging.getLogger(__name__)


class IndexFactorization:
    """
    Exact factorizations of every workload dimension.

    Attributes:
        workload: Workload whose bounds are factorized
        num_levels: Tiling levels per dimension
        factors: Factors instance per dimension
    """

    def __init__(
        self,
        workload: WorkloadConfig,
        num_levels: int,
        given: Optional[dict[Dimension, dict[int, int]]] = None,
        max_factors: Optional[dict[Dimension, dict[int, int]]] = None,
    ):
        """
        Args:
            workload: Workload definition
            num_levels: Number of tiling levels
            given: Per-dimension fixed factors (position -> value)
            max_factors: Per-dimension maximum factor (position -> limit)
        """
        self.workload = workload
        self.num_levels = num_levels
        given = given or {}
        max_factors = max_factors or {}

        self.factors: dict[Dimension, Factors] = {}
        for dim in Dimension:
            factors = Factors(workload.bounds.get(dim, 1), num_levels, given.get(dim))
            if dim in max_factors:
                factors.prune_max(max_factors[dim])
            self.factors[dim] = factors
            logger.debug("%s: %d factorizations", dim.name, len(factors))

    def __getitem__(self, dim: Dimension):
        return self.factors[dim]

    def counts(self) -> dict[Dimension, int]:
        """Number of choices per dimension."""
        return {dim: len(f) for dim, f in self.factors.items()}

    def size(self) -> int:
        """Total number of index factorizations (product over dimensions)."""
        return math.prod(self.counts().values())

    def to_dict(self) -> dict:
        return {
            dim.name: [list(choice) for choice in f]
            for dim, f in self.factors.items()
        }

    def pretty_print(self) -> str:
        """Generate human-readable summary."""
        lines = [f"Index factorization: {self.workload.name} ({self.num_levels} levels)"]
        lines.append("=" * 50)
        for dim, f in self.factors.items():
            lines.append(f"  {dim.name}={f.n}: {len(f)} choices")
        lines.append(f"Total: {self.size():,}")
        return "\n".join(lines)


class ResidualIndexFactorization(IndexFactorization):
    """
    Boundary-aware factorizations of every workload dimension.

    Dimensions listed in ``spatial_dims`` are mapped onto an axis of the PE
    array at tiling level ``spatial_level``; that axis width bounds their
    factor there.
    """

    def __init__(
        self,
        workload: WorkloadConfig,
        num_levels: int,
        pe_array: PEArray,
        spatial_level: int,
        spatial_dims: dict[Dimension, int],
        given: Optional[dict[Dimension, dict[int, int]]] = None,
    ):
        """
        Args:
            workload: Workload definition
            num_levels: Number of tiling levels
            pe_array: PE array providing the spatial bounds
            spatial_level: Tiling level (outermost = 0) mapped onto the array
            spatial_dims: Dimension -> array axis (0 = X/width, 1 = Y/height)
            given: Per-dimension fixed factors (position -> value)
        """
        self.workload = workload
        self.num_levels = num_levels
        self.pe_array = pe_array
        given = given or {}
        axes = pe_array.spatial_bounds
        for dim, axis in spatial_dims.items():
            if not 0 <= axis < len(axes):
                raise ValueError(f"{dim.name} mapped onto unknown PE array axis {axis}")

        self.factors: dict[Dimension, ResidualFactors] = {}
        for dim in Dimension:
            if dim in spatial_dims:
                bounds, indices = [axes[spatial_dims[dim]]], [spatial_level]
            else:
                bounds, indices = [], []
            factors = ResidualFactors(
                workload.bounds.get(dim, 1), num_levels, bounds, indices, given.get(dim)
            )
            self.factors[dim] = factors
            logger.debug("%s: %d residual factorizations", dim.name, len(factors))

    def to_dict(self) -> dict:
        return {
            dim.name: [
                {"factors": list(factors), "residuals": list(rfactors)}
                for factors, rfactors in f
            ]
            for dim, f in self.factors.items()
        }

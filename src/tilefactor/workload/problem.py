"""
Convolution problem shape definitions.

7 dimensions for standard CNN conv2d:
- R: Kernel width
- S: Kernel height
- P: Output width
- Q: Output height
- C: Input channels
- K: Output channels (filters)
- N: Batch size

and 3 data spaces: Weight, Input, Output.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar

import numpy as np
import yaml

T = TypeVar("T")


class DataType(IntEnum):
    Weight = 0
    Input = 1
    Output = 2


class WeightDimension(IntEnum):
    R = 0
    S = 1
    C = 2
    K = 3


class InputDimension(IntEnum):
    W = 0
    H = 1
    C = 2
    N = 3


class OutputDimension(IntEnum):
    P = 0
    Q = 1
    K = 2
    N = 3


class Dimension(IntEnum):
    R = 0
    S = 1
    P = 2
    Q = 3
    C = 4
    K = 5
    N = 6


DATA_TYPE_NAME = {d: d.name for d in DataType}
DATA_TYPE_ID = {d.name: d for d in DataType}

DIMENSION_NAME = {d: d.name for d in Dimension}
DIMENSION_ID = {d.name: d for d in Dimension}


def is_read_write_data_type(data_type: DataType) -> bool:
    """Only outputs are both read and written (partial sums)."""
    return data_type == DataType.Output


class _IndexedArray(Generic[T]):
    """
    Fixed-length array indexed by position or by an IntEnum member.

    Subclasses set ``_keys`` to the enum whose members name the slots.
    """

    _keys: type[IntEnum]

    def __init__(self, values: Optional[Iterable[T]] = None, fill: Any = None):
        num = len(self._keys)
        if values is None:
            self._values = [fill] * num
        else:
            self._values = list(values)
            if len(self._values) != num:
                raise ValueError(
                    f"{type(self).__name__} needs {num} values, got {len(self._values)}"
                )

    def _index(self, key) -> int:
        index = int(key)
        if not 0 <= index < len(self._keys):
            raise IndexError(f"{type(self).__name__} index {key} out of range")
        return index

    def __getitem__(self, key) -> T:
        return self._values[self._index(key)]

    def __setitem__(self, key, value: T):
        self._values[self._index(key)] = value

    def at(self, key) -> T:
        return self[key]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[T]:
        return iter(self._values)

    def __eq__(self, other) -> bool:
        if isinstance(other, _IndexedArray):
            return type(self) is type(other) and self._values == other._values
        return NotImplemented

    def fill(self, value: T):
        self._values = [value] * len(self._keys)

    def clear(self):
        self.fill(None)

    def max(self) -> T:
        return max(self._values)

    def to_list(self) -> list[T]:
        return list(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values})"


class PerDataSpace(_IndexedArray[T]):
    """One value per data space (Weight, Input, Output)."""

    _keys = DataType

    def __str__(self) -> str:
        return "\n".join(f"{DataType(i).name:>10}: {v}" for i, v in enumerate(self._values))


class PerProblemDimension(_IndexedArray[T]):
    """One value per problem dimension (R, S, P, Q, C, K, N)."""

    _keys = Dimension

    def __str__(self) -> str:
        return "\n".join(f"{Dimension(i).name}: {v}" for i, v in enumerate(self._values))


Bounds = dict[Dimension, int]
Densities = dict[DataType, float]


@dataclass
class WorkloadConfig:
    """
    Convolution workload shape.

    Attributes:
        bounds: Loop bound per dimension
        densities: Non-zero density per data space (1.0 = dense)
        stride: (width_stride, height_stride)
        dilation: (width_dilation, height_dilation)
        name: Identifier for this workload
    """

    bounds: Bounds = field(default_factory=dict)
    densities: Densities = field(default_factory=dict)
    stride: tuple[int, int] = (1, 1)
    dilation: tuple[int, int] = (1, 1)
    name: str = "workload"

    def get_bound(self, dim: Dimension) -> int:
        return self.bounds[dim]

    def get_density(self, data_type: DataType) -> float:
        return self.densities[data_type]

    def set_bounds(self, bounds: Bounds):
        self.bounds = dict(bounds)

    def set_densities(self, densities: Densities):
        self.densities = dict(densities)

    def dimension_sizes(self) -> PerProblemDimension[int]:
        """Bounds as a PerProblemDimension; missing dimensions default to 1."""
        return PerProblemDimension(self.bounds.get(d, 1) for d in Dimension)

    @property
    def macs(self) -> int:
        """Total MACs = R × S × P × Q × C × K × N."""
        return int(np.prod(self.dimension_sizes().to_list(), dtype=np.int64))

    @property
    def input_size(self) -> dict[str, int]:
        """Input tensor width and height implied by stride and dilation."""
        dims = self.dimension_sizes()
        W_in = self.stride[0] * max(dims[Dimension.P] - 1, 0) + self.dilation[0] * max(dims[Dimension.R] - 1, 0) + 1
        H_in = self.stride[1] * max(dims[Dimension.Q] - 1, 0) + self.dilation[1] * max(dims[Dimension.S] - 1, 0) + 1
        return {'W': W_in, 'H': H_in}

    @classmethod
    def from_dict(cls, config: dict, name: str = "workload") -> "WorkloadConfig":
        """
        Create WorkloadConfig from a dictionary.

        Args:
            config: Dictionary with problem dimensions, optionally nested
                under a 'problem' key
            name: Identifier for this workload

        Returns:
            WorkloadConfig instance
        """
        prob = config.get('problem', config)
        bounds = {d: int(prob.get(d.name, 1)) for d in Dimension}
        density_cfg = prob.get('densities', {}) or {}
        densities = {t: float(density_cfg.get(t.name, 1.0)) for t in DataType}
        return cls(
            bounds=bounds,
            densities=densities,
            stride=(prob.get('Wstride', 1), prob.get('Hstride', 1)),
            dilation=(prob.get('Wdilation', 1), prob.get('Hdilation', 1)),
            name=prob.get('name', name),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "WorkloadConfig":
        """
        Create WorkloadConfig from a YAML file.

        Args:
            yaml_path: Path to YAML file

        Returns:
            WorkloadConfig instance
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Workload file not found: {path}")
        with path.open("r", encoding="utf-8") as fh:
            config = yaml.safe_load(fh) or {}
        return cls.from_dict(config, name=path.stem)

    def to_dict(self) -> dict:
        """Convert workload to dictionary."""
        problem = {d.name: v for d, v in sorted(self.bounds.items())}
        problem.update({
            'Wstride': self.stride[0],
            'Hstride': self.stride[1],
            'Wdilation': self.dilation[0],
            'Hdilation': self.dilation[1],
            'densities': {t.name: v for t, v in sorted(self.densities.items())},
        })
        return {'problem': problem}

    def summary(self) -> str:
        """Return a summary string."""
        dims = ", ".join(f"{d.name}={v}" for d, v in sorted(self.bounds.items()))
        size = self.input_size
        lines = [
            f"Workload: {self.name}",
            f"  Dimensions: {dims}",
            f"  Input size: H={size['H']}, W={size['W']}",
            f"  Stride: {self.stride}, Dilation: {self.dilation}",
            f"  MACs: {self.macs:,}",
        ]
        return "\n".join(lines)


def get_max_working_set_sizes(dimension_sizes: PerProblemDimension[int]) -> PerDataSpace[int]:
    """
    Largest footprint of each data space for the given dimension sizes.

    Inputs use unit stride and dilation: W = P + R - 1, H = Q + S - 1.
    """
    R, S, P, Q, C, K, N = (dimension_sizes[d] for d in Dimension)
    sizes = PerDataSpace(fill=0)
    sizes[DataType.Weight] = R * S * C * K
    sizes[DataType.Input] = (P + R - 1) * (Q + S - 1) * C * N
    sizes[DataType.Output] = P * Q * K * N
    return sizes

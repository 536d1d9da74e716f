"""
PE array definition.

The PE array is the fixed spatial resource a tiling level can be mapped
onto; its width and height bound the spatial factors of a decomposition.
"""

from dataclasses import dataclass
from pathlib import Path

import yaml


@dataclass
class PhyDim2:
    """
    2D physical dimension (height, width).
    """
    h: int
    w: int

    def size(self) -> int:
        """Total number of elements (h × w)."""
        return self.h * self.w

    def __iter__(self):
        return iter((self.h, self.w))

    def __repr__(self) -> str:
        return f"PhyDim2(h={self.h}, w={self.w})"


@dataclass
class PEArray:
    """
    Processing Element Array configuration.

    Attributes:
        dim: Array dimensions (height, width)
        name: Identifier for this array
    """
    dim: PhyDim2
    name: str = "pe_array"

    def __post_init__(self):
        if self.dim.h < 1 or self.dim.w < 1:
            raise ValueError(f"PE array dimensions must be positive, got {self.dim}")

    @property
    def num_pes(self) -> int:
        """Total number of PEs in the array."""
        return self.dim.size()

    @property
    def spatial_bounds(self) -> list[int]:
        """Capacity of the X (width) and Y (height) spatial axes."""
        return [self.dim.w, self.dim.h]

    @classmethod
    def from_dict(cls, config: dict) -> "PEArray":
        """
        Create PEArray from a dictionary.

        Accepts either a bare ``{dim_h, dim_w}`` mapping or one nested under
        ``architecture: pe_array:``.
        """
        if "architecture" in config:
            config = config["architecture"]
        pe_cfg = config.get("pe_array", config)
        return cls(
            dim=PhyDim2(h=int(pe_cfg.get("dim_h", 16)), w=int(pe_cfg.get("dim_w", 16))),
            name=pe_cfg.get("name", "pe_array"),
        )

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "PEArray":
        """
        Create PEArray from a YAML configuration file.

        Args:
            config_path: Path to YAML config file

        Returns:
            PEArray instance
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open("r", encoding="utf-8") as fh:
            config = yaml.safe_load(fh) or {}
        return cls.from_dict(config)

    def __repr__(self) -> str:
        return f"PEArray(dim={self.dim}, num_pes={self.num_pes})"


def default_pe_array() -> PEArray:
    """Create a default PE array configuration (16x16 = 256 PEs)."""
    return PEArray(dim=PhyDim2(16, 16))

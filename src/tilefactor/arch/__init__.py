"""
Architecture module for tilefactor.
"""

from tilefactor.arch.pe_array import PEArray, PhyDim2, default_pe_array

__all__ = [
    "PEArray",
    "PhyDim2",
    "default_pe_array",
]

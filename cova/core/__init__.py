"""
Core module: error hierarchy and cell handle registry.
"""

from cova.core.errors import CovaError, ConstructionError, DimensionMismatch, CellLookupError
from cova.core.registry import CellHandle, CellRegistry

__all__ = [
    "CovaError",
    "ConstructionError",
    "DimensionMismatch",
    "CellLookupError",
    "CellHandle",
    "CellRegistry",
]

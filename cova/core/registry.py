"""
cova/core/registry.py

Handle registry for the cells of a complex.

Each dimension owns a disjoint integer space: the i-th cell inserted in
dimension d gets handle (d, i). Handles are never reused or reassigned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, NamedTuple, Tuple

from cova.core.errors import CellLookupError


class CellHandle(NamedTuple):
    """Stable per-dimension handle of a cell inside one complex."""
    dimension: int
    index: int


@dataclass
class CellRegistry:
    """
    Registry mapping cells to handles and back.

    Attributes:
        cell_to_index: dimension -> (cell -> index)
        index_to_cell: dimension -> cells in insertion order
    """
    cell_to_index: Dict[int, Dict[Hashable, int]] = field(default_factory=dict)
    index_to_cell: Dict[int, List[Any]] = field(default_factory=dict)

    def register(self, cell: Any) -> CellHandle:
        """
        Register a cell, returning its handle.

        Registering a cell that is already present returns the existing handle.
        """
        d = cell.dimension
        slot = self.cell_to_index.setdefault(d, {})
        idx = slot.get(cell)
        if idx is None:
            idx = len(self.index_to_cell.setdefault(d, []))
            slot[cell] = idx
            self.index_to_cell[d].append(cell)
        return CellHandle(d, idx)

    def __contains__(self, cell: Any) -> bool:
        return cell in self.cell_to_index.get(getattr(cell, "dimension", None), ())

    def has_handle(self, handle: Tuple[int, int]) -> bool:
        d, idx = handle
        return 0 <= idx < len(self.index_to_cell.get(d, ()))

    def handle(self, cell: Any) -> CellHandle:
        """Get the handle of a registered cell."""
        try:
            return CellHandle(cell.dimension, self.cell_to_index[cell.dimension][cell])
        except (KeyError, AttributeError):
            raise CellLookupError(f"cell {cell!r} is not in the complex") from None

    def cell(self, handle: Tuple[int, int]) -> Any:
        """Get the cell behind a handle."""
        if not self.has_handle(handle):
            raise CellLookupError(f"no cell with handle {tuple(handle)}")
        d, idx = handle
        return self.index_to_cell[d][idx]

    def count(self, dimension: int) -> int:
        """Number of registered cells of a dimension."""
        return len(self.index_to_cell.get(dimension, ()))

    def dimensions(self) -> Tuple[int, ...]:
        """Dimensions holding at least one cell, ascending."""
        return tuple(sorted(d for d, cells in self.index_to_cell.items() if cells))

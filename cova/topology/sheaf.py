"""
cova/topology/sheaf.py

Cellular sheaves on a complex.

A sheaf F assigns:
- a stalk F(σ) = field^k to each cell σ
- a restriction map F(σ ≤ τ) : F(σ) -> F(τ) for a face σ of τ,
  stored as a (dim F(τ), dim F(σ)) matrix keyed by (σ, τ)

Partial sheaves are allowed: pairs without a map are simply absent. Stalk
dimensions are read off the maps (or given explicitly); a cell that no map
or explicit entry mentions has the zero stalk.

Key operations:
  - coboundary(d): δ_d from d-cochains to (d+1)-cochains, block (τ, σ) equal
    to [σ : τ] · F(σ ≤ τ) with the incidence sign of the boundary operator
  - is_global_section: every restriction maps the parent value onto the
    child value
  - cohomology(d): dim ker δ_d - rank δ_{d-1}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from cova.algebra.field import Field, RealField, real_field
from cova.algebra.linalg import kernel_basis, rank
from cova.config import CONFIG
from cova.core.errors import CellLookupError, ConstructionError, DimensionMismatch
from cova.topology.cell import Cell

logger = logging.getLogger(__name__)


class Sheaf:
    """
    Sheaf of field vector spaces over a complex.

    Args:
        complex: Complex carrying the sheaf
        restrictions: (parent, child) -> matrix, parent a proper face of child
        stalk_dimensions: Optional explicit stalk sizes per cell
        field: Coefficient field; defaults to the reals with the linalg
            zero tolerance
        tolerance: Absolute tolerance of the section check over the reals.
            It never affects ranks or cohomology.
    """

    def __init__(
        self,
        complex: Any,
        restrictions: Mapping[Tuple[Cell, Cell], Any],
        stalk_dimensions: Optional[Mapping[Cell, int]] = None,
        field: Optional[Field] = None,
        tolerance: Optional[float] = None,
    ):
        if tolerance is None:
            tolerance = CONFIG["sheaf"]["section_tolerance"]
        self.section_tolerance = float(tolerance)
        self.complex = complex
        self.field = field if field is not None else real_field()
        self._stalks: Dict[Cell, int] = {}
        self._restrictions: Dict[Tuple[Cell, Cell], np.ndarray] = {}

        for cell, k in (stalk_dimensions or {}).items():
            self._require(cell)
            if int(k) < 0:
                raise ConstructionError(f"stalk dimension of {cell!r} must be non-negative, got {k}")
            self._stalks[cell] = int(k)

        faces = complex.face_lattice() if restrictions else None
        for (parent, child), matrix in restrictions.items():
            self._require(parent)
            self._require(child)
            if not faces.lt(parent, child):
                raise ConstructionError(f"{parent!r} is not a face of {child!r}")
            R = self.field.asarray(matrix)
            if R.ndim != 2:
                raise ConstructionError(
                    f"restriction {parent!r} -> {child!r} must be a matrix, got shape {R.shape}"
                )
            self._claim(child, R.shape[0], parent, child)
            self._claim(parent, R.shape[1], parent, child)
            self._restrictions[(parent, child)] = R

    def _require(self, cell: Cell) -> None:
        if not self.complex.contains(cell):
            raise CellLookupError(f"cell {cell!r} is not in the complex")

    def _claim(self, cell: Cell, k: int, parent: Cell, child: Cell) -> None:
        known = self._stalks.get(cell)
        if known is not None and known != k:
            raise ConstructionError(
                f"restriction {parent!r} -> {child!r} implies stalk dimension {k} "
                f"for {cell!r}, but it is {known}"
            )
        self._stalks[cell] = k

    # ------------------------------------------------------------------

    def stalk_dimension(self, cell: Cell) -> int:
        return self._stalks.get(cell, 0)

    def restriction(self, parent: Cell, child: Cell) -> Optional[np.ndarray]:
        """Restriction matrix for (parent, child), or None if absent."""
        return self._restrictions.get((parent, child))

    @property
    def restrictions(self) -> Dict[Tuple[Cell, Cell], np.ndarray]:
        return dict(self._restrictions)

    def _offsets(self, dimension: int) -> List[int]:
        offs = [0]
        for cell in self.complex.elements(dimension):
            offs.append(offs[-1] + self.stalk_dimension(cell))
        return offs

    def coboundary(self, dimension: int) -> np.ndarray:
        """
        δ_d as a block matrix.

        Columns follow the stalks of the d-cells, rows the stalks of the
        (d+1)-cells, both in handle order. Absent restrictions give zero blocks.
        """
        col_off = self._offsets(dimension)
        row_off = self._offsets(dimension + 1)
        delta = self.field.zeros((row_off[-1], col_off[-1]))

        for h in self.complex.cells(dimension + 1):
            child = self.complex.cell(h)
            for fh, sign in self.complex.boundary(h):
                R = self._restrictions.get((self.complex.cell(fh), child))
                if R is None:
                    continue
                block = self.field.mul(self.field.scalar(sign), R)
                delta[row_off[h.index]:row_off[h.index + 1], col_off[fh.index]:col_off[fh.index + 1]] = block

        return delta

    def _vector(self, assignment: Mapping[Cell, Any], cell: Cell, expected: int) -> np.ndarray:
        x = self.field.asarray(assignment[cell])
        if x.ndim != 1 or x.shape[0] != expected:
            raise DimensionMismatch(
                f"value for {cell!r} has shape {x.shape}, stalk dimension is {expected}"
            )
        return x

    def _agrees(self, image: np.ndarray, value: np.ndarray) -> bool:
        if isinstance(self.field, RealField):
            return bool(np.allclose(image, value, rtol=0.0, atol=self.section_tolerance))
        return self.field.allclose(image, value)

    def is_global_section(self, assignment: Mapping[Cell, Any]) -> bool:
        """
        True iff R · x[parent] == x[child] for every restriction R.

        Equality is exact for finite fields and rationals, and within
        `section_tolerance` for the reals.

        Raises:
            CellLookupError: a cell referenced by a restriction has no value
            DimensionMismatch: a value's length differs from its stalk dimension
        """
        for parent, child in self._restrictions:
            for cell in (parent, child):
                if cell not in assignment:
                    raise CellLookupError(f"no stalk value assigned to {cell!r}")

        for (parent, child), R in self._restrictions.items():
            xp = self._vector(assignment, parent, R.shape[1])
            xc = self._vector(assignment, child, R.shape[0])
            if not self._agrees(self.field.matmul(R, xp), xc):
                logger.debug("section violates restriction %r -> %r", parent, child)
                return False
        return True

    def cochain(self, assignment: Mapping[Cell, Any], dimension: int) -> np.ndarray:
        """Stack the values of the d-cells in coboundary column order."""
        parts = []
        for cell in self.complex.elements(dimension):
            k = self.stalk_dimension(cell)
            if k == 0:
                continue
            if cell not in assignment:
                raise CellLookupError(f"no stalk value assigned to {cell!r}")
            parts.append(self._vector(assignment, cell, k))
        if not parts:
            return self.field.zeros((0,))
        return np.concatenate(parts)

    def cocycle_basis(self, dimension: int) -> np.ndarray:
        """Basis of ker δ_d as columns."""
        return kernel_basis(self.coboundary(dimension), self.field)

    def cohomology(self, dimension: int) -> int:
        """dim H^d = dim ker δ_d - rank δ_{d-1}."""
        delta = self.coboundary(dimension)
        kernel_dim = delta.shape[1] - rank(delta, self.field)
        return kernel_dim - rank(self.coboundary(dimension - 1), self.field)

    def __repr__(self) -> str:
        return f"Sheaf(restrictions={len(self._restrictions)}, field={self.field.name})"

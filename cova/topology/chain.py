"""
cova/topology/chain.py

Chains: field-weighted formal sums of same-dimension cells of a complex.

Chains are immutable values. Coefficients are normalized into the field
and zero coefficients are dropped, so two chains are equal exactly when
their nonzero coefficients agree.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Tuple

import numpy as np

from cova.algebra.field import Field, gf2
from cova.core.errors import CellLookupError, DimensionMismatch
from cova.topology.cell import Cell


class Chain:
    """
    A d-chain on a complex.

    Attributes:
        complex: Complex the cells belong to
        dimension: d (a 0-chain's boundary is the empty chain of dimension -1)
        field: Coefficient field
    """

    def __init__(
        self,
        complex: Any,
        dimension: int,
        coefficients: Optional[Mapping[Cell, Any]] = None,
        field: Optional[Field] = None,
    ):
        self.complex = complex
        self.dimension = dimension
        self.field = field if field is not None else gf2()
        self._coeffs: Dict[Cell, Any] = {}
        for cell, value in (coefficients or {}).items():
            if cell.dimension != dimension:
                raise DimensionMismatch(
                    f"cell {cell!r} has dimension {cell.dimension}, chain has dimension {dimension}"
                )
            if not complex.contains(cell):
                raise CellLookupError(f"cell {cell!r} is not in the complex")
            c = self.field.scalar(value)
            if not self.field.is_zero(c):
                self._coeffs[cell] = c

    @classmethod
    def from_cell(cls, complex: Any, cell: Cell, coefficient: Any = None, field: Optional[Field] = None) -> "Chain":
        """Chain with a single cell (coefficient defaults to the field's one)."""
        field = field if field is not None else gf2()
        if coefficient is None:
            coefficient = field.one
        return cls(complex, cell.dimension, {cell: coefficient}, field)

    @classmethod
    def zero(cls, complex: Any, dimension: int, field: Optional[Field] = None) -> "Chain":
        return cls(complex, dimension, {}, field)

    @classmethod
    def from_vector(cls, complex: Any, dimension: int, vector: Sequence[Any], field: Optional[Field] = None) -> "Chain":
        """Chain whose i-th coefficient sits on the i-th d-cell of the complex."""
        cells = complex.elements(dimension)
        if len(vector) != len(cells):
            raise DimensionMismatch(
                f"vector of length {len(vector)} for {len(cells)} cells of dimension {dimension}"
            )
        return cls(complex, dimension, dict(zip(cells, vector)), field)

    # ------------------------------------------------------------------

    def _compatible(self, other: "Chain") -> None:
        if not isinstance(other, Chain):
            raise TypeError(f"cannot combine Chain with {type(other).__name__}")
        if other.complex is not self.complex:
            raise DimensionMismatch("chains live on different complexes")
        if other.dimension != self.dimension:
            raise DimensionMismatch(
                f"cannot combine chains of dimension {self.dimension} and {other.dimension}"
            )
        if other.field != self.field:
            raise DimensionMismatch(f"chains over different fields: {self.field.name} vs {other.field.name}")

    def _with(self, coeffs: Mapping[Cell, Any], dimension: Optional[int] = None) -> "Chain":
        return Chain(self.complex, self.dimension if dimension is None else dimension, coeffs, self.field)

    def __add__(self, other: "Chain") -> "Chain":
        self._compatible(other)
        out = dict(self._coeffs)
        for cell, c in other._coeffs.items():
            out[cell] = self.field.add(out[cell], c) if cell in out else c
        return self._with(out)

    def __neg__(self) -> "Chain":
        return self._with({cell: self.field.neg(c) for cell, c in self._coeffs.items()})

    def __sub__(self, other: "Chain") -> "Chain":
        return self + (-other)

    def scale(self, factor: Any) -> "Chain":
        f = self.field.scalar(factor)
        return self._with({cell: self.field.mul(f, c) for cell, c in self._coeffs.items()})

    def boundary(self) -> "Chain":
        """
        Signed boundary, one dimension lower.

        Every cell expands into its faces weighted by coefficient * sign;
        contributions are summed and entries cancelling to zero dropped.
        """
        out: Dict[Cell, Any] = {}
        for cell, c in self._coeffs.items():
            for face, sign in cell.faces():
                term = self.field.mul(c, self.field.scalar(sign))
                out[face] = self.field.add(out[face], term) if face in out else term
        return self._with(out, dimension=self.dimension - 1)

    # ------------------------------------------------------------------

    def coefficient(self, cell: Cell) -> Any:
        return self._coeffs.get(cell, self.field.zero)

    def items(self) -> Iterator[Tuple[Cell, Any]]:
        return iter(self._coeffs.items())

    def support(self) -> Tuple[Cell, ...]:
        return tuple(self._coeffs)

    def is_zero(self) -> bool:
        return not self._coeffs

    def to_vector(self) -> np.ndarray:
        """Coefficients in the order of complex.elements(dimension)."""
        cells = self.complex.elements(self.dimension)
        return self.field.asarray([self.coefficient(c) for c in cells]) if cells else self.field.zeros((0,))

    def __len__(self) -> int:
        return len(self._coeffs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chain):
            return NotImplemented
        if other.complex is not self.complex or other.dimension != self.dimension:
            return False
        if self._coeffs.keys() != other._coeffs.keys():
            return False
        return all(bool(self.field.eq(c, other._coeffs[cell])) for cell, c in self._coeffs.items())

    __hash__ = None

    def __repr__(self) -> str:
        terms = ", ".join(f"{c}*{cell!r}" for cell, c in self._coeffs.items())
        return f"Chain(dim={self.dimension}, field={self.field.name}, [{terms}])"

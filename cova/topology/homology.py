"""
cova/topology/homology.py

Simplicial / cubical homology by boundary-matrix reduction.

For a complex K with chain groups C_d and boundary maps ∂_d : C_d -> C_{d-1}:

    β_d = dim ker ∂_d - dim im ∂_{d+1}
        = n_d - rank(∂_d) - rank(∂_{d+1})

with rank(∂_0) = 0 (there are no (-1)-chains) and rank(∂_{d+1}) = 0 above
the top dimension. Ranks are computed by row reduction over the engine's
coefficient field; see cova.algebra.linalg for the pivot policy.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import numpy as np
import scipy.sparse as sp

from cova.algebra.field import Field, gf2
from cova.algebra.linalg import image_basis, kernel_basis, rank
from cova.topology.chain import Chain

logger = logging.getLogger(__name__)


def incidence_matrix(complex: Any, dimension: int) -> sp.csr_matrix:
    """
    Signed incidence matrix of ∂_d with integer entries.

    Rows are (d-1)-cells and columns d-cells, both in handle order.
    For d <= 0 the matrix has no rows.
    """
    n_cols = complex.num_cells(dimension)
    if dimension <= 0:
        return sp.csr_matrix((0, n_cols), dtype=np.int8)

    n_rows = complex.num_cells(dimension - 1)
    rows: List[int] = []
    cols: List[int] = []
    vals: List[int] = []
    for h in complex.cells(dimension):
        for face, sign in complex.boundary(h):
            rows.append(face.index)
            cols.append(h.index)
            vals.append(sign)

    # Distinct faces of one cell occupy distinct rows, so no duplicates are summed.
    return sp.coo_matrix(
        (np.asarray(vals, dtype=np.int8), (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
        shape=(n_rows, n_cols),
    ).tocsr()


class HomologyEngine:
    """
    Betti numbers and (co)cycle bases over a fixed coefficient field.

    Attributes:
        field: Coefficient field (GF(2) when not given)
    """

    def __init__(self, field: Optional[Field] = None):
        self.field = field if field is not None else gf2()

    def boundary_matrix(self, complex: Any, dimension: int) -> np.ndarray:
        """Dense ∂_d over the field (shape (n_{d-1}, n_d); no rows for d <= 0)."""
        inc = incidence_matrix(complex, dimension)
        return self.field.asarray(inc.toarray())

    def boundary_rank(self, complex: Any, dimension: int) -> int:
        """rank(∂_d), zero for d <= 0 and for dimensions without cells."""
        if dimension <= 0 or complex.num_cells(dimension) == 0:
            return 0
        r = rank(self.boundary_matrix(complex, dimension), self.field)
        logger.debug("rank of boundary %d over %s: %d", dimension, self.field.name, r)
        return r

    def homology(self, complex: Any, dimension: int) -> int:
        """Betti number β_d; 0 for any dimension without cells."""
        n = complex.num_cells(dimension)
        if n == 0:
            return 0
        return n - self.boundary_rank(complex, dimension) - self.boundary_rank(complex, dimension + 1)

    def betti_numbers(self, complex: Any) -> Tuple[int, ...]:
        """(β_0, ..., β_top); empty tuple for the empty complex."""
        top = complex.dimension
        ranks = [self.boundary_rank(complex, d) for d in range(top + 2)]
        return tuple(complex.num_cells(d) - ranks[d] - ranks[d + 1] for d in range(top + 1))

    def cycle_basis(self, complex: Any, dimension: int) -> List[Chain]:
        """Basis of the d-cycles ker ∂_d as chains."""
        n = complex.num_cells(dimension)
        if n == 0:
            return []
        if dimension <= 0:
            basis = self.field.zeros((n, n))
            for i in range(n):
                basis[i, i] = self.field.one
        else:
            basis = kernel_basis(self.boundary_matrix(complex, dimension), self.field)
        return [Chain.from_vector(complex, dimension, basis[:, j], self.field) for j in range(basis.shape[1])]

    def boundary_basis(self, complex: Any, dimension: int) -> List[Chain]:
        """Basis of the d-boundaries im ∂_{d+1} as chains."""
        if complex.num_cells(dimension + 1) == 0 or complex.num_cells(dimension) == 0:
            return []
        basis = image_basis(self.boundary_matrix(complex, dimension + 1), self.field)
        return [Chain.from_vector(complex, dimension, basis[:, j], self.field) for j in range(basis.shape[1])]


def boundary_matrix(complex: Any, dimension: int, field: Optional[Field] = None) -> np.ndarray:
    return HomologyEngine(field).boundary_matrix(complex, dimension)


def homology(complex: Any, dimension: int, field: Optional[Field] = None) -> int:
    return HomologyEngine(field).homology(complex, dimension)


def betti_numbers(complex: Any, field: Optional[Field] = None) -> Tuple[int, ...]:
    return HomologyEngine(field).betti_numbers(complex)

"""
cova/algebra/linalg.py

Field-generic dense linear algebra on numpy arrays.

Only the operations the homology and sheaf engines consume:
  - row_echelon: reduced row echelon form with pivot columns
  - rank
  - kernel_basis: null-space basis, one vector per free column
  - image_basis: column-space basis taken from the original matrix
  - matvec

Pivot policy:
  - exact fields (GF2, GF(p), rationals): first nonzero entry at or below
    the current row.
  - RealField: largest magnitude entry at or below the current row; the
    field's tolerance decides what counts as zero, and eliminated entries
    are written back as exact zeros.
"""

from __future__ import annotations

from typing import Any, Tuple

import numpy as np

from cova.algebra.field import Field


def _as_matrix(matrix: Any, field: Field) -> np.ndarray:
    A = field.asarray(matrix)
    if A.ndim != 2:
        raise ValueError(f"expected a 2-D matrix, got shape {A.shape}")
    return A


def row_echelon(matrix: Any, field: Field) -> Tuple[np.ndarray, Tuple[int, ...]]:
    """
    Reduce a matrix to reduced row echelon form over a field.

    Args:
        matrix: Row-major 2-D data (anything numpy accepts)
        field: Coefficient field

    Returns:
        (reduced, pivots) where reduced is a new array in the field's dtype
        and pivots are the pivot column indices in ascending order.
    """
    A = _as_matrix(matrix, field)
    n_rows, n_cols = A.shape
    largest = field.pivot_rule == "largest"

    pivots = []
    row = 0
    for col in range(n_cols):
        if row == n_rows:
            break

        nonzero = np.flatnonzero(np.logical_not(field.is_zero(A[row:, col])))
        if nonzero.size == 0:
            if largest:
                A[row:, col] = field.zero
            continue

        if largest:
            pivot_row = row + int(nonzero[np.argmax(np.abs(A[row + nonzero, col]))])
        else:
            pivot_row = row + int(nonzero[0])

        if pivot_row != row:
            A[[row, pivot_row]] = A[[pivot_row, row]]

        A[row] = field.mul(A[row], field.inv(A[row, col]))
        A[row, col] = field.one

        # Eliminate the pivot column from every other row
        for r in range(n_rows):
            if r == row:
                continue
            factor = A[r, col]
            if field.is_zero(factor):
                continue
            A[r] = field.sub(A[r], field.mul(factor, A[row]))
            A[r, col] = field.zero

        pivots.append(col)
        row += 1

    return A, tuple(pivots)


def rank(matrix: Any, field: Field) -> int:
    """Rank of a matrix over a field."""
    A = _as_matrix(matrix, field)
    if A.size == 0:
        return 0
    _, pivots = row_echelon(A, field)
    return len(pivots)


def kernel_basis(matrix: Any, field: Field) -> np.ndarray:
    """
    Basis of the null space {x : A x = 0}.

    Returns:
        Array of shape (n_cols, k); column j is the basis vector for the
        j-th free column (1 at the free column, -R[i, free] at pivot i).
    """
    A = _as_matrix(matrix, field)
    n_cols = A.shape[1]
    reduced, pivots = row_echelon(A, field)
    pivot_set = set(pivots)
    free = [c for c in range(n_cols) if c not in pivot_set]

    basis = field.zeros((n_cols, len(free)))
    for j, f in enumerate(free):
        basis[f, j] = field.one
        for i, p in enumerate(pivots):
            basis[p, j] = field.neg(reduced[i, f])
    return basis


def image_basis(matrix: Any, field: Field) -> np.ndarray:
    """
    Basis of the column space, as the original columns at pivot positions.

    Returns:
        Array of shape (n_rows, rank).
    """
    A = _as_matrix(matrix, field)
    _, pivots = row_echelon(A, field)
    return A[:, list(pivots)]


def matvec(matrix: Any, vector: Any, field: Field) -> np.ndarray:
    """Matrix-vector product in the field."""
    return field.matmul(field.asarray(matrix), field.asarray(vector))

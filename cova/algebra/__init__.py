"""
Algebra module: coefficient fields and field-generic row reduction.
"""

from cova.algebra.field import (
    Field,
    GF2Field,
    PrimeField,
    RealField,
    RationalField,
    gf2,
    prime_field,
    real_field,
    rational_field,
    get_field,
)
from cova.algebra.linalg import row_echelon, rank, kernel_basis, image_basis, matvec

__all__ = [
    "Field",
    "GF2Field",
    "PrimeField",
    "RealField",
    "RationalField",
    "gf2",
    "prime_field",
    "real_field",
    "rational_field",
    "get_field",
    "row_echelon",
    "rank",
    "kernel_basis",
    "image_basis",
    "matvec",
]

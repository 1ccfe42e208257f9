"""
Tests for field-generic row reduction.
"""

from fractions import Fraction

import numpy as np
import pytest

from cova.algebra.field import gf2, prime_field, rational_field, real_field
from cova.algebra.linalg import image_basis, kernel_basis, matvec, rank, row_echelon


# Rank 2 over GF(2) (rows sum to zero mod 2), rank 3 over the reals
CYCLE = [[1, 1, 0], [0, 1, 1], [1, 0, 1]]


class TestRank:
    def test_field_dependent_rank(self):
        assert rank(CYCLE, gf2()) == 2
        assert rank(CYCLE, real_field()) == 3
        assert rank(CYCLE, rational_field()) == 3
        assert rank(CYCLE, prime_field(3)) == 3

    def test_rank_deficient(self):
        m = [[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [1.0, 0.0, 1.0]]
        assert rank(m, real_field()) == 2

    def test_near_singular_within_tolerance(self):
        m = [[1.0, 1.0], [1.0, 1.0 + 1e-12]]
        assert rank(m, real_field(1e-9)) == 1

    def test_empty_matrix(self):
        assert rank(np.zeros((0, 4)), real_field()) == 0
        assert rank(np.zeros((3, 0)), gf2()) == 0

    def test_non_matrix_raises(self):
        with pytest.raises(ValueError):
            rank([1, 2, 3], real_field())

    def test_large_prime_dependent_rows(self):
        p = 2147483647
        a = p - 2
        assert rank([[1, a], [a, a * a % p]], prime_field(p)) == 1


class TestRowEchelon:
    def test_pivots(self):
        reduced, pivots = row_echelon([[0, 2, 4], [0, 1, 3]], rational_field())
        assert pivots == (1, 2)
        assert reduced.tolist() == [[0, 1, 0], [0, 0, 1]]

    def test_largest_magnitude_pivot(self):
        reduced, pivots = row_echelon([[1.0, 2.0], [4.0, 1.0]], real_field())
        assert pivots == (0, 1)
        assert np.allclose(reduced, np.eye(2))

    def test_input_not_mutated(self):
        m = np.array([[2.0, 4.0], [1.0, 3.0]])
        row_echelon(m, real_field())
        assert m.tolist() == [[2.0, 4.0], [1.0, 3.0]]


class TestKernelAndImage:
    @pytest.mark.parametrize("field", [gf2(), prime_field(5), real_field(), rational_field()])
    def test_kernel_is_annihilated(self, field):
        m = field.asarray([[1, 1, 0, 1], [0, 1, 1, 1]])
        k = kernel_basis(m, field)
        assert k.shape == (4, 2)
        product = field.matmul(m, k)
        assert np.all(field.is_zero(product))

    def test_kernel_over_gf2_of_cycle(self):
        k = kernel_basis(CYCLE, gf2())
        assert k.shape == (3, 1)
        assert k[:, 0].tolist() == [True, True, True]

    def test_trivial_kernel(self):
        assert kernel_basis(np.eye(3), real_field()).shape == (3, 0)

    def test_image_basis_uses_original_columns(self):
        m = [[1, 2, 1], [2, 4, 0]]
        img = image_basis(m, rational_field())
        assert img.shape == (2, 2)
        assert img[:, 0].tolist() == [1, 2]
        assert img[:, 1].tolist() == [1, 0]

    def test_matvec(self):
        out = matvec([[1, 2], [3, 4]], [1, Fraction(1, 2)], rational_field())
        assert out.tolist() == [2, 5]

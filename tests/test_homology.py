"""
Tests for boundary matrices and Betti numbers.
"""

import numpy as np
import pytest

from cova.algebra.field import gf2, prime_field, rational_field, real_field
from cova.topology.cell import Cube, Simplex
from cova.topology.complex import CubicalComplex, SimplicialComplex
from cova.topology.homology import HomologyEngine, betti_numbers, boundary_matrix, homology, incidence_matrix


FIELDS = [gf2(), prime_field(3), real_field(), rational_field()]


def simplicial(*simplices):
    cx = SimplicialComplex()
    for verts in simplices:
        cx.join_element(Simplex(len(verts) - 1, verts))
    return cx


# Six-vertex triangulation of the real projective plane
RP2 = [
    (1, 2, 4), (1, 2, 6), (1, 3, 5), (1, 3, 6), (1, 4, 5),
    (2, 3, 4), (2, 3, 5), (2, 5, 6), (3, 4, 6), (4, 5, 6),
]


class TestBoundaryMatrix:
    def test_triangle_incidence(self):
        cx = simplicial((0, 1, 2))
        inc = incidence_matrix(cx, 2).toarray()
        # edges [0,1], [0,2], [1,2]
        assert inc[:, 0].tolist() == [1, -1, 1]

    def test_edge_incidence(self):
        cx = simplicial((0, 1))
        assert incidence_matrix(cx, 1).toarray().tolist() == [[-1], [1]]

    def test_dimension_zero_has_no_rows(self):
        cx = simplicial((0, 1, 2))
        assert boundary_matrix(cx, 0).shape == (0, 3)

    def test_over_gf2(self):
        cx = simplicial((0, 1, 2))
        m = boundary_matrix(cx, 1, gf2())
        assert m.dtype == np.bool_
        assert m.sum() == 6

    def test_boundary_squares_to_zero(self):
        cx = simplicial((0, 1, 2, 3))
        for d in (2, 3):
            prod = incidence_matrix(cx, d - 1).toarray() @ incidence_matrix(cx, d).toarray()
            assert not prod.any()


class TestBettiNumbers:
    @pytest.mark.parametrize("field", FIELDS)
    def test_filled_triangle(self, field):
        cx = simplicial((0, 1, 2))
        engine = HomologyEngine(field)
        assert engine.homology(cx, 0) == 1
        assert engine.homology(cx, 1) == 0
        assert engine.homology(cx, 2) == 0

    @pytest.mark.parametrize("field", FIELDS)
    def test_hollow_triangle(self, field):
        cx = simplicial((0, 1), (1, 2), (0, 2))
        assert homology(cx, 0, field) == 1
        assert homology(cx, 1, field) == 1

    def test_hollow_tetrahedron(self):
        cx = simplicial((0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3))
        assert betti_numbers(cx) == (1, 0, 1)

    def test_solid_tetrahedron(self):
        cx = simplicial((0, 1, 2, 3))
        assert cx.betti_numbers() == (1, 0, 0, 0)

    def test_disjoint_components(self):
        cx = simplicial((0, 1), (2, 3), (4,))
        assert cx.homology(0) == 3
        assert cx.homology(1) == 0

    def test_empty_dimension_is_zero(self):
        cx = simplicial((0, 1))
        assert cx.homology(5) == 0
        assert cx.homology(-1) == 0
        assert SimplicialComplex().homology(0) == 0
        assert SimplicialComplex().betti_numbers() == ()

    def test_projective_plane_depends_on_field(self):
        cx = simplicial(*RP2)
        assert cx.euler_characteristic() == 1
        assert betti_numbers(cx, gf2()) == (1, 1, 1)
        assert betti_numbers(cx, rational_field()) == (1, 0, 0)
        assert betti_numbers(cx, real_field()) == (1, 0, 0)
        assert betti_numbers(cx, prime_field(3)) == (1, 0, 0)

    def test_euler_characteristic_matches_betti(self):
        cx = simplicial(*RP2)
        b = betti_numbers(cx, prime_field(5))
        assert sum((-1) ** d * x for d, x in enumerate(b)) == cx.euler_characteristic()


class TestCubicalHomology:
    def test_filled_square(self):
        cx = CubicalComplex()
        cx.join_element(Cube(2, (0, 0), (0, 1)))
        assert cx.betti_numbers(real_field()) == (1, 0, 0)

    def test_square_annulus(self):
        # 3x3 block of unit squares with the centre removed
        cx = CubicalComplex()
        for x in range(3):
            for y in range(3):
                if (x, y) != (1, 1):
                    cx.join_element(Cube(2, (x, y), (0, 1)))
        assert cx.betti_numbers(gf2()) == (1, 1, 0)
        assert cx.betti_numbers(rational_field()) == (1, 1, 0)


class TestBases:
    def test_cycle_basis_of_circle(self):
        cx = simplicial((0, 1), (1, 2), (0, 2))
        engine = HomologyEngine(real_field())
        cycles = engine.cycle_basis(cx, 1)
        assert len(cycles) == 1
        assert cycles[0].boundary().is_zero()
        assert len(cycles[0]) == 3

    def test_boundary_basis_of_filled_triangle(self):
        cx = simplicial((0, 1, 2))
        engine = HomologyEngine(gf2())
        bases = engine.boundary_basis(cx, 1)
        assert len(bases) == 1
        assert len(bases[0]) == 3
        assert engine.boundary_basis(cx, 2) == []

    def test_vertex_cycles(self):
        cx = simplicial((0, 1))
        assert len(HomologyEngine().cycle_basis(cx, 0)) == 2

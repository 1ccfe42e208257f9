"""
Tests for coefficient fields.
"""

from fractions import Fraction

import numpy as np
import pytest

from cova.algebra.field import (
    GF2Field,
    PrimeField,
    RationalField,
    RealField,
    get_field,
    gf2,
    prime_field,
    real_field,
)
from cova.config import CONFIG
from cova.core.errors import ConstructionError


class TestGF2:
    def test_scalar_ops(self):
        f = GF2Field()
        assert bool(f.add(True, True)) is False
        assert bool(f.add(True, False)) is True
        assert bool(f.mul(True, False)) is False
        assert f.neg(True) is True
        assert f.inv(True) is True

    def test_inverse_of_zero_raises(self):
        with pytest.raises(ZeroDivisionError):
            GF2Field().inv(False)

    def test_asarray_reduces_mod_2(self):
        arr = gf2().asarray([[1, -1, 2], [0, 3, -2]])
        assert arr.dtype == np.bool_
        assert arr.tolist() == [[True, True, False], [False, True, False]]

    def test_scalar_of_sign(self):
        assert gf2().scalar(-1) is True
        assert gf2().scalar(2) is False

    def test_matmul(self):
        f = gf2()
        a = f.asarray([[1, 1], [0, 1]])
        b = f.asarray([1, 1])
        assert f.matmul(a, b).tolist() == [False, True]


class TestPrimeField:
    def test_arithmetic_mod_p(self):
        f = prime_field(5)
        assert int(f.add(3, 4)) == 2
        assert int(f.mul(3, 4)) == 2
        assert int(f.neg(2)) == 3
        assert int(f.sub(1, 3)) == 3

    def test_inverse(self):
        f = PrimeField(7)
        for a in range(1, 7):
            assert (a * f.inv(a)) % 7 == 1

    def test_non_prime_raises(self):
        with pytest.raises(ConstructionError):
            PrimeField(6)

    def test_name(self):
        assert PrimeField(3).name == "GF3"

    def test_asarray_negative_entries(self):
        assert prime_field(3).asarray([-1, 1, 0]).tolist() == [2, 1, 0]

    def test_modulus_too_large_for_int64(self):
        with pytest.raises(ConstructionError):
            prime_field(4294967311)

    def test_large_modulus_matmul_does_not_overflow(self):
        p = 2147483647
        f = prime_field(p)
        # (p - 1)^2 = 1 mod p, and three such terms overflow int64 when summed
        out = f.matmul([[p - 1, p - 1, p - 1]], [p - 1, p - 1, p - 1])
        assert out.tolist() == [3]


class TestRealField:
    def test_tolerance_zero(self):
        f = RealField(tolerance=1e-6)
        assert f.is_zero(1e-7)
        assert not f.is_zero(1e-3)

    def test_default_tolerance_from_config(self):
        assert real_field().tolerance == CONFIG["linalg"]["real_tolerance"]

    def test_allclose(self):
        f = RealField(tolerance=1e-9)
        assert f.allclose([1.0, 2.0], [1.0, 2.0 + 1e-12])
        assert not f.allclose([1.0, 2.0], [1.0, 2.1])
        assert not f.allclose([1.0], [1.0, 1.0])

    def test_inverse_of_tiny_raises(self):
        with pytest.raises(ZeroDivisionError):
            RealField(tolerance=1e-6).inv(1e-9)


class TestRationalField:
    def test_exact_arithmetic(self):
        f = RationalField()
        third = f.scalar(Fraction(1, 3))
        assert f.add(third, f.add(third, third)) == 1
        assert f.inv(Fraction(2, 3)) == Fraction(3, 2)

    def test_asarray_holds_fractions(self):
        arr = RationalField().asarray([[1, 2], [3, 4]])
        assert arr.dtype == object
        assert all(isinstance(x, Fraction) for x in arr.ravel())

    def test_matmul_exact(self):
        f = RationalField()
        a = f.asarray([[1, 2], [3, 4]])
        x = f.asarray([Fraction(1, 2), Fraction(1, 3)])
        assert f.matmul(a, x).tolist() == [Fraction(7, 6), Fraction(17, 6)]


class TestGetField:
    @pytest.mark.parametrize("name,cls", [
        ("gf2", GF2Field),
        ("Z2", GF2Field),
        ("boolean", GF2Field),
        ("real", RealField),
        ("rational", RationalField),
        ("gf3", PrimeField),
        ("z7", PrimeField),
    ])
    def test_lookup(self, name, cls):
        assert isinstance(get_field(name), cls)

    def test_prime_modulus_parsed(self):
        assert get_field("gf11").p == 11

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError):
            get_field("octonions")

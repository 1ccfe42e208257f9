"""
cova/algebra/field.py

Coefficient fields for chains, boundary matrices and sheaf stalks.

A field (F, +, *, 0, 1) provides:
- add / sub / mul / neg: elementwise on scalars or numpy arrays
- inv: multiplicative inverse of a nonzero scalar
- is_zero(x): zero test (tolerance based for the reals)
- asarray / scalar: normalize raw data into the field's representation
- matmul: matrix product carried out in the field

Engines are written once against this capability set and instantiated
over GF(2), GF(p), the reals or the rationals.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Optional, Protocol, Sequence, Tuple
import numpy as np

from cova.config import CONFIG
from cova.core.errors import ConstructionError


class Field(Protocol):
    """Protocol for coefficient fields."""
    name: str
    dtype: np.dtype
    zero: Any
    one: Any
    pivot_rule: str

    def add(self, a: Any, b: Any) -> Any: ...
    def sub(self, a: Any, b: Any) -> Any: ...
    def mul(self, a: Any, b: Any) -> Any: ...
    def neg(self, a: Any) -> Any: ...
    def inv(self, a: Any) -> Any: ...
    def is_zero(self, a: Any) -> Any: ...
    def eq(self, a: Any, b: Any) -> Any: ...
    def allclose(self, a: Any, b: Any) -> bool: ...
    def scalar(self, x: Any) -> Any: ...
    def asarray(self, data: Any) -> np.ndarray: ...
    def zeros(self, shape: Sequence[int]) -> np.ndarray: ...
    def matmul(self, a: np.ndarray, b: np.ndarray) -> np.ndarray: ...


_INT64_MAX = int(np.iinfo(np.int64).max)


def _is_prime(p: int) -> bool:
    if p < 2:
        return False
    i = 2
    while i * i <= p:
        if p % i == 0:
            return False
        i += 1
    return True


@dataclass(frozen=True)
class GF2Field:
    """Two-element field: add=XOR, mul=AND, every element is its own negative."""
    name: str = "GF2"
    dtype: np.dtype = np.dtype(np.bool_)
    zero: bool = False
    one: bool = True
    pivot_rule: str = "first"

    def add(self, a: Any, b: Any) -> Any:
        return np.logical_xor(a, b)

    def sub(self, a: Any, b: Any) -> Any:
        return np.logical_xor(a, b)

    def mul(self, a: Any, b: Any) -> Any:
        return np.logical_and(a, b)

    def neg(self, a: Any) -> Any:
        return a

    def inv(self, a: Any) -> bool:
        if not bool(a):
            raise ZeroDivisionError("zero has no inverse in GF2")
        return True

    def is_zero(self, a: Any) -> Any:
        return np.logical_not(a)

    def eq(self, a: Any, b: Any) -> Any:
        return np.equal(self.asarray(a), self.asarray(b))

    def allclose(self, a: Any, b: Any) -> bool:
        a, b = self.asarray(a), self.asarray(b)
        return a.shape == b.shape and bool(np.all(a == b))

    def scalar(self, x: Any) -> bool:
        if isinstance(x, (bool, np.bool_)):
            return bool(x)
        return int(x) % 2 == 1

    def asarray(self, data: Any) -> np.ndarray:
        arr = np.asarray(data)
        if arr.dtype == np.bool_:
            return arr.copy()
        return np.mod(arr.astype(np.int64), 2) == 1

    def zeros(self, shape: Sequence[int]) -> np.ndarray:
        return np.zeros(tuple(shape), dtype=np.bool_)

    def matmul(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        out = np.asarray(a, dtype=np.int64) @ np.asarray(b, dtype=np.int64)
        return np.mod(out, 2) == 1


@dataclass(frozen=True)
class PrimeField:
    """
    Integers modulo a prime p, stored as int64 residues in [0, p).

    p is bounded so that the product of two residues fits in int64.
    """
    p: int
    name: str = ""
    dtype: np.dtype = np.dtype(np.int64)
    zero: int = 0
    one: int = 1
    pivot_rule: str = "first"

    def __post_init__(self):
        # Residue products must fit in int64 before reduction
        if (int(self.p) - 1) ** 2 > _INT64_MAX:
            raise ConstructionError(
                f"PrimeField modulus {self.p} is too large: (p - 1)^2 overflows int64"
            )
        if not _is_prime(int(self.p)):
            raise ConstructionError(f"PrimeField modulus must be prime, got {self.p}")
        if not self.name:
            object.__setattr__(self, "name", f"GF{self.p}")

    def add(self, a: Any, b: Any) -> Any:
        return np.mod(np.add(a, b), self.p)

    def sub(self, a: Any, b: Any) -> Any:
        return np.mod(np.subtract(a, b), self.p)

    def mul(self, a: Any, b: Any) -> Any:
        return np.mod(np.multiply(a, b), self.p)

    def neg(self, a: Any) -> Any:
        return np.mod(np.negative(a), self.p)

    def inv(self, a: Any) -> int:
        a = int(a) % self.p
        if a == 0:
            raise ZeroDivisionError(f"zero has no inverse in GF{self.p}")
        return pow(a, self.p - 2, self.p)

    def is_zero(self, a: Any) -> Any:
        return np.mod(a, self.p) == 0

    def eq(self, a: Any, b: Any) -> Any:
        return np.equal(self.asarray(a), self.asarray(b))

    def allclose(self, a: Any, b: Any) -> bool:
        a, b = self.asarray(a), self.asarray(b)
        return a.shape == b.shape and bool(np.all(a == b))

    def scalar(self, x: Any) -> int:
        return int(x) % self.p

    def asarray(self, data: Any) -> np.ndarray:
        return np.mod(np.asarray(data).astype(np.int64), self.p)

    def zeros(self, shape: Sequence[int]) -> np.ndarray:
        return np.zeros(tuple(shape), dtype=np.int64)

    def matmul(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        a = np.asarray(a, dtype=np.int64)
        b = np.asarray(b, dtype=np.int64)
        terms = a.shape[-1] if a.ndim else 1
        if (self.p - 1) ** 2 * max(terms, 1) > _INT64_MAX:
            # Accumulate in Python ints when the row sums could overflow
            out = np.dot(a.astype(object), b.astype(object))
            return np.mod(out, self.p).astype(np.int64)
        return np.mod(a @ b, self.p)


@dataclass(frozen=True)
class RealField:
    """
    Floating-point reals.

    Values with |x| <= tolerance are treated as zero, and row reduction
    uses largest-magnitude (partial) pivoting.
    """
    tolerance: float = 1e-9
    name: str = "REAL"
    dtype: np.dtype = np.dtype(np.float64)
    zero: float = 0.0
    one: float = 1.0
    pivot_rule: str = "largest"

    def add(self, a: Any, b: Any) -> Any:
        return np.add(a, b)

    def sub(self, a: Any, b: Any) -> Any:
        return np.subtract(a, b)

    def mul(self, a: Any, b: Any) -> Any:
        return np.multiply(a, b)

    def neg(self, a: Any) -> Any:
        return np.negative(a)

    def inv(self, a: Any) -> float:
        if abs(float(a)) <= self.tolerance:
            raise ZeroDivisionError("cannot invert a value within tolerance of zero")
        return 1.0 / float(a)

    def is_zero(self, a: Any) -> Any:
        return np.abs(a) <= self.tolerance

    def eq(self, a: Any, b: Any) -> Any:
        return np.isclose(a, b, rtol=0.0, atol=self.tolerance)

    def allclose(self, a: Any, b: Any) -> bool:
        a, b = np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)
        return a.shape == b.shape and bool(np.allclose(a, b, rtol=0.0, atol=self.tolerance))

    def scalar(self, x: Any) -> float:
        return float(x)

    def asarray(self, data: Any) -> np.ndarray:
        return np.array(data, dtype=np.float64)

    def zeros(self, shape: Sequence[int]) -> np.ndarray:
        return np.zeros(tuple(shape), dtype=np.float64)

    def matmul(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return np.asarray(a, dtype=np.float64) @ np.asarray(b, dtype=np.float64)


_to_fraction = np.frompyfunc(Fraction, 1, 1)


@dataclass(frozen=True)
class RationalField:
    """Exact rationals (fractions.Fraction) held in object arrays."""
    name: str = "RATIONAL"
    dtype: np.dtype = np.dtype(object)
    zero: Fraction = Fraction(0)
    one: Fraction = Fraction(1)
    pivot_rule: str = "first"

    def add(self, a: Any, b: Any) -> Any:
        return np.add(a, b)

    def sub(self, a: Any, b: Any) -> Any:
        return np.subtract(a, b)

    def mul(self, a: Any, b: Any) -> Any:
        return np.multiply(a, b)

    def neg(self, a: Any) -> Any:
        return np.negative(a)

    def inv(self, a: Any) -> Fraction:
        a = Fraction(a)
        if a == 0:
            raise ZeroDivisionError("zero has no inverse")
        return 1 / a

    def is_zero(self, a: Any) -> Any:
        if isinstance(a, np.ndarray):
            return (a == 0).astype(bool)
        return a == 0

    def eq(self, a: Any, b: Any) -> Any:
        return (self.asarray(a) == self.asarray(b)).astype(bool)

    def allclose(self, a: Any, b: Any) -> bool:
        a, b = self.asarray(a), self.asarray(b)
        return a.shape == b.shape and bool(np.all(a == b))

    def scalar(self, x: Any) -> Fraction:
        return Fraction(x)

    def asarray(self, data: Any) -> np.ndarray:
        arr = np.asarray(data, dtype=object)
        if arr.ndim == 0:
            return np.asarray(Fraction(arr.item()), dtype=object)
        return _to_fraction(arr).astype(object)

    def zeros(self, shape: Sequence[int]) -> np.ndarray:
        out = np.empty(tuple(shape), dtype=object)
        out.fill(Fraction(0))
        return out

    def matmul(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        a, b = self.asarray(a), self.asarray(b)
        out_shape: Tuple[int, ...] = a.shape[:-1] + b.shape[1:]
        if a.shape[-1] == 0:
            return self.zeros(out_shape)
        return self.asarray(np.dot(a, b))


def gf2() -> GF2Field:
    """Create the two-element field."""
    return GF2Field()


def prime_field(p: int) -> PrimeField:
    """Create the field of integers modulo p."""
    return PrimeField(p)


def real_field(tolerance: Optional[float] = None) -> RealField:
    """Create a real field with the configured (or given) zero tolerance."""
    if tolerance is None:
        tolerance = CONFIG["linalg"]["real_tolerance"]
    return RealField(tolerance=float(tolerance))


def rational_field() -> RationalField:
    """Create the exact rational field."""
    return RationalField()


def get_field(name: str) -> Field:
    """
    Look up a field by name.

    Accepts "gf2" / "z2" / "boolean", "real", "rational", and "gf<p>" / "z<p>"
    for an odd prime p.
    """
    key = name.strip().lower()
    if key in ("gf2", "z2", "boolean", "bool"):
        return gf2()
    if key in ("real", "reals", "float"):
        return real_field()
    if key in ("rational", "rationals", "q"):
        return rational_field()
    for prefix in ("gf", "z"):
        if key.startswith(prefix) and key[len(prefix):].isdigit():
            return prime_field(int(key[len(prefix):]))
    raise ValueError(f"Unknown field: {name}")

"""
cova/topology/cell.py

Elementary cells of combinatorial complexes.

- Simplex: k-cell spanned by k+1 distinct vertex labels.
- Cube: elementary k-cube in Z^n, a base vertex plus k axis directions.

Cells are immutable values. Identity is (dimension, canonical generators),
so the order in which generators are given never affects equality.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from typing import Any, Hashable, Tuple, Union

from cova.core.errors import ConstructionError


@dataclass(frozen=True)
class Simplex:
    """
    Oriented simplex with sorted vertex labels.

    Attributes:
        dimension: k
        vertices: k+1 distinct labels, canonical sorted order
    """
    dimension: int
    vertices: Tuple[Hashable, ...]

    def __post_init__(self):
        if self.dimension < 0:
            raise ConstructionError(f"Simplex dimension must be non-negative, got {self.dimension}")
        try:
            verts = tuple(sorted(self.vertices))
            distinct = len(set(verts))
        except TypeError as e:
            raise ConstructionError(f"Simplex vertices must be hashable and mutually ordered: {e}") from e
        if len(verts) != self.dimension + 1:
            raise ConstructionError(
                f"A {self.dimension}-simplex needs {self.dimension + 1} vertices, got {len(verts)}"
            )
        if distinct != len(verts):
            raise ConstructionError(f"Simplex has repeated vertices: {verts}")
        object.__setattr__(self, "vertices", verts)

    @property
    def key(self) -> Tuple[int, Tuple[Hashable, ...]]:
        return (self.dimension, self.vertices)

    def faces(self) -> Tuple[Tuple["Simplex", int], ...]:
        """
        Codimension-one faces with incidence signs.

        The face omitting the i-th vertex carries sign (-1)^i.
        """
        if self.dimension == 0:
            return ()
        out = []
        for i in range(len(self.vertices)):
            rest = self.vertices[:i] + self.vertices[i + 1:]
            out.append((Simplex(self.dimension - 1, rest), -1 if i % 2 else 1))
        return tuple(out)

    def is_face_of(self, other: Any) -> bool:
        """True if self is a proper face of other."""
        if not isinstance(other, Simplex) or self.dimension >= other.dimension:
            return False
        return set(self.vertices).issubset(other.vertices)

    def __repr__(self) -> str:
        return f"Simplex({self.dimension}, {list(self.vertices)})"


@dataclass(frozen=True)
class Cube:
    """
    Elementary cube [b, b + e_{a1}] x ... x [b, b + e_{ak}] in Z^n.

    Attributes:
        dimension: k
        base: Integer coordinates of the lowest corner
        directions: k distinct axes in ascending order, each < len(base)
    """
    dimension: int
    base: Tuple[int, ...]
    directions: Tuple[int, ...] = ()

    def __post_init__(self):
        if self.dimension < 0:
            raise ConstructionError(f"Cube dimension must be non-negative, got {self.dimension}")
        base = tuple(int(c) for c in self.base)
        dirs = tuple(sorted(int(a) for a in self.directions))
        if len(dirs) != self.dimension:
            raise ConstructionError(
                f"A {self.dimension}-cube needs {self.dimension} directions, got {len(dirs)}"
            )
        if len(set(dirs)) != len(dirs):
            raise ConstructionError(f"Cube has repeated directions: {dirs}")
        for a in dirs:
            if not 0 <= a < len(base):
                raise ConstructionError(
                    f"Cube direction {a} outside ambient dimension {len(base)}"
                )
        object.__setattr__(self, "base", base)
        object.__setattr__(self, "directions", dirs)

    @property
    def key(self) -> Tuple[int, Tuple[int, ...], Tuple[int, ...]]:
        return (self.dimension, self.base, self.directions)

    def _shifted(self, axis: int) -> Tuple[int, ...]:
        return tuple(c + 1 if i == axis else c for i, c in enumerate(self.base))

    def faces(self) -> Tuple[Tuple["Cube", int], ...]:
        """
        Codimension-one faces with incidence signs.

        Collapsing the i-th direction gives a lower face (same base, sign
        -(-1)^i) and an upper face (base shifted along that axis, sign (-1)^i).
        """
        out = []
        for i, axis in enumerate(self.directions):
            rest = self.directions[:i] + self.directions[i + 1:]
            sign = -1 if i % 2 else 1
            out.append((Cube(self.dimension - 1, self.base, rest), -sign))
            out.append((Cube(self.dimension - 1, self._shifted(axis), rest), sign))
        return tuple(out)

    def vertices(self) -> Tuple[Tuple[int, ...], ...]:
        """Corner points, in binary order over the directions."""
        corners = []
        for bits in product((0, 1), repeat=self.dimension):
            pt = list(self.base)
            for bit, axis in zip(bits, self.directions):
                pt[axis] += bit
            corners.append(tuple(pt))
        return tuple(corners)

    def is_face_of(self, other: Any) -> bool:
        """True if self is a proper face of other."""
        if not isinstance(other, Cube) or self.dimension >= other.dimension:
            return False
        if len(self.base) != len(other.base):
            return False
        return set(self.vertices()).issubset(other.vertices())

    def __repr__(self) -> str:
        return f"Cube({self.dimension}, base={self.base}, directions={self.directions})"


Cell = Union[Simplex, Cube]

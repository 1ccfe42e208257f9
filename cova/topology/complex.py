"""
cova/topology/complex.py

Face-closed cell complexes with per-dimension handle storage.

A complex keeps, for each dimension d:
- the cells of dimension d in insertion order (handle (d, i) = i-th cell)
- the signed boundary of each cell as (face index, sign) pairs
- the coface indices of each cell

Faces and cofaces are index relations into those per-dimension tables,
never object links, so a built complex is a plain value that can be read
from several threads at once.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Type, Union

from cova.core.errors import CellLookupError, ConstructionError
from cova.core.registry import CellHandle, CellRegistry
from cova.topology.cell import Cell, Cube, Simplex
from cova.topology.graph import UndirectedGraph
from cova.topology.lattice import Lattice


class Complex:
    """
    Shared interface of simplicial and cubical complexes.

    Subclasses fix `cell_type`; everything else is kind-agnostic and relies
    only on a cell's `dimension` and `faces()`.
    """

    cell_type: Type = object

    def __init__(self):
        self._registry = CellRegistry()
        self._boundaries: Dict[int, List[Tuple[Tuple[int, int], ...]]] = {}
        self._cofaces: Dict[int, List[List[int]]] = {}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _insert(self, cell: Cell) -> CellHandle:
        """Insert a cell whose faces are all present already."""
        h = self._registry.register(cell)
        bnd = []
        for face, sign in cell.faces():
            fh = self._registry.handle(face)
            bnd.append((fh.index, sign))
            self._cofaces[fh.dimension][fh.index].append(h.index)
        self._boundaries.setdefault(h.dimension, []).append(tuple(bnd))
        self._cofaces.setdefault(h.dimension, []).append([])
        return h

    def join_element(self, cell: Cell) -> CellHandle:
        """
        Insert a cell together with every missing face.

        Face closure is iterative: a cell is expanded once to push its
        missing faces, and inserted on its second visit once they exist.
        Re-inserting a present cell returns its existing handle.
        """
        if not isinstance(cell, self.cell_type):
            raise ConstructionError(
                f"{type(self).__name__} accepts {self.cell_type.__name__} cells, got {type(cell).__name__}"
            )
        if cell in self._registry:
            return self._registry.handle(cell)

        stack: List[Tuple[Cell, bool]] = [(cell, False)]
        while stack:
            c, expanded = stack.pop()
            if c in self._registry:
                continue
            if expanded or c.dimension == 0:
                self._insert(c)
                continue
            stack.append((c, True))
            # Last face comes off first: a simplex's faces land in ascending vertex order
            for face, _ in c.faces():
                if face not in self._registry:
                    stack.append((face, False))

        return self._registry.handle(cell)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _check(self, handle: Tuple[int, int]) -> CellHandle:
        if not self._registry.has_handle(handle):
            raise CellLookupError(f"no cell with handle {tuple(handle)}")
        return CellHandle(*handle)

    def cells(self, dimension: int) -> Tuple[CellHandle, ...]:
        """Handles of all cells of a dimension, in insertion order."""
        return tuple(CellHandle(dimension, i) for i in range(self._registry.count(dimension)))

    def elements(self, dimension: int) -> Tuple[Cell, ...]:
        """Cells of a dimension, in insertion order."""
        return tuple(self._registry.index_to_cell.get(dimension, ()))

    def cell(self, handle: Tuple[int, int]) -> Cell:
        """Get the cell behind a handle."""
        return self._registry.cell(handle)

    def handle(self, cell: Cell) -> CellHandle:
        """Get the handle of a cell in this complex."""
        return self._registry.handle(cell)

    def boundary(self, handle: Tuple[int, int]) -> Tuple[Tuple[CellHandle, int], ...]:
        """Signed codimension-one faces of a cell as (face handle, sign)."""
        h = self._check(handle)
        return tuple(
            (CellHandle(h.dimension - 1, idx), sign)
            for idx, sign in self._boundaries[h.dimension][h.index]
        )

    def cofaces(self, handle: Tuple[int, int]) -> Tuple[CellHandle, ...]:
        """Codimension-one cofaces of a cell, in insertion order."""
        h = self._check(handle)
        return tuple(CellHandle(h.dimension + 1, idx) for idx in self._cofaces[h.dimension][h.index])

    def contains(self, item: Union[Cell, Tuple[int, int]]) -> bool:
        """Membership test for a cell or a handle."""
        if isinstance(item, CellHandle):
            return self._registry.has_handle(item)
        if isinstance(item, self.cell_type):
            return item in self._registry
        if isinstance(item, tuple) and len(item) == 2 and all(isinstance(x, int) for x in item):
            return self._registry.has_handle(item)
        return False

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    def num_cells(self, dimension: int) -> int:
        return self._registry.count(dimension)

    def __len__(self) -> int:
        return sum(self._registry.count(d) for d in self._registry.dimensions())

    @property
    def dimension(self) -> int:
        """Top dimension present, -1 for the empty complex."""
        dims = self._registry.dimensions()
        return dims[-1] if dims else -1

    def euler_characteristic(self) -> int:
        return sum((-1) ** d * self._registry.count(d) for d in self._registry.dimensions())

    # ------------------------------------------------------------------
    # Derived structures
    # ------------------------------------------------------------------

    def face_lattice(self) -> Lattice:
        """Face poset: one direct relation face -> coface per boundary entry."""
        lat = Lattice()
        for d in self._registry.dimensions():
            cells = self._registry.index_to_cell[d]
            for i, c in enumerate(cells):
                lat.add_element(c)
                for idx, _ in self._boundaries[d][i]:
                    lat.add_relation(self._registry.index_to_cell[d - 1][idx], c)
        return lat

    def one_skeleton(self) -> UndirectedGraph:
        """Graph on 0-cell indices with an edge per 1-cell."""
        g = UndirectedGraph(vertices=range(self.num_cells(0)))
        for bnd in self._boundaries.get(1, ()):
            ends = [idx for idx, _ in bnd]
            g.add_edge(min(ends), max(ends))
        return g

    def homology(self, dimension: int, field: Optional[Any] = None) -> int:
        """Betti number in one dimension (GF(2) coefficients by default)."""
        from cova.topology.homology import HomologyEngine
        return HomologyEngine(field).homology(self, dimension)

    def betti_numbers(self, field: Optional[Any] = None) -> Tuple[int, ...]:
        """Betti numbers for dimensions 0..top (GF(2) coefficients by default)."""
        from cova.topology.homology import HomologyEngine
        return HomologyEngine(field).betti_numbers(self)

    def __eq__(self, other: object) -> bool:
        """Structural identity: same kind, same cells under the same handles."""
        if not isinstance(other, Complex):
            return NotImplemented
        if type(self) is not type(other) or self.dimension != other.dimension:
            return False
        return all(self.elements(d) == other.elements(d) for d in range(self.dimension + 1))

    __hash__ = None

    def __repr__(self) -> str:
        counts = [self._registry.count(d) for d in range(self.dimension + 1)]
        return f"{type(self).__name__}(cells_per_dim={counts})"


class SimplicialComplex(Complex):
    """Face-closed collection of simplices."""
    cell_type = Simplex


class CubicalComplex(Complex):
    """Face-closed collection of elementary cubes."""
    cell_type = Cube

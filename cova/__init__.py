"""
cova: Combinatorial Topology Toolkit

Cell complexes, homology over arbitrary coefficient fields, Vietoris-Rips
filtrations of point clouds, and cellular sheaves.

Key components:
- algebra: Coefficient fields and field-generic row reduction
- topology: Cells, complexes, chains, homology, graphs/posets, clouds,
  filtrations and sheaves
- core: Error hierarchy and cell handle registry
- config: Numeric defaults (tolerances, worker counts)
"""

import logging

__version__ = "0.1.0"
__author__ = "cova Team"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from cova.core.errors import CovaError, ConstructionError, DimensionMismatch, CellLookupError
from cova.core.registry import CellHandle
from cova.algebra.field import (
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
from cova.topology.cell import Simplex, Cube
from cova.topology.complex import SimplicialComplex, CubicalComplex
from cova.topology.chain import Chain
from cova.topology.homology import HomologyEngine
from cova.topology.graph import Vertex, Edge, UndirectedGraph, DirectedGraph
from cova.topology.lattice import Lattice
from cova.topology.cloud import Cloud
from cova.topology.filtration import VietorisRips, betti_curves
from cova.topology.sheaf import Sheaf

__all__ = [
    # Errors
    "CovaError",
    "ConstructionError",
    "DimensionMismatch",
    "CellLookupError",
    # Fields
    "GF2Field",
    "PrimeField",
    "RealField",
    "RationalField",
    "gf2",
    "prime_field",
    "real_field",
    "rational_field",
    "get_field",
    # Complexes
    "CellHandle",
    "Simplex",
    "Cube",
    "SimplicialComplex",
    "CubicalComplex",
    "Chain",
    "HomologyEngine",
    # Order structures
    "Vertex",
    "Edge",
    "UndirectedGraph",
    "DirectedGraph",
    "Lattice",
    # Filtrations and sheaves
    "Cloud",
    "VietorisRips",
    "betti_curves",
    "Sheaf",
]

"""
Topology module: cells, complexes, chains, homology, graphs, filtrations, sheaves.
"""

from cova.topology.cell import Cell, Simplex, Cube
from cova.topology.graph import Vertex, Edge, UndirectedGraph, DirectedGraph
from cova.topology.lattice import Lattice
from cova.topology.complex import Complex, SimplicialComplex, CubicalComplex
from cova.topology.chain import Chain
from cova.topology.homology import HomologyEngine, incidence_matrix, boundary_matrix, homology, betti_numbers
from cova.topology.cloud import Cloud
from cova.topology.filtration import Filtration, VietorisRips, betti_curves
from cova.topology.sheaf import Sheaf

__all__ = [
    "Cell",
    "Simplex",
    "Cube",
    "Vertex",
    "Edge",
    "UndirectedGraph",
    "DirectedGraph",
    "Lattice",
    "Complex",
    "SimplicialComplex",
    "CubicalComplex",
    "Chain",
    "HomologyEngine",
    "incidence_matrix",
    "boundary_matrix",
    "homology",
    "betti_numbers",
    "Cloud",
    "Filtration",
    "VietorisRips",
    "betti_curves",
    "Sheaf",
]

"""
cova/topology/filtration.py

Threshold filtrations of point clouds.

A filtration maps a non-negative radius r to a complex K(r) with
K(r1) ⊆ K(r2) whenever r1 <= r2. Each requested radius is built from
scratch from the shared read-only cloud; no state is carried between
radii, which is what lets build_parallel fan radii out to workers.

Vietoris-Rips:
- vertices: every point
- edges: pairs at distance <= r
- k-simplices: (k+1)-cliques of the edge graph (flag complex)

Simplices are generated dimension by dimension in ascending lexicographic
vertex order, so the same cloud and radius always yield the same handle
assignment regardless of which worker built it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from cova.algebra.field import Field
from cova.config import CONFIG
from cova.topology.cell import Simplex
from cova.topology.cloud import Cloud
from cova.topology.complex import Complex, SimplicialComplex
from cova.topology.graph import UndirectedGraph
from cova.topology.homology import HomologyEngine

logger = logging.getLogger(__name__)


class Filtration(ABC):
    """
    Radius-indexed family of complexes built from a cloud.

    Subclasses implement `build`; serial and parallel sweeps over several
    radii are shared.
    """

    def __init__(self, use_processes: bool = False):
        self.use_processes = use_processes

    @abstractmethod
    def build(self, cloud: Cloud, radius: float, config: Any = None) -> Complex:
        """Build the complex at one radius. `config` is reserved."""

    def build_serial(
        self,
        cloud: Cloud,
        radii: Iterable[float],
        config: Any = None,
    ) -> List[Tuple[float, Complex]]:
        """One independent complex per radius, in request order."""
        return [(r, self.build(cloud, r, config)) for r in radii]

    def build_parallel(
        self,
        cloud: Cloud,
        radii: Iterable[float],
        config: Any = None,
        max_workers: Optional[int] = None,
    ) -> List[Tuple[float, Complex]]:
        """
        Same output as build_serial, with radii built concurrently.

        Each task is tagged with its request index; results are gathered
        into that slot as they complete, so completion order never leaks
        into the output.
        """
        radii = list(radii)
        if not radii:
            return []
        if max_workers is None:
            max_workers = CONFIG["filtration"]["max_workers"]

        executor_cls = ProcessPoolExecutor if self.use_processes else ThreadPoolExecutor
        results: List[Optional[Tuple[float, Complex]]] = [None] * len(radii)

        with executor_cls(max_workers=max_workers) as executor:
            futures: Dict[Any, int] = {
                executor.submit(self.build, cloud, r, config): i
                for i, r in enumerate(radii)
            }
            for fut in as_completed(futures):
                i = futures[fut]
                results[i] = (radii[i], fut.result())

        return results


class VietorisRips(Filtration):
    """
    Vietoris-Rips (flag) complexes.

    Args:
        max_dimension: Largest simplex dimension generated; None for the
            full flag complex.
        use_processes: Run build_parallel on a process pool instead of threads.
    """

    def __init__(self, max_dimension: Optional[int] = None, use_processes: bool = False):
        super().__init__(use_processes=use_processes)
        if max_dimension is None:
            max_dimension = CONFIG["filtration"]["max_dimension"]
        if max_dimension is not None and max_dimension < 0:
            raise ValueError(f"max_dimension must be non-negative, got {max_dimension}")
        self.max_dimension = max_dimension

    def neighborhood_graph(self, cloud: Cloud, radius: float) -> UndirectedGraph:
        """Graph on point indices with an edge for every pair at distance <= radius."""
        n = len(cloud)
        graph = UndirectedGraph(vertices=range(n))
        if n < 2:
            return graph
        close = np.triu(cloud.distance_matrix() <= radius, k=1)
        for i, j in np.argwhere(close):
            graph.add_edge(int(i), int(j))
        return graph

    def build(self, cloud: Cloud, radius: float, config: Any = None) -> SimplicialComplex:
        if radius < 0:
            raise ValueError(f"filtration radius must be non-negative, got {radius}")

        cx = SimplicialComplex()
        n = len(cloud)
        if n == 0:
            return cx

        graph = self.neighborhood_graph(cloud, radius)
        nbrs = {v: graph.neighborhood(v) for v in range(n)}

        layer: List[Tuple[int, ...]] = [(v,) for v in range(n)]
        for sigma in layer:
            cx.join_element(Simplex(0, sigma))

        dim = 0
        while layer and (self.max_dimension is None or dim < self.max_dimension):
            nxt: List[Tuple[int, ...]] = []
            for sigma in layer:
                # Extend by larger vertices adjacent to every vertex of sigma
                common = set.intersection(*(nbrs[v] for v in sigma))
                for v in sorted(u for u in common if u > sigma[-1]):
                    nxt.append(sigma + (v,))
            dim += 1
            for tau in nxt:
                cx.join_element(Simplex(dim, tau))
            layer = nxt

        logger.debug("Vietoris-Rips r=%s: %r", radius, cx)
        return cx


def betti_curves(
    filtration: Filtration,
    cloud: Cloud,
    radii: Iterable[float],
    field: Optional[Field] = None,
    parallel: bool = False,
) -> List[Tuple[float, Tuple[int, ...]]]:
    """
    Betti numbers of the filtration at each radius.

    Returns:
        [(radius, (β_0, ..., β_top)), ...] in request order
    """
    engine = HomologyEngine(field)
    built = filtration.build_parallel(cloud, radii) if parallel else filtration.build_serial(cloud, radii)
    return [(r, engine.betti_numbers(cx)) for r, cx in built]

"""
cova/topology/graph.py

Vertex/edge graphs backed by networkx.

- UndirectedGraph: edges stored in canonical (sorted) order, so (a, b) and
  (b, a) name the same edge.
- DirectedGraph: edges keep their orientation.

Both answer membership for Vertex and Edge queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Optional, Set, Tuple, Union

import networkx as nx

from cova.core.errors import ConstructionError


@dataclass(frozen=True)
class Vertex:
    """Vertex query / label wrapper."""
    label: Hashable


@dataclass(frozen=True)
class Edge:
    """Edge query between two vertex labels (orientation used by DirectedGraph only)."""
    source: Hashable
    target: Hashable

    def canonical(self) -> "Edge":
        a, b = self.source, self.target
        try:
            ordered = a <= b
        except TypeError as e:
            raise ConstructionError(f"Edge endpoints {a!r} and {b!r} are not mutually ordered") from e
        return self if ordered else Edge(b, a)


VertexOrEdge = Union[Vertex, Edge]


class UndirectedGraph:
    """
    Undirected simple graph.

    Every edge must join two existing vertices; edges are normalized so the
    smaller label comes first.
    """

    def __init__(self, vertices: Iterable[Hashable] = (), edges: Iterable[Tuple[Hashable, Hashable]] = ()):
        self.g = nx.Graph()
        for v in vertices:
            self.g.add_node(v)
        for a, b in edges:
            self.add_edge(a, b)

    def add_vertex(self, v: Hashable) -> None:
        self.g.add_node(v)

    def add_edge(self, a: Hashable, b: Hashable) -> Tuple[Hashable, Hashable]:
        """Add an edge between existing vertices; returns its canonical form."""
        if a not in self.g or b not in self.g:
            raise ConstructionError(f"Edge ({a}, {b}) must join existing vertices")
        e = Edge(a, b).canonical()
        self.g.add_edge(e.source, e.target)
        return (e.source, e.target)

    @property
    def vertices(self) -> Set[Hashable]:
        return set(self.g.nodes())

    @property
    def edges(self) -> Set[Tuple[Hashable, Hashable]]:
        """Edge set in canonical (sorted) order."""
        out = set()
        for a, b in self.g.edges():
            e = Edge(a, b).canonical()
            out.add((e.source, e.target))
        return out

    def points(self) -> Set[Hashable]:
        return self.vertices

    def contains(self, item: VertexOrEdge) -> bool:
        """Membership of a Vertex or an Edge (either orientation)."""
        if isinstance(item, Vertex):
            return item.label in self.g
        if isinstance(item, Edge):
            return self.g.has_edge(item.source, item.target)
        return False

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    def neighborhood(self, v: Hashable) -> Set[Hashable]:
        """Vertices adjacent to v (empty for unknown v)."""
        if v not in self.g:
            return set()
        return set(self.g.neighbors(v))

    def distance(self, a: Hashable, b: Hashable) -> Optional[int]:
        """Hop distance, or None when b is unreachable from a."""
        try:
            return nx.shortest_path_length(self.g, source=a, target=b)
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            return None

    def __len__(self) -> int:
        return self.g.number_of_nodes()

    def __repr__(self) -> str:
        return f"UndirectedGraph(vertices={self.g.number_of_nodes()}, edges={self.g.number_of_edges()})"


class DirectedGraph:
    """Directed simple graph; Edge(a, b) and Edge(b, a) are distinct."""

    def __init__(self, vertices: Iterable[Hashable] = (), edges: Iterable[Tuple[Hashable, Hashable]] = ()):
        self.g = nx.DiGraph()
        for v in vertices:
            self.g.add_node(v)
        for a, b in edges:
            self.add_edge(a, b)

    def add_vertex(self, v: Hashable) -> None:
        self.g.add_node(v)

    def add_edge(self, a: Hashable, b: Hashable) -> Tuple[Hashable, Hashable]:
        if a not in self.g or b not in self.g:
            raise ConstructionError(f"Edge ({a}, {b}) must join existing vertices")
        self.g.add_edge(a, b)
        return (a, b)

    @property
    def vertices(self) -> Set[Hashable]:
        return set(self.g.nodes())

    @property
    def edges(self) -> Set[Tuple[Hashable, Hashable]]:
        return set(self.g.edges())

    def contains(self, item: VertexOrEdge) -> bool:
        if isinstance(item, Vertex):
            return item.label in self.g
        if isinstance(item, Edge):
            return self.g.has_edge(item.source, item.target)
        return False

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    def successors(self, v: Hashable) -> Set[Hashable]:
        if v not in self.g:
            return set()
        return set(self.g.successors(v))

    def reachable(self, a: Hashable, b: Hashable) -> bool:
        """True if a directed path leads from a to b (a reaches itself)."""
        if a not in self.g or b not in self.g:
            return False
        return nx.has_path(self.g, a, b)

    def __len__(self) -> int:
        return self.g.number_of_nodes()

    def __repr__(self) -> str:
        return f"DirectedGraph(vertices={self.g.number_of_nodes()}, edges={self.g.number_of_edges()})"

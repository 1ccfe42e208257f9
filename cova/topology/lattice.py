"""
cova/topology/lattice.py

Finite posets given by their direct (covering) relations.

Relations are stored exactly as added; the transitive closure is never
materialized. `leq` walks the relation graph per query (O(V + E)), which
keeps `add_relation` O(1).
"""

from __future__ import annotations

from typing import Hashable, Optional, Set

import networkx as nx


class Lattice:
    """
    Partially ordered set with order queries by reachability.

    `a <= b` holds when b is reachable from a along direct relations
    (reflexively, a <= a). Join and meet are returned only when a least
    upper / greatest lower bound exists.
    """

    def __init__(self):
        self.g = nx.DiGraph()

    def add_element(self, a: Hashable) -> None:
        self.g.add_node(a)

    def add_relation(self, a: Hashable, b: Hashable) -> None:
        """Record a <= b as a direct relation (adds missing elements)."""
        self.g.add_edge(a, b)

    @property
    def elements(self) -> Set[Hashable]:
        return set(self.g.nodes())

    def __contains__(self, a: Hashable) -> bool:
        return a in self.g

    def __len__(self) -> int:
        return self.g.number_of_nodes()

    def leq(self, a: Hashable, b: Hashable) -> bool:
        """a <= b; False if either element is unknown."""
        if a not in self.g or b not in self.g:
            return False
        if a == b:
            return True
        return nx.has_path(self.g, a, b)

    def lt(self, a: Hashable, b: Hashable) -> bool:
        return a != b and self.leq(a, b)

    def upset(self, a: Hashable) -> Set[Hashable]:
        """All b with a <= b."""
        if a not in self.g:
            return set()
        return nx.descendants(self.g, a) | {a}

    def downset(self, a: Hashable) -> Set[Hashable]:
        """All b with b <= a."""
        if a not in self.g:
            return set()
        return nx.ancestors(self.g, a) | {a}

    def minimal_elements(self) -> Set[Hashable]:
        return {v for v in self.g.nodes() if not any(u != v for u in self.g.predecessors(v))}

    def maximal_elements(self) -> Set[Hashable]:
        return {v for v in self.g.nodes() if not any(u != v for u in self.g.successors(v))}

    def join(self, a: Hashable, b: Hashable) -> Optional[Hashable]:
        """Least upper bound of a and b, or None."""
        common = self.upset(a) & self.upset(b)
        for c in common:
            if all(self.leq(c, u) for u in common):
                return c
        return None

    def meet(self, a: Hashable, b: Hashable) -> Optional[Hashable]:
        """Greatest lower bound of a and b, or None."""
        common = self.downset(a) & self.downset(b)
        for c in common:
            if all(self.leq(l, c) for l in common):
                return c
        return None

    def is_partial_order(self) -> bool:
        """True when the relations (ignoring self-loops) admit no cycle."""
        h = self.g.copy()
        h.remove_edges_from(list(nx.selfloop_edges(h)))
        return nx.is_directed_acyclic_graph(h)

    def __repr__(self) -> str:
        return f"Lattice(elements={self.g.number_of_nodes()}, relations={self.g.number_of_edges()})"

"""
Tests for graphs and posets.
"""

import pytest

from cova.core.errors import ConstructionError
from cova.topology.graph import DirectedGraph, Edge, UndirectedGraph, Vertex
from cova.topology.lattice import Lattice


class TestUndirectedGraph:
    def test_edge_membership_is_orientation_free(self):
        g = UndirectedGraph(vertices=[50, 51])
        g.add_edge(50, 51)
        assert g.contains(Edge(50, 51))
        assert g.contains(Edge(51, 50))
        assert Vertex(50) in g
        assert Vertex(52) not in g

    def test_edges_are_canonical(self):
        g = UndirectedGraph(vertices="abc", edges=[("c", "a"), ("b", "a")])
        assert g.edges == {("a", "c"), ("a", "b")}

    def test_add_edge_requires_vertices(self):
        g = UndirectedGraph(vertices=[0])
        with pytest.raises(ConstructionError):
            g.add_edge(0, 1)

    def test_unordered_endpoints_raise(self):
        g = UndirectedGraph(vertices=[0, "a"])
        with pytest.raises(ConstructionError):
            g.add_edge(0, "a")

    def test_neighborhood(self):
        g = UndirectedGraph(vertices=range(4), edges=[(0, 1), (0, 2), (2, 3)])
        assert g.neighborhood(0) == {1, 2}
        assert g.neighborhood(3) == {2}
        assert g.neighborhood(99) == set()

    def test_distance(self):
        g = UndirectedGraph(vertices=range(5), edges=[(0, 1), (1, 2), (2, 3)])
        assert g.distance(0, 3) == 3
        assert g.distance(3, 0) == 3
        assert g.distance(2, 2) == 0
        assert g.distance(0, 4) is None
        assert g.distance(0, 99) is None


class TestDirectedGraph:
    def test_orientation_matters(self):
        g = DirectedGraph(vertices=[1, 2], edges=[(1, 2)])
        assert g.contains(Edge(1, 2))
        assert not g.contains(Edge(2, 1))

    def test_reachable(self):
        g = DirectedGraph(vertices=range(3), edges=[(0, 1), (1, 2)])
        assert g.reachable(0, 2)
        assert not g.reachable(2, 0)
        assert g.successors(0) == {1}


class TestLattice:
    def test_leq_follows_chains_of_relations(self):
        lat = Lattice()
        for i in range(50):
            lat.add_relation(i, i + 1)
        assert lat.leq(0, 25)
        assert lat.leq(0, 50)
        assert not lat.leq(25, 0)
        assert lat.leq(7, 7)
        assert lat.lt(3, 4)
        assert not lat.lt(4, 4)

    def test_relations_are_not_closed_eagerly(self):
        lat = Lattice()
        lat.add_relation("a", "b")
        lat.add_relation("b", "c")
        assert lat.g.number_of_edges() == 2
        assert lat.leq("a", "c")

    def test_unknown_elements(self):
        lat = Lattice()
        lat.add_element("x")
        assert not lat.leq("x", "y")
        assert lat.upset("y") == set()

    def test_join_and_meet_on_diamond(self):
        lat = Lattice()
        for a, b in [("bot", "l"), ("bot", "r"), ("l", "top"), ("r", "top")]:
            lat.add_relation(a, b)
        assert lat.join("l", "r") == "top"
        assert lat.meet("l", "r") == "bot"
        assert lat.join("bot", "l") == "l"
        assert lat.minimal_elements() == {"bot"}
        assert lat.maximal_elements() == {"top"}

    def test_join_missing_without_upper_bound(self):
        lat = Lattice()
        lat.add_relation(0, 1)
        lat.add_relation(0, 2)
        assert lat.join(1, 2) is None
        assert lat.meet(1, 2) == 0

    def test_is_partial_order(self):
        lat = Lattice()
        lat.add_relation(0, 1)
        lat.add_relation(1, 1)
        assert lat.is_partial_order()
        lat.add_relation(1, 0)
        assert not lat.is_partial_order()

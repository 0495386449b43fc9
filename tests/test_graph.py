"""Tests for the graph data layer."""

import pytest

from algoviz.graph import Edge, Graph, Node


def edge_between(graph, a, b):
    """First edge joining a and b, seen from a's adjacency."""
    return next((edge for nbr, edge in graph.neighbours(a) if nbr == b), None)


class TestBuilding:
    def test_edge_ids_follow_creation_order(self, cycle_graph):
        assert list(cycle_graph.edges) == ["e0", "e1", "e2", "e3"]

    def test_neighbours_in_insertion_order(self, cycle_graph):
        assert [nbr for nbr, _ in cycle_graph.neighbours("A")] == ["B", "D"]
        assert [nbr for nbr, _ in cycle_graph.neighbours("C")] == ["B", "D"]

    def test_edges_are_undirected(self):
        g = Graph()
        g.create_node("A")
        g.create_node("B")
        edge = g.create_edge("A", "B", 3)
        assert edge_between(g, "B", "A") is edge
        assert edge_between(g, "A", "B") is edge

    def test_parallel_edges_are_kept(self):
        g = Graph()
        g.create_node("A")
        g.create_node("B")
        g.create_edge("A", "B", 2)
        g.create_edge("B", "A", 5)
        assert g.edge_count() == 2
        assert len(g.neighbours("A")) == 2
        assert edge_between(g, "A", "B").weight == 2

    def test_edge_to_unknown_node_rejected(self):
        g = Graph()
        g.create_node("A")
        with pytest.raises(ValueError):
            g.create_edge("A", "Q")

    def test_missing_lookups(self, cycle_graph):
        assert cycle_graph.get_node("Z") is None
        assert "e99" not in cycle_graph.edges
        assert edge_between(cycle_graph, "A", "C") is None
        assert cycle_graph.neighbours("Z") == []

    def test_reachable_from(self, weighted_graph):
        assert weighted_graph.reachable_from("A") == ["A", "B", "C", "D"]
        assert weighted_graph.reachable_from("E") == ["E"]
        assert weighted_graph.reachable_from("Z") == []


class TestGeneration:
    def test_letter_ids(self):
        assert Graph.letter_ids(3) == ["A", "B", "C"]
        with pytest.raises(ValueError):
            Graph.letter_ids(27)

    def test_circular_layout_positions(self):
        g = Graph.circular_layout(4, center=(100, 100), radius=50)
        a, b = g.get_node("A"), g.get_node("B")
        assert (a.x, a.y) == pytest.approx((150, 100))
        assert (b.x, b.y) == pytest.approx((100, 150))
        assert g.edge_count() == 0

    @pytest.mark.parametrize("n", [4, 7, 12])
    def test_ring_links(self, n):
        g = Graph.generate_random(num_nodes=n, extra_link_probability=0.0, seed=1)
        ids = g.node_ids()
        assert g.edge_count() == 2 * n
        for i in range(n):
            assert edge_between(g, ids[i], ids[(i + 1) % n]) is not None
            assert edge_between(g, ids[i], ids[(i + 2) % n]) is not None

    @pytest.mark.parametrize("seed", range(5))
    def test_generated_graphs_are_connected(self, seed):
        g = Graph.generate_random(num_nodes=9, seed=seed)
        assert g.reachable_from("A") == g.node_ids()

    def test_weights_in_range(self):
        g = Graph.generate_random(num_nodes=10, weight_range=(2, 4), seed=3)
        assert all(2 <= e.weight <= 4 for e in g.edges.values())

    def test_extra_links_avoid_ring_neighbours(self):
        g = Graph.generate_random(num_nodes=8, extra_link_probability=1.0, seed=2)
        assert g.edge_count() == 3 * 8
        for edge in g.edges.values():
            assert edge.source != edge.target

    def test_seed_is_deterministic(self):
        a = Graph.generate_random(num_nodes=8, seed=42)
        b = Graph.generate_random(num_nodes=8, seed=42)
        assert a.to_dict() == b.to_dict()


class TestSerialisation:
    def test_round_trip(self):
        g = Graph.generate_random(num_nodes=6, seed=9)
        copy = Graph.from_dict(g.to_dict())
        assert copy.to_dict() == g.to_dict()
        assert [n for n, _ in copy.neighbours("A")] == [n for n, _ in g.neighbours("A")]

    def test_node_and_edge_dicts(self):
        node = Node.from_dict({"id": "A", "x": 1.0, "y": 2.0})
        assert node.label == "A"
        edge = Edge.from_dict({"id": "e0", "source": "A", "target": "B"})
        assert edge.weight == 1

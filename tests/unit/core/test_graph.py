"""Unit tests for the NetworkX-backed graph view."""

import pytest

from techgraph.core.graph import TechGraph
from techgraph.core.types import Edge, EdgeKind, Node


@pytest.fixture
def graph():
    nodes = [
        Node(id="Acme", kind="company"),
        Node(id="Figma", kind="design"),
        Node(id="Sketch", kind="design"),
        Node(id="Miro", kind="whiteboard"),
    ]
    edges = [
        Edge(id="e-Acme-Figma", source="Acme", target="Figma", kind=EdgeKind.USAGE),
        Edge(id="e-Acme-Sketch", source="Acme", target="Sketch", kind=EdgeKind.USAGE),
        Edge(id="e-Acme-Ghost", source="Acme", target="Ghost", kind=EdgeKind.USAGE),
    ]
    return TechGraph(nodes, edges)


class TestTechGraph:
    def test_unknown_endpoints_are_ignored(self, graph):
        assert graph.edge_count == 2
        assert graph.node_count == 4

    def test_top_connected_skips_isolated(self, graph):
        assert graph.top_connected(2) == [("Acme", 2), ("Figma", 1)]
        assert ("Miro", 0) not in graph.top_connected(10)

    def test_components_and_isolated(self, graph):
        assert graph.components() == [{"Acme", "Figma", "Sketch"}]
        assert graph.isolated() == ["Miro"]

    def test_stats(self, graph):
        stats = graph.get_stats()

        assert stats["total_nodes"] == 4
        assert stats["total_edges"] == 2
        assert stats["nodes_by_kind"] == {"company": 1, "design": 2, "whiteboard": 1}
        assert stats["edges_by_kind"] == {"usage": 2}
        assert stats["components"] == 1
        assert stats["isolated"] == 1

    def test_edges_keep_their_records(self, graph):
        assert {e.id for e in graph.iter_edges()} == {"e-Acme-Figma", "e-Acme-Sketch"}

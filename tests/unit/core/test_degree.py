"""Unit tests for connection counting and node sizing."""

import math

from techgraph.core.degree import count_degrees, node_scale, node_size
from techgraph.core.types import Edge, EdgeKind


def edge(a, b):
    return Edge(id=f"e-{a}-{b}", source=a, target=b, kind=EdgeKind.USAGE)


class TestCountDegrees:
    def test_counts_both_endpoints(self):
        degree = count_degrees([edge("A", "B"), edge("A", "C")])
        assert degree == {"A": 2, "B": 1, "C": 1}

    def test_no_edges(self):
        assert count_degrees([]) == {}


class TestNodeSize:
    def test_unconnected_node_has_floor_of_one(self):
        assert node_size({}, "A") == 1
        assert node_size({"A": 0}, "A") == 1

    def test_connected_node_uses_degree(self):
        assert node_size({"A": 4}, "A") == 4

    def test_scale_is_logarithmic(self):
        assert node_scale(1) == math.log(10)
        assert node_scale(10) == math.log(100)
        assert node_scale(0) == math.log(10)

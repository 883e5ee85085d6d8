"""
Read-only graph view over one edge set.

Wraps NetworkX so the summary statistics behind `techgraph stats`
(components, isolated nodes, most connected nodes, density) come from a
proper graph structure. The session stays the owner of nodes and edges;
this view is rebuilt from a snapshot whenever it is needed.
"""

from collections import defaultdict
from typing import Any, Dict, Iterator, List, Sequence, Set, Tuple

import networkx as nx

from .types import Edge, Node


class TechGraph:
    """Undirected graph of nodes and the active edge set."""

    def __init__(self, nodes: Sequence[Node] = (), edges: Sequence[Edge] = ()):
        self._graph = nx.Graph()
        self._nodes_by_kind: Dict[str, Set[str]] = defaultdict(set)
        for node in nodes:
            self.add_node(node)
        for edge in edges:
            self.add_edge(edge)

    def add_node(self, node: Node) -> None:
        self._graph.add_node(node.id)
        self._nodes_by_kind[node.kind].add(node.id)

    def add_edge(self, edge: Edge) -> None:
        """Add an edge between two known nodes; unknown endpoints are ignored."""
        if edge.source not in self._graph or edge.target not in self._graph:
            return
        self._graph.add_edge(edge.source, edge.target, data=edge)

    def top_connected(self, limit: int = 10) -> List[Tuple[str, int]]:
        """Most connected nodes, ties broken by id."""
        ranked = sorted(self._graph.degree(), key=lambda item: (-item[1], item[0]))
        return [(node_id, deg) for node_id, deg in ranked[:limit] if deg > 0]

    def components(self) -> List[Set[str]]:
        """Connected components with at least one edge, largest first."""
        comps = [c for c in nx.connected_components(self._graph) if len(c) > 1]
        return sorted(comps, key=len, reverse=True)

    def isolated(self) -> List[str]:
        return sorted(nx.isolates(self._graph))

    def iter_edges(self) -> Iterator[Edge]:
        for _, _, data in self._graph.edges(data=True):
            edge = data.get("data")
            if edge:
                yield edge

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def get_stats(self) -> Dict[str, Any]:
        edge_counts: Dict[str, int] = defaultdict(int)
        for edge in self.iter_edges():
            edge_counts[edge.kind.value] += 1

        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "nodes_by_kind": {kind: len(ids) for kind, ids in sorted(self._nodes_by_kind.items())},
            "edges_by_kind": dict(edge_counts),
            "components": len(self.components()),
            "isolated": len(self.isolated()),
            "density": round(nx.density(self._graph), 4) if self.node_count > 1 else 0.0,
        }

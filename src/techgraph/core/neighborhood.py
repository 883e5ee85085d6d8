"""
Neighborhood expansion around a selected node.

Selection drives highlighting: the selected node and its direct
neighbors render at full weight, second-hop neighbors are faded, and
everything else is dimmed. The classification is recomputed from scratch
on every selection or edge-set change and never mutates nodes or edges;
opacity is a presentation overlay derived from it.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Sequence, Set

from ..config import HighlightSettings
from .types import Edge

HOP_LIMITS = (1, 2)


@dataclass(frozen=True)
class Neighborhood:
    """First- and second-hop membership for one selection."""
    selected: Optional[str] = None
    hop_limit: int = 1
    first_nodes: FrozenSet[str] = field(default_factory=frozenset)
    first_edges: FrozenSet[str] = field(default_factory=frozenset)
    second_nodes: FrozenSet[str] = field(default_factory=frozenset)
    second_edges: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def active(self) -> bool:
        """True when a selection exists and dimming applies."""
        return self.selected is not None

    def node_opacity(self, node_id: str, settings: HighlightSettings) -> float:
        if not self.active:
            return 1.0
        if node_id == self.selected or node_id in self.first_nodes:
            return 1.0
        if node_id in self.second_nodes:
            return settings.second_hop_node_opacity
        return settings.dimmed_node_opacity

    def edge_opacity(self, edge_id: str, settings: HighlightSettings) -> float:
        if not self.active:
            return 1.0
        if edge_id in self.first_edges:
            return 1.0
        if edge_id in self.second_edges:
            return settings.second_hop_edge_opacity
        return settings.dimmed_edge_opacity


def expand(selected_id: Optional[str], edges: Sequence[Edge], hop_limit: int = 1) -> Neighborhood:
    """
    Classify nodes and edges by hop distance from `selected_id`.

    First hop: edges touching the selection and both of their endpoints.
    Second hop (hop_limit=2): remaining edges touching a first-hop node;
    only endpoints not already first-hop are added, so nothing is demoted.
    An unknown id simply yields empty sets.
    """
    if hop_limit not in HOP_LIMITS:
        raise ValueError(f"hop_limit must be one of {HOP_LIMITS}, got {hop_limit}")

    if selected_id is None:
        return Neighborhood(hop_limit=hop_limit)

    first_nodes: Set[str] = set()
    first_edges: Set[str] = set()
    for edge in edges:
        if edge.touches(selected_id):
            first_edges.add(edge.id)
            first_nodes.add(edge.source)
            first_nodes.add(edge.target)

    second_nodes: Set[str] = set()
    second_edges: Set[str] = set()
    if hop_limit == 2:
        for edge in edges:
            if edge.id in first_edges:
                continue
            if edge.source not in first_nodes and edge.target not in first_nodes:
                continue
            second_edges.add(edge.id)
            for endpoint in (edge.source, edge.target):
                if endpoint not in first_nodes:
                    second_nodes.add(endpoint)

    return Neighborhood(
        selected=selected_id,
        hop_limit=hop_limit,
        first_nodes=frozenset(first_nodes),
        first_edges=frozenset(first_edges),
        second_nodes=frozenset(second_nodes),
        second_edges=frozenset(second_edges),
    )

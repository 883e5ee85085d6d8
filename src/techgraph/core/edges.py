"""
Edge derivation from the tabular dataset.

Two independent edge semantics are supported:
- Usage: a company node uses a tool (`Designtechs` column or per-node override).
- Interoperability: two non-company nodes interoperate (`Interoperability`
  column, comma-delimited).

Edges are undirected. Every edge id is built from the sorted endpoint
pair so (A, B) and (B, A) collapse to a single edge per mode. References
to unknown nodes, self-references and repeated pairs are dropped quietly:
the dataset is allowed to be partial or stale.
"""

import logging
from typing import Dict, Iterable, List, Sequence, Set

from .degree import count_degrees
from .types import DatasetRecord, Edge, EdgeBuildResult, EdgeKind, Node

logger = logging.getLogger(__name__)


def canonical_edge_id(a: str, b: str) -> str:
    """Direction-independent edge id for the pair (a, b)."""
    first, second = sorted((a, b))
    return f"e-{first}-{second}"


def _unique(items: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(items))


def parse_interoperability(value: str | None) -> List[str]:
    """Split a comma-delimited interoperability cell into trimmed tokens."""
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def usage_map(dataset: Sequence[DatasetRecord]) -> Dict[str, List[str]]:
    """Group dataset tools by record name, deduplicating each group."""
    grouped: Dict[str, List[str]] = {}
    for record in dataset:
        if not record.designtechs:
            continue
        grouped.setdefault(record.name, []).extend(record.designtechs)
    return {name: _unique(techs) for name, techs in grouped.items()}


def interoperability_map(dataset: Sequence[DatasetRecord]) -> Dict[str, List[str]]:
    """Parse each record's interoperability cell once, keyed by record name."""
    parsed: Dict[str, List[str]] = {}
    for record in dataset:
        tokens = parse_interoperability(record.interoperability)
        if not tokens:
            continue
        parsed.setdefault(record.name, []).extend(tokens)
    return {name: _unique(tokens) for name, tokens in parsed.items()}


class _EdgeCollector:
    """Accumulates edges for one build, enforcing the pair and id rules."""

    def __init__(self, nodes: Sequence[Node], kind: EdgeKind):
        self.kind = kind
        self.node_ids: Set[str] = {node.id for node in nodes}
        self.edges: List[Edge] = []
        self._seen: Set[str] = set()

    def add(self, source: str, target: str) -> None:
        if target == source:
            return
        if target not in self.node_ids:
            return

        edge_id = canonical_edge_id(source, target)
        if edge_id in self._seen:
            logger.debug(f"Skipping duplicate {self.kind} edge: {source} -> {target} ({edge_id})")
            return

        logger.debug(f"Adding {self.kind} edge: {source} -> {target} ({edge_id})")
        self._seen.add(edge_id)
        self.edges.append(Edge(id=edge_id, source=source, target=target, kind=self.kind))

    def result(self) -> EdgeBuildResult:
        return EdgeBuildResult(edges=self.edges, degree=count_degrees(self.edges))


def build_usage_edges(nodes: Sequence[Node], dataset: Sequence[DatasetRecord]) -> EdgeBuildResult:
    """
    Build company -> tool edges.

    A company's explicit `designtechs` list wins when non-empty; otherwise
    the dataset rows with the company's name are used.
    """
    designs = usage_map(dataset)
    collector = _EdgeCollector(nodes, EdgeKind.USAGE)

    for node in nodes:
        if not node.is_company:
            continue
        techs = node.designtechs or designs.get(node.id, [])
        for tech in techs:
            collector.add(node.id, tech)

    return collector.result()


def build_interop_edges(nodes: Sequence[Node], dataset: Sequence[DatasetRecord]) -> EdgeBuildResult:
    """Build tool <-> tool edges. Companies never originate these."""
    interops = interoperability_map(dataset)
    collector = _EdgeCollector(nodes, EdgeKind.INTEROPERABILITY)

    for node in nodes:
        if node.is_company:
            logger.debug(f"Skipping company node in interoperability mode: {node.id}")
            continue
        for target in interops.get(node.id, []):
            collector.add(node.id, target)

    return collector.result()


def build_edges(
    mode: EdgeKind,
    nodes: Sequence[Node],
    dataset: Sequence[DatasetRecord],
) -> EdgeBuildResult:
    """Build the full edge set for one mode."""
    if mode == EdgeKind.USAGE:
        return build_usage_edges(nodes, dataset)
    return build_interop_edges(nodes, dataset)

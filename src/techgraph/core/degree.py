"""
Connection counting.

Degree is a raw incidence count and drives node sizing. Any damping
happens at render time (see `node_scale`).
"""

import math
from collections import defaultdict
from typing import Dict, Iterable

from .types import Edge


def count_degrees(edges: Iterable[Edge]) -> Dict[str, int]:
    """Count edges touching each node. Nodes without edges are absent."""
    counts: Dict[str, int] = defaultdict(int)
    for edge in edges:
        counts[edge.source] += 1
        counts[edge.target] += 1
    return dict(counts)


def node_size(degree: Dict[str, int], node_id: str) -> int:
    """Size signal for a node; unconnected nodes get the floor of 1."""
    return degree.get(node_id) or 1


def node_scale(size: int) -> float:
    """Logarithmic visual scale so heavily connected nodes do not dominate."""
    return math.log(10 * max(size, 1))

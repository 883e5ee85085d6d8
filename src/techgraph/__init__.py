"""
techgraph: relationship graph of companies and design-technology tools.

Derives usage and interoperability edges from a tabular dataset, sizes
nodes by connection count, highlights neighborhoods around a selection
and drives a force-directed layout.
"""

__version__ = "0.1.0"

from .core.edges import build_interop_edges, build_usage_edges, canonical_edge_id
from .core.geometry import resolve_connector
from .core.neighborhood import expand
from .core.session import GraphSession
from .core.types import DatasetRecord, Edge, EdgeKind, Node

__all__ = [
    "build_interop_edges",
    "build_usage_edges",
    "canonical_edge_id",
    "resolve_connector",
    "expand",
    "GraphSession",
    "DatasetRecord",
    "Edge",
    "EdgeKind",
    "Node",
]

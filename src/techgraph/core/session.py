"""
Visualization session.

The session is the single writer of the node and edge collections. UI
events map onto its methods (select, toggle mode, filter kinds, arrange,
add a node, report measurements); the layout driver writes positions
through `move_node`. Each render pass asks for a `SceneView`, a derived
overlay that never mutates the underlying records.
"""

import logging
import time
from typing import Dict, List, Optional, Sequence, Set

from pydantic import BaseModel, Field

from ..config import TechGraphConfig
from .arrange import ArrangeCriterion, arrange
from .dataset import build_nodes
from .degree import node_scale, node_size
from .edges import build_edges
from .exceptions import NodeNotFoundError
from .geometry import ConnectorAnchors, connector_for
from .graph import TechGraph
from .neighborhood import Neighborhood, expand
from .types import DatasetRecord, Edge, EdgeKind, Node, Position, Size

logger = logging.getLogger(__name__)

USER_KIND = "user"
USER_NODE_LABEL = "right-click to name me"


class NodeView(BaseModel):
    id: str
    label: str
    kind: str
    position: Position
    size: int
    scale: float
    color: str
    editable: bool
    opacity: float = 1.0
    dimmed: bool = False
    hidden: bool = False


class EdgeView(BaseModel):
    id: str
    source: str
    target: str
    kind: EdgeKind
    color: str
    opacity: float = 1.0
    dimmed: bool = False
    hidden: bool = False
    anchors: Optional[ConnectorAnchors] = None


class KindFilter(BaseModel):
    """One entry of the kind filter panel."""
    kind: str
    color: str
    active: bool


class SceneView(BaseModel):
    """Everything the renderer needs for one pass."""
    mode: EdgeKind
    selected: Optional[str] = None
    hop_limit: int = 1
    nodes: List[NodeView] = Field(default_factory=list)
    edges: List[EdgeView] = Field(default_factory=list)
    kinds: List[KindFilter] = Field(default_factory=list)


class GraphSession:
    """In-memory state of one interactive graph session."""

    def __init__(
        self,
        records: Sequence[DatasetRecord],
        config: Optional[TechGraphConfig] = None,
        nodes: Optional[Sequence[Node]] = None,
        mode: EdgeKind = EdgeKind.USAGE,
    ):
        self.config = config or TechGraphConfig()
        self.records: List[DatasetRecord] = list(records)

        if nodes is None:
            nodes = build_nodes(self.records, self.config.dataset, self.config.viewport)
        self._nodes: Dict[str, Node] = {}
        for node in nodes:
            if node.id in self._nodes:
                raise ValueError(f"Duplicate node id: {node.id}")
            self._nodes[node.id] = node

        self.mode = mode
        self.selected_id: Optional[str] = None
        self.hop_limit = 1
        self.hidden_kinds: Set[str] = set()
        self._edges: List[Edge] = []
        self._degree: Dict[str, int] = {}

        self.rebuild_edges()

    # =========================================================================
    # Store access
    # =========================================================================

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges)

    @property
    def degree(self) -> Dict[str, int]:
        return dict(self._degree)

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def _require(self, node_id: str) -> Node:
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def move_node(self, node_id: str, position: Position) -> None:
        self._require(node_id).position = position

    def measure(self, node_id: str, width: float, height: float) -> None:
        """Record the rendered size of a node."""
        self._require(node_id).measured = Size(width=width, height=height)

    def graph(self) -> TechGraph:
        """Snapshot of the current nodes and edges as a NetworkX-backed view."""
        return TechGraph(self.nodes, self._edges)

    # =========================================================================
    # Edges
    # =========================================================================

    def rebuild_edges(self, mode: Optional[EdgeKind] = None) -> List[Edge]:
        """
        Replace the edge set with a fresh build for `mode` (default: current).

        The previous edges are discarded before building; node sizes are
        recomputed from the new degree map.
        """
        if mode is not None:
            self.mode = EdgeKind(mode)

        self._edges = []
        self._degree = {}

        result = build_edges(self.mode, self.nodes, self.records)
        self._edges = list(result.edges)
        self._degree = dict(result.degree)

        for node in self._nodes.values():
            node.size = node_size(self._degree, node.id)

        logger.info(f"Built {len(self._edges)} {self.mode} edges over {len(self._nodes)} nodes")
        return self.edges

    def toggle_mode(self) -> EdgeKind:
        """Switch between usage and interoperability edges."""
        next_mode = EdgeKind.INTEROPERABILITY if self.mode == EdgeKind.USAGE else EdgeKind.USAGE
        logger.info(f"Switching edge mode: {self.mode} -> {next_mode}")
        self.rebuild_edges(next_mode)
        return self.mode

    # =========================================================================
    # Selection and highlighting
    # =========================================================================

    def select(self, node_id: Optional[str]) -> None:
        """Select a node (None clears the selection)."""
        self.selected_id = node_id

    def set_hop_limit(self, hop_limit: int) -> None:
        if hop_limit not in (1, 2):
            raise ValueError(f"hop_limit must be 1 or 2, got {hop_limit}")
        self.hop_limit = hop_limit

    def toggle_hop_limit(self) -> int:
        self.hop_limit = 2 if self.hop_limit == 1 else 1
        return self.hop_limit

    def neighborhood(self) -> Neighborhood:
        return expand(self.selected_id, self._edges, self.hop_limit)

    # =========================================================================
    # Kind filtering
    # =========================================================================

    def kinds(self) -> List[KindFilter]:
        """Distinct node kinds in first-seen order with their colors."""
        colors: Dict[str, str] = {}
        for node in self._nodes.values():
            colors.setdefault(node.kind, node.color)
        return [
            KindFilter(kind=kind, color=color, active=kind not in self.hidden_kinds)
            for kind, color in colors.items()
        ]

    def toggle_kind(self, kind: str) -> bool:
        """Show or hide all nodes of a kind. Returns whether the kind is now visible."""
        if kind in self.hidden_kinds:
            self.hidden_kinds.discard(kind)
            return True
        self.hidden_kinds.add(kind)
        return False

    # =========================================================================
    # Node actions
    # =========================================================================

    def _new_node_id(self) -> str:
        stamp = int(time.time() * 1000)
        node_id = f"node_{stamp}"
        while node_id in self._nodes:
            stamp += 1
            node_id = f"node_{stamp}"
        return node_id

    def add_node(self, label: str = USER_NODE_LABEL, position: Optional[Position] = None) -> Node:
        """Add an editable user node. It joins the edge set on the next rebuild."""
        node = Node(
            id=self._new_node_id(),
            kind=USER_KIND,
            label=label,
            position=position or Position(x=50, y=50),
            color=self.config.dataset.fallback_color,
            editable=True,
        )
        self._nodes[node.id] = node
        logger.debug(f"Added user node {node.id}")
        return node

    def arrange(self, criterion: ArrangeCriterion | str) -> None:
        """Apply a one-shot arrangement to every node."""
        viewport = self.config.viewport
        positions = arrange(
            self.nodes,
            ArrangeCriterion(criterion),
            viewport.width,
            viewport.height,
            viewport.arrange_radius,
        )
        for node_id, position in positions.items():
            self._nodes[node_id].position = position

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self) -> SceneView:
        """Build the presentation overlay for the current state."""
        hood = self.neighborhood()
        highlight = self.config.highlight

        node_views = []
        for node in self._nodes.values():
            opacity = hood.node_opacity(node.id, highlight)
            node_views.append(NodeView(
                id=node.id,
                label=node.label,
                kind=node.kind,
                position=node.position.model_copy(),
                size=node.size,
                scale=node_scale(node.size),
                color=node.color,
                editable=node.editable,
                opacity=opacity,
                dimmed=opacity < 1,
                hidden=node.kind in self.hidden_kinds,
            ))

        edge_views = []
        for edge in self._edges:
            source = self._nodes.get(edge.source)
            target = self._nodes.get(edge.target)
            if source is None or target is None:
                continue
            opacity = hood.edge_opacity(edge.id, highlight)
            edge_views.append(EdgeView(
                id=edge.id,
                source=edge.source,
                target=edge.target,
                kind=edge.kind,
                color=source.color,
                opacity=opacity,
                dimmed=opacity < 1,
                hidden=source.kind in self.hidden_kinds or target.kind in self.hidden_kinds,
                anchors=connector_for(source, target),
            ))

        return SceneView(
            mode=self.mode,
            selected=self.selected_id,
            hop_limit=self.hop_limit,
            nodes=node_views,
            edges=edge_views,
            kinds=self.kinds(),
        )

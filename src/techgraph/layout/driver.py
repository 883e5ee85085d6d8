"""
Layout Driver - continuous force layout over the session's node store.

The driver is the only adapter between the node store and the force
solver. It runs a cooperative tick loop on the host's frame scheduler:
every frame it syncs pins from the current drag, advances the solver one
step and writes positions back. The loop only reschedules itself while
running, and the running flag is checked at the top of each frame, so a
stop request lets the in-flight tick finish and nothing more.
"""

import logging
from collections import deque
from enum import StrEnum
from typing import Callable, Deque, Dict, List, Optional, Protocol, Tuple

from ..config import TechGraphConfig
from ..core.types import Edge, Node, Position
from .solver import ForceSolver, SolverLink, SolverNode, make_solver

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class NodeStore(Protocol):
    """The slice of the session the driver reads and writes."""

    @property
    def nodes(self) -> List[Node]: ...

    @property
    def edges(self) -> List[Edge]: ...

    def move_node(self, node_id: str, position: Position) -> None: ...


class FrameScheduler(Protocol):
    """Host hook that runs a callback on the next frame."""

    def request_frame(self, callback: FrameCallback) -> None: ...


class FrameLoop:
    """
    Single-threaded frame scheduler for headless hosts.

    Callbacks requested during a frame run on the following frame, which
    mirrors how an animation-frame API behaves.
    """

    def __init__(self):
        self._queue: Deque[FrameCallback] = deque()
        self.frame = 0

    def request_frame(self, callback: FrameCallback) -> None:
        self._queue.append(callback)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run_frame(self) -> bool:
        """Run every callback due this frame. Returns False if nothing was due."""
        if not self._queue:
            return False
        due = list(self._queue)
        self._queue.clear()
        self.frame += 1
        for callback in due:
            callback()
        return True

    def run(self, max_frames: int) -> int:
        """Run up to `max_frames` frames; returns how many actually ran."""
        ran = 0
        while ran < max_frames and self.run_frame():
            ran += 1
        return ran


class LayoutState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"


class LayoutDriver:
    """
    Drives a ForceSolver from a NodeStore.

    The driver is not initialized until every node has a measured size;
    until then toggling and ticking are no-ops.
    """

    def __init__(
        self,
        store: NodeStore,
        scheduler: FrameScheduler,
        solver: Optional[ForceSolver] = None,
        config: Optional[TechGraphConfig] = None,
    ):
        self.store = store
        self.scheduler = scheduler
        self.config = config or TechGraphConfig()
        if solver is None:
            viewport = self.config.viewport
            solver = make_solver(
                self.config.layout,
                center=(viewport.width / 2, viewport.height / 2),
                aspect_ratio=viewport.aspect_ratio,
            )
        self.solver = solver

        self.state = LayoutState.IDLE
        self.ticks = 0
        self._frame_pending = False
        self._dragging: Optional[Tuple[str, Position]] = None
        self._sim_nodes: Dict[str, SolverNode] = {}
        self._node_signature: Tuple[str, ...] = ()
        self._edge_signature: Tuple[str, ...] = ()

    # =========================================================================
    # State
    # =========================================================================

    @property
    def initialized(self) -> bool:
        nodes = self.store.nodes
        return bool(nodes) and all(node.measured is not None for node in nodes)

    @property
    def running(self) -> bool:
        return self.state == LayoutState.RUNNING

    def toggle(self) -> LayoutState:
        """Start or stop the simulation."""
        if not self.initialized:
            logger.debug("Layout toggle ignored: nodes not measured yet")
            return self.state

        if self.state == LayoutState.IDLE:
            # absorb any manual moves made while idle
            self._sync(from_store=True)
            self.state = LayoutState.RUNNING
            logger.debug("Layout running")
            self._schedule()
        else:
            self.state = LayoutState.IDLE
            logger.debug(f"Layout stopped after {self.ticks} ticks")
        return self.state

    # =========================================================================
    # Dragging
    # =========================================================================

    def drag_start(self, node_id: str, position: Position) -> None:
        self.drag(node_id, position)

    def drag(self, node_id: str, position: Position) -> None:
        """Pin a node to the drag position; the store follows the pointer."""
        self._dragging = (node_id, position)
        self.store.move_node(node_id, position)

    def drag_end(self, node_id: Optional[str] = None) -> None:
        """Release the pin; the node rejoins the simulation where it was dropped."""
        if self._dragging is None:
            return
        dragged_id, position = self._dragging
        if node_id is not None and node_id != dragged_id:
            return
        self._dragging = None
        sim = self._sim_nodes.get(dragged_id)
        if sim is not None:
            sim.unpin()
            sim.x, sim.y = position.x, position.y

    @property
    def dragging(self) -> Optional[str]:
        return self._dragging[0] if self._dragging else None

    # =========================================================================
    # Tick loop
    # =========================================================================

    def _schedule(self) -> None:
        # at most one frame in flight
        if self._frame_pending:
            return
        self._frame_pending = True
        self.scheduler.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._frame_pending = False
        if self.state != LayoutState.RUNNING:
            return
        self.tick()
        if self.state == LayoutState.RUNNING:
            self._schedule()

    def tick(self) -> bool:
        """Advance the solver one step. Returns False when not initialized."""
        if not self.initialized:
            return False

        self._sync(from_store=False)
        self._apply_pins()
        self.solver.tick()
        self.ticks += 1

        for node_id, sim in self._sim_nodes.items():
            if sim.pinned:
                continue
            self.store.move_node(node_id, Position(x=sim.x, y=sim.y))
        return True

    def _apply_pins(self) -> None:
        dragged_id = self.dragging
        for node_id, sim in self._sim_nodes.items():
            if node_id == dragged_id:
                position = self._dragging[1]
                sim.pin(position.x, position.y)
            elif sim.pinned:
                sim.unpin()

    def _sync(self, from_store: bool) -> None:
        """
        Reconcile solver state with the store.

        New nodes are added at their store position, removed nodes dropped.
        With `from_store`, every node's position is reset from the store
        while velocities are kept. Collision radii follow the latest measured
        sizes on every call. Links are rebuilt when the edge set changes.
        """
        nodes = self.store.nodes
        node_signature = tuple(node.id for node in nodes)
        nodes_changed = node_signature != self._node_signature

        if from_store or nodes_changed:
            synced: Dict[str, SolverNode] = {}
            for node in nodes:
                sim = self._sim_nodes.get(node.id)
                radius = _radius(node)
                if sim is None:
                    sim = SolverNode(id=node.id, x=node.position.x, y=node.position.y, radius=radius)
                elif from_store:
                    sim.x, sim.y = node.position.x, node.position.y
                sim.radius = radius
                synced[node.id] = sim
            self._sim_nodes = synced
            self._node_signature = node_signature
            self.solver.set_nodes(list(synced.values()))
        else:
            for node in nodes:
                self._sim_nodes[node.id].radius = _radius(node)

        edges = self.store.edges
        edge_signature = tuple(edge.id for edge in edges)
        if from_store or nodes_changed or edge_signature != self._edge_signature:
            self.solver.set_links([SolverLink(edge.source, edge.target) for edge in edges])
            self._edge_signature = edge_signature


def _radius(node: Node) -> float:
    if node.measured is None:
        return 0.0
    return max(node.measured.width, node.measured.height) / 2

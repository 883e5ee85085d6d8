"""
Force solver boundary.

The layout driver only talks to a `ForceSolver`: it hands over mutable
`SolverNode` objects and id-resolved links, then calls `tick()` once per
frame. Any force-directed engine offering repulsion, link springs,
centering and collision can sit behind this protocol.

Two engines ship with the package:
- `NetworkxForceSolver` (default) steps networkx's Fruchterman-Reingold
  `spring_layout` one frame at a time.
- `SimpleForceSolver` is a small pure-Python reference engine with the
  d3-force style charge/link/center/collide model, kept for hosts that
  want the exact force constants of the configuration.

Both share alpha cooling, aspect-weighted centering, collision and
velocity integration. Nodes with `fx`/`fy` set are held in place.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

import networkx as nx

from ..config import LayoutEngine, LayoutSettings

# Minimum squared distance between nodes, avoids infinite repulsion
_MIN_DISTANCE_SQ = 1.0


@dataclass
class SolverNode:
    """Mutable per-node simulation state."""
    id: str
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    fx: Optional[float] = None
    fy: Optional[float] = None
    radius: float = 0.0

    @property
    def pinned(self) -> bool:
        return self.fx is not None or self.fy is not None

    def pin(self, x: float, y: float) -> None:
        self.fx = x
        self.fy = y

    def unpin(self) -> None:
        self.fx = None
        self.fy = None


@dataclass(frozen=True)
class SolverLink:
    source: str
    target: str


class ForceSolver(Protocol):
    """What the layout driver needs from a force engine."""

    def set_nodes(self, nodes: Sequence[SolverNode]) -> None: ...

    def set_links(self, links: Sequence[SolverLink]) -> None: ...

    def tick(self) -> None: ...


class _BaseSolver:
    """Node/link bookkeeping, cooling, centering, collision and integration."""

    def __init__(
        self,
        settings: Optional[LayoutSettings] = None,
        center: Tuple[float, float] = (0.0, 0.0),
        aspect_ratio: float = 1.0,
    ):
        self.settings = settings or LayoutSettings()
        self.center = center
        self.alpha = 1.0

        modifier = aspect_ratio * self.settings.aspect_factor
        base = self.settings.centering_base_strength
        self.x_strength = base / modifier if modifier else base
        self.y_strength = base * modifier if modifier else base

        self._nodes: List[SolverNode] = []
        self._by_id: Dict[str, SolverNode] = {}
        self._links: List[Tuple[SolverNode, SolverNode, float]] = []
        self._pending_links: List[SolverLink] = []

    def set_nodes(self, nodes: Sequence[SolverNode]) -> None:
        self._nodes = list(nodes)
        self._by_id = {node.id: node for node in self._nodes}
        self._resolve_links()

    def set_links(self, links: Sequence[SolverLink]) -> None:
        self._pending_links = list(links)
        self._resolve_links()

    def _resolve_links(self) -> None:
        """Bind links to node objects; links to unknown nodes are dropped."""
        counts: Dict[str, int] = {}
        resolved = []
        for link in self._pending_links:
            source = self._by_id.get(link.source)
            target = self._by_id.get(link.target)
            if source is None or target is None or source is target:
                continue
            counts[source.id] = counts.get(source.id, 0) + 1
            counts[target.id] = counts.get(target.id, 0) + 1
            resolved.append((source, target))

        self._links = []
        for source, target in resolved:
            # heavier endpoints move less
            bias = counts[source.id] / (counts[source.id] + counts[target.id])
            self._links.append((source, target, bias))

    def tick(self) -> None:
        s = self.settings
        self.alpha += (s.alpha_target - self.alpha) * s.alpha_decay
        self._apply_forces()
        self._integrate()

    def _apply_forces(self) -> None:
        raise NotImplementedError

    def _integrate(self) -> None:
        keep = 1 - self.settings.velocity_decay
        for node in self._nodes:
            if node.fx is None:
                node.vx *= keep
                node.x += node.vx
            else:
                node.x = node.fx
                node.vx = 0.0
            if node.fy is None:
                node.vy *= keep
                node.y += node.vy
            else:
                node.y = node.fy
                node.vy = 0.0

    def _apply_centering(self) -> None:
        cx, cy = self.center
        kx = self.x_strength * self.alpha
        ky = self.y_strength * self.alpha
        for node in self._nodes:
            node.vx += (cx - node.x) * kx
            node.vy += (cy - node.y) * ky

    def _apply_collision(self) -> None:
        strength = self.settings.collide_strength
        nodes = self._nodes
        for i, a in enumerate(nodes):
            for b in nodes[i + 1:]:
                min_dist = a.radius + b.radius
                if min_dist <= 0:
                    continue
                dx = (b.x + b.vx) - (a.x + a.vx)
                dy = (b.y + b.vy) - (a.y + a.vy)
                dist = math.sqrt(dx * dx + dy * dy)
                if dist >= min_dist:
                    continue
                if dist == 0:
                    dx, dist = 1.0, 1.0
                push = (min_dist - dist) / dist * strength * 0.5
                a.vx -= dx * push
                a.vy -= dy * push
                b.vx += dx * push
                b.vy += dy * push


class NetworkxForceSolver(_BaseSolver):
    """
    Force engine backed by `networkx.spring_layout`.

    Every tick runs Fruchterman-Reingold from the current positions, with
    pinned nodes passed as `fixed` and `k` set to the link distance. networkx
    moves each free node a full temperature step along its net force, so
    only the direction of that move is kept: the step is capped at
    `link_distance * alpha` and cools with the simulation. Centering and
    collision are applied on top.
    """

    def _graph(self) -> nx.Graph:
        graph = nx.Graph()
        graph.add_nodes_from(node.id for node in self._nodes)
        graph.add_edges_from((source.id, target.id) for source, target, _ in self._links)
        return graph

    def _apply_forces(self) -> None:
        if len(self._nodes) > 1:
            self._apply_spring()
        self._apply_centering()
        self._apply_collision()

    def _apply_spring(self) -> None:
        s = self.settings
        pos = {
            node.id: (
                node.fx if node.fx is not None else node.x,
                node.fy if node.fy is not None else node.y,
            )
            for node in self._nodes
        }
        fixed = [node.id for node in self._nodes if node.pinned] or None
        layout = nx.spring_layout(
            self._graph(),
            k=s.link_distance,
            pos=pos,
            fixed=fixed,
            iterations=s.spring_iterations,
            scale=None,
        )

        max_step = s.link_distance * self.alpha
        for node in self._nodes:
            if node.pinned:
                continue
            tx, ty = layout[node.id]
            dx = float(tx) - node.x
            dy = float(ty) - node.y
            dist = math.hypot(dx, dy)
            if dist == 0:
                continue
            step = min(dist, max_step) / dist
            node.vx += dx * step
            node.vy += dy * step


class SimpleForceSolver(_BaseSolver):
    """
    Pure-Python reference engine.

    Forces:
    - charge: pairwise repulsion (negative strength)
    - x / y: springs toward the center, weighted by the aspect ratio so wide
      viewports spread horizontally
    - link: springs along edges toward a rest distance
    - collide: pushes apart nodes whose radii overlap
    """

    def _apply_forces(self) -> None:
        self._apply_charge()
        self._apply_centering()
        self._apply_links()
        self._apply_collision()

    def _apply_charge(self) -> None:
        strength = self.settings.charge_strength * self.alpha
        nodes = self._nodes
        for i, a in enumerate(nodes):
            for b in nodes[i + 1:]:
                dx = b.x - a.x
                dy = b.y - a.y
                dist_sq = max(dx * dx + dy * dy, _MIN_DISTANCE_SQ)
                if dx == 0 and dy == 0:
                    # coincident nodes: deterministic nudge apart
                    dx = 1.0
                w = strength / dist_sq
                a.vx += dx * w
                a.vy += dy * w
                b.vx -= dx * w
                b.vy -= dy * w

    def _apply_links(self) -> None:
        s = self.settings
        for source, target, bias in self._links:
            dx = target.x + target.vx - source.x - source.vx
            dy = target.y + target.vy - source.y - source.vy
            dist = math.sqrt(dx * dx + dy * dy) or 1e-6
            k = (dist - s.link_distance) / dist * self.alpha * s.link_strength
            dx *= k
            dy *= k
            target.vx -= dx * bias
            target.vy -= dy * bias
            source.vx += dx * (1 - bias)
            source.vy += dy * (1 - bias)


def make_solver(
    settings: Optional[LayoutSettings] = None,
    center: Tuple[float, float] = (0.0, 0.0),
    aspect_ratio: float = 1.0,
) -> ForceSolver:
    """Build the engine named by `settings.engine`."""
    settings = settings or LayoutSettings()
    if settings.engine == LayoutEngine.SIMPLE:
        return SimpleForceSolver(settings, center=center, aspect_ratio=aspect_ratio)
    return NetworkxForceSolver(settings, center=center, aspect_ratio=aspect_ratio)

"""
Connector geometry for rectangular nodes.

Edges are drawn between node boundaries rather than node centers. For two
rectangles this module finds where the center-to-center line leaves each
rectangle and which side of the rectangle that point is on, so the
renderer can pick anchor directions for its curves.

Nothing here is cached: nodes move every frame under layout and dragging.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .types import Node, Position, Side

# Rounding slack when deciding which side a boundary point lies on
SIDE_TOLERANCE_PX = 1


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle described by its center and half extents."""
    center: Position
    half_width: float
    half_height: float

    @property
    def left(self) -> float:
        return self.center.x - self.half_width

    @property
    def top(self) -> float:
        return self.center.y - self.half_height

    @property
    def width(self) -> float:
        return self.half_width * 2

    @property
    def height(self) -> float:
        return self.half_height * 2

    @property
    def is_degenerate(self) -> bool:
        return self.half_width <= 0 or self.half_height <= 0


@dataclass(frozen=True)
class ConnectorAnchors:
    """Boundary points and attachment sides for one connector."""
    a_point: Position
    b_point: Position
    a_side: Side
    b_side: Side


def rect_for(node: Node) -> Optional[Rect]:
    """
    Build the rectangle of a rendered node.

    Node positions are top-left corners. Returns None until the renderer
    has reported a measured size for the node.
    """
    if node.measured is None:
        return None
    half_w = node.measured.width / 2
    half_h = node.measured.height / 2
    center = Position(x=node.position.x + half_w, y=node.position.y + half_h)
    return Rect(center=center, half_width=half_w, half_height=half_h)


def boundary_point(rect: Rect, target: Position) -> Position:
    """
    Point on the border of `rect` along the line from its center to `target`.

    The center-to-target vector is rotated into a frame scaled by the half
    extents, where the rectangle becomes a unit diamond; normalizing by the
    L1 norm lands on the border, and the inverse transform maps it back.
    Degenerate rectangles and coincident centers yield the center itself.
    """
    if rect.is_degenerate:
        return rect.center

    w = rect.half_width
    h = rect.half_height
    dx = target.x - rect.center.x
    dy = target.y - rect.center.y

    xx1 = dx / (2 * w) - dy / (2 * h)
    yy1 = dx / (2 * w) + dy / (2 * h)
    norm = abs(xx1) + abs(yy1)
    if norm == 0:
        return rect.center

    a = 1 / norm
    xx3 = a * xx1
    yy3 = a * yy1

    return Position(
        x=w * (xx3 + yy3) + rect.center.x,
        y=h * (-xx3 + yy3) + rect.center.y,
    )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def side_of(rect: Rect, point: Position) -> Side:
    """
    Classify which side of `rect` a boundary point lies on.

    Sides are tested left, right, top, bottom; the first match wins and an
    ambiguous point falls back to top.
    """
    nx = _round_half_up(rect.left)
    ny = _round_half_up(rect.top)
    px = _round_half_up(point.x)
    py = _round_half_up(point.y)

    if px <= nx + SIDE_TOLERANCE_PX:
        return Side.LEFT
    if px >= nx + rect.width - SIDE_TOLERANCE_PX:
        return Side.RIGHT
    if py <= ny + SIDE_TOLERANCE_PX:
        return Side.TOP
    if py >= rect.top + rect.height - SIDE_TOLERANCE_PX:
        return Side.BOTTOM
    return Side.TOP


def resolve_connector(a: Rect, b: Rect) -> ConnectorAnchors:
    """Compute both endpoints of a connector between rectangles a and b."""
    a_point = boundary_point(a, b.center)
    b_point = boundary_point(b, a.center)
    return ConnectorAnchors(
        a_point=a_point,
        b_point=b_point,
        a_side=side_of(a, a_point),
        b_side=side_of(b, b_point),
    )


def connector_for(source: Node, target: Node) -> Optional[ConnectorAnchors]:
    """Anchors for an edge between two nodes, or None if either is unmeasured."""
    a = rect_for(source)
    b = rect_for(target)
    if a is None or b is None:
        return None
    return resolve_connector(a, b)

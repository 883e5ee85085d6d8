"""
Static node arrangements.

These are one-shot layouts used for the initial placement and for the
"arrange" actions; the continuous force layout lives in
`techgraph.layout`.
"""

import math
from collections import defaultdict
from enum import StrEnum
from typing import Dict, List, Sequence

from .types import Node, Position

COLUMN_SPACING = 250.0
VERTICAL_SPACING = 50.0
COLUMN_MARGIN = 100.0


class ArrangeCriterion(StrEnum):
    LABEL = "label"
    TYPE = "type"
    COLUMNS = "columns"


def _sort_key(node: Node, criterion: ArrangeCriterion) -> str:
    if criterion == ArrangeCriterion.TYPE:
        return node.kind.lower()
    return node.label.lower()


def arrange_circle(
    nodes: Sequence[Node],
    width: float,
    height: float,
    criterion: ArrangeCriterion = ArrangeCriterion.LABEL,
    radius: float = 600.0,
) -> Dict[str, Position]:
    """Spread nodes evenly on a circle around the viewport center, sorted by criterion."""
    if not nodes:
        return {}

    center_x = width / 2
    center_y = height / 2
    ordered = sorted(nodes, key=lambda n: _sort_key(n, criterion))
    step = (2 * math.pi) / len(ordered)

    return {
        node.id: Position(
            x=center_x + radius * math.cos(i * step),
            y=center_y + radius * math.sin(i * step),
        )
        for i, node in enumerate(ordered)
    }


def arrange_columns(nodes: Sequence[Node], width: float, height: float) -> Dict[str, Position]:
    """
    One column per node kind, kinds in alphabetical order.

    Within a column nodes are sorted by label and centered vertically on
    the viewport.
    """
    by_kind: Dict[str, List[Node]] = defaultdict(list)
    for node in nodes:
        by_kind[node.kind].append(node)

    positions: Dict[str, Position] = {}
    for column, kind in enumerate(sorted(by_kind)):
        members = sorted(by_kind[kind], key=lambda n: n.label.lower())
        start_y = height / 2 - (len(members) * VERTICAL_SPACING) / 2
        for row, node in enumerate(members):
            positions[node.id] = Position(
                x=column * COLUMN_SPACING + COLUMN_MARGIN,
                y=start_y + row * VERTICAL_SPACING,
            )
    return positions


def arrange(
    nodes: Sequence[Node],
    criterion: ArrangeCriterion,
    width: float,
    height: float,
    radius: float = 600.0,
) -> Dict[str, Position]:
    """Dispatch an arrange request to the matching layout."""
    if criterion == ArrangeCriterion.COLUMNS:
        return arrange_columns(nodes, width, height)
    return arrange_circle(nodes, width, height, criterion, radius)

"""
Layout Command - Run the force layout headlessly.

Nodes are given an estimated rendered size (there is no browser to
measure them), the layout driver is started on a cooperative FrameLoop,
and the resulting positions are written as JSON.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Dict, Optional

import click
from pydantic import BaseModel, Field

from ...config import LayoutEngine
from ...core.degree import node_scale
from ...core.exceptions import TechGraphError
from ...core.session import GraphSession
from ...core.types import EdgeKind, Node, Position
from ...layout import FrameLoop, LayoutDriver
from ..utils import MODE_CHOICES, echo_error, echo_info, echo_success, load_session

logger = logging.getLogger(__name__)

CHAR_WIDTH_PX = 7.0
LINE_HEIGHT_PX = 18.0
PADDING_PX = 8.0


class LayoutResponse(BaseModel):
    mode: EdgeKind
    ticks: int
    positions: Dict[str, Position] = Field(default_factory=dict)


def estimate_size(node: Node) -> tuple[float, float]:
    """Approximate the rendered box of a node label at its degree scale."""
    scale = node_scale(node.size)
    width = (len(node.label) * CHAR_WIDTH_PX + 2 * PADDING_PX) * scale
    height = (LINE_HEIGHT_PX + PADDING_PX) * scale
    return width, height


def run_layout(session: GraphSession, ticks: int) -> int:
    """Measure every node, run the driver for `ticks` frames and stop it."""
    for node in session.nodes:
        width, height = estimate_size(node)
        session.measure(node.id, width, height)

    loop = FrameLoop()
    driver = LayoutDriver(session, loop, config=session.config)
    driver.toggle()
    loop.run(ticks)
    if driver.running:
        driver.toggle()
    return driver.ticks


@click.command()
@click.argument("dataset")
@click.option("-m", "--mode", type=click.Choice(MODE_CHOICES), default=EdgeKind.USAGE.value,
              help="Edge semantics to derive")
@click.option("-t", "--ticks", default=300, type=click.IntRange(min=0), help="Number of simulation frames")
@click.option("-e", "--engine", type=click.Choice([e.value for e in LayoutEngine]), default=None,
              help="Force engine (defaults to the configured one)")
@click.option("-o", "--output", default=None, help="Write positions to this file instead of stdout")
@click.option("-c", "--config", "config_path", default=None, help="Path to config.yaml")
def layout(dataset: str, mode: str, ticks: int, engine: Optional[str], output: Optional[str],
           config_path: Optional[str]):
    """
    Compute force-directed positions for DATASET.

    \b
    Examples:
      techgraph layout tools.json --ticks 500 -o positions.json
      techgraph layout tools.json --mode interoperability
      techgraph layout tools.json --engine simple
    """
    try:
        session = load_session(dataset, mode, config_path)
    except TechGraphError as e:
        echo_error(str(e))
        sys.exit(1)

    if engine:
        session.config.layout.engine = LayoutEngine(engine)
    ran = run_layout(session, ticks)
    response = LayoutResponse(
        mode=session.mode,
        ticks=ran,
        positions={node.id: node.position for node in session.nodes},
    )
    payload = json.dumps(response.model_dump(mode="json"), indent=2)

    if output is None:
        click.echo(payload)
        return

    out_path = Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(payload, encoding="utf-8")
    echo_success(f"Layout written to {out_path}")
    echo_info(f"{len(response.positions)} nodes, {ran} ticks")

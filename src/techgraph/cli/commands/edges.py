"""
Edges Command - Derive and list the edge set for one mode.
"""

import logging
import sys
from contextlib import nullcontext
from typing import Dict, List

import click
from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table

from ...core.exceptions import TechGraphError
from ...core.types import Edge, EdgeKind
from ..renderers import JsonRenderer
from ..utils import MODE_CHOICES, echo_error, load_session

logger = logging.getLogger(__name__)
console = Console()


# --- API Models ---
class EdgesResponse(BaseModel):
    mode: EdgeKind
    node_count: int
    edge_count: int
    edges: List[Edge] = Field(default_factory=list)
    degree: Dict[str, int] = Field(default_factory=dict)


@click.command()
@click.argument("dataset")
@click.option("-m", "--mode", type=click.Choice(MODE_CHOICES), default=EdgeKind.USAGE.value,
              help="Edge semantics to derive")
@click.option("-c", "--config", "config_path", default=None, help="Path to config.yaml")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def edges(dataset: str, mode: str, config_path: str, as_json: bool):
    """
    Build the edge set for DATASET and list it with connection counts.
    """
    renderer = JsonRenderer("edges")
    context_manager = renderer.capture() if as_json else nullcontext()

    error_to_report = None
    response_data = None

    with context_manager:
        try:
            session = load_session(dataset, mode, config_path)
            response_data = EdgesResponse(
                mode=session.mode,
                node_count=len(session.nodes),
                edge_count=len(session.edges),
                edges=session.edges,
                degree=session.degree,
            )
        except TechGraphError as e:
            error_to_report = e

    if as_json:
        if error_to_report:
            renderer.render_error(error_to_report)
            sys.exit(1)
        renderer.render_success(response_data)
        return

    if error_to_report:
        echo_error(str(error_to_report))
        sys.exit(1)

    table = Table(title=f"{response_data.mode} edges ({response_data.edge_count})")
    table.add_column("Edge", style="cyan")
    table.add_column("Source")
    table.add_column("Target")
    for edge in response_data.edges:
        table.add_row(edge.id, edge.source, edge.target)
    console.print(table)

    ranked = sorted(response_data.degree.items(), key=lambda item: (-item[1], item[0]))
    degree_table = Table(title="Connections")
    degree_table.add_column("Node", style="cyan")
    degree_table.add_column("Degree", justify="right")
    for node_id, count in ranked:
        degree_table.add_row(node_id, str(count))
    console.print(degree_table)

"""
Stats Command - Summary statistics of the derived graph.
"""

import sys
from contextlib import nullcontext
from typing import Dict, List, Optional

import click
from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table

from ...core.exceptions import TechGraphError
from ...core.types import EdgeKind
from ..renderers import JsonRenderer
from ..utils import MODE_CHOICES, echo_error, load_session

console = Console()


# --- API Models ---
class TopNode(BaseModel):
    id: str
    degree: int


class StatsResponse(BaseModel):
    mode: EdgeKind
    total_nodes: int
    total_edges: int
    nodes_by_kind: Dict[str, int] = Field(default_factory=dict)
    components: int
    isolated: int
    density: float
    top_connected: List[TopNode] = Field(default_factory=list)


@click.command()
@click.argument("dataset")
@click.option("-m", "--mode", type=click.Choice(MODE_CHOICES), default=EdgeKind.USAGE.value,
              help="Edge semantics to derive")
@click.option("--top", default=10, type=int, help="Number of most connected nodes to list")
@click.option("-c", "--config", "config_path", default=None, help="Path to config.yaml")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(dataset: str, mode: str, top: int, config_path: Optional[str], as_json: bool):
    """
    Show node, edge and connectivity statistics for DATASET.
    """
    renderer = JsonRenderer("stats")
    context_manager = renderer.capture() if as_json else nullcontext()

    error_to_report = None
    response_data = None

    with context_manager:
        try:
            session = load_session(dataset, mode, config_path)
            graph = session.graph()
            summary = graph.get_stats()
            response_data = StatsResponse(
                mode=session.mode,
                total_nodes=summary["total_nodes"],
                total_edges=summary["total_edges"],
                nodes_by_kind=summary["nodes_by_kind"],
                components=summary["components"],
                isolated=summary["isolated"],
                density=summary["density"],
                top_connected=[TopNode(id=nid, degree=deg) for nid, deg in graph.top_connected(top)],
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

    click.echo(f"📊 {response_data.mode} graph")
    click.echo(f"   Nodes: {response_data.total_nodes}")
    click.echo(f"   Edges: {response_data.total_edges}")
    click.echo(f"   Components: {response_data.components} (isolated nodes: {response_data.isolated})")
    click.echo(f"   Density: {response_data.density}")

    kinds = Table(title="Nodes by kind")
    kinds.add_column("Kind", style="cyan")
    kinds.add_column("Count", justify="right")
    for kind, count in response_data.nodes_by_kind.items():
        kinds.add_row(kind, str(count))
    console.print(kinds)

    if response_data.top_connected:
        ranked = Table(title="Most connected")
        ranked.add_column("Node", style="cyan")
        ranked.add_column("Degree", justify="right")
        for item in response_data.top_connected:
            ranked.add_row(item.id, str(item.degree))
        console.print(ranked)

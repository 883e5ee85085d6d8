"""
Neighbors Command - Show the highlight neighborhood of a node.
"""

import sys
from contextlib import nullcontext
from typing import List, Optional

import click
from pydantic import BaseModel, Field
from rich.console import Console
from rich.tree import Tree

from ...core.exceptions import TechGraphError
from ...core.types import EdgeKind
from ..renderers import JsonRenderer
from ..utils import MODE_CHOICES, echo_error, echo_warning, load_session

console = Console()


# --- API Models ---
class NeighborhoodResponse(BaseModel):
    selected: str
    mode: EdgeKind
    hop_limit: int
    found: bool
    first_nodes: List[str] = Field(default_factory=list)
    first_edges: List[str] = Field(default_factory=list)
    second_nodes: List[str] = Field(default_factory=list)
    second_edges: List[str] = Field(default_factory=list)


@click.command()
@click.argument("dataset")
@click.argument("node_id")
@click.option("-m", "--mode", type=click.Choice(MODE_CHOICES), default=EdgeKind.USAGE.value,
              help="Edge semantics to derive")
@click.option("--hops", type=click.IntRange(1, 2), default=1, help="Neighborhood depth (1 or 2)")
@click.option("-c", "--config", "config_path", default=None, help="Path to config.yaml")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def neighbors(dataset: str, node_id: str, mode: str, hops: int,
              config_path: Optional[str], as_json: bool):
    """
    Classify nodes and edges around NODE_ID by hop distance.
    """
    renderer = JsonRenderer("neighbors")
    context_manager = renderer.capture() if as_json else nullcontext()

    error_to_report = None
    response_data = None

    with context_manager:
        try:
            session = load_session(dataset, mode, config_path)
            session.set_hop_limit(hops)
            session.select(node_id)
            hood = session.neighborhood()
            response_data = NeighborhoodResponse(
                selected=node_id,
                mode=session.mode,
                hop_limit=hops,
                found=session.get_node(node_id) is not None,
                first_nodes=sorted(hood.first_nodes),
                first_edges=sorted(hood.first_edges),
                second_nodes=sorted(hood.second_nodes),
                second_edges=sorted(hood.second_edges),
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

    if not response_data.found:
        echo_warning(f"Node not found: {node_id}")
        return

    tree = Tree(f"[bold]{node_id}[/bold] ({response_data.mode}, {hops} hop{'s' if hops > 1 else ''})")
    first = tree.add(f"First hop ({len(response_data.first_nodes)} nodes)")
    for nid in response_data.first_nodes:
        if nid != node_id:
            first.add(nid)
    if hops == 2:
        second = tree.add(f"Second hop ({len(response_data.second_nodes)} nodes)")
        for nid in response_data.second_nodes:
            second.add(f"[dim]{nid}[/dim]")
    console.print(tree)

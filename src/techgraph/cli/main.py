"""
techgraph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import edges, init, layout, neighbors, stats


@click.group()
@click.version_option(package_name="techgraph")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """techgraph: Explore companies and design tools as a graph.

    \b
    Quick Start:
      techgraph edges tools.json
      techgraph neighbors tools.json Figma --hops 2
      techgraph layout tools.json -o positions.json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register commands
main.add_command(init)
main.add_command(edges.edges)
main.add_command(neighbors.neighbors)
main.add_command(stats.stats)
main.add_command(layout.layout)

if __name__ == "__main__":
    main()

"""
Init Command - Write the default configuration.

This module handles the `techgraph init` command, which creates
`.techgraph/config.yaml` in the current directory.
"""

from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from ...config import DEFAULT_CONFIG_PATH, write_default_config

console = Console()


def create_gitignore(config_dir: Path) -> None:
    """Ensure the .techgraph/ directory is ignored by git."""
    gitignore = config_dir.parent / ".gitignore"
    entry = "\n# techgraph\n.techgraph/\n"

    if not gitignore.exists():
        gitignore.write_text(entry)
        return

    content = gitignore.read_text()
    if ".techgraph" not in content:
        with open(gitignore, "a") as f:
            f.write(entry)


@click.command()
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
def init(force: bool):
    """
    Initialize techgraph in the current directory.
    """
    console.print(Panel.fit("🚀 [bold blue]techgraph Initialization[/bold blue]", border_style="blue"))

    config_file = Path.cwd() / DEFAULT_CONFIG_PATH
    if config_file.exists() and not force:
        console.print(f"[yellow]Configuration already exists at {config_file}[/yellow]")
        console.print("Use --force to overwrite it.")
        return

    write_default_config(config_file)
    create_gitignore(config_file.parent)

    console.print("\n✨ [bold green]Initialized successfully![/bold green]")
    console.print(f"   Config created at: [dim]{config_file}[/dim]")

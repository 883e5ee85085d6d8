"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing and session loading shared by all commands.
"""

from pathlib import Path
from typing import Optional

import click

from ..config import load_config
from ..core.session import GraphSession
from ..core.dataset import load_dataset
from ..core.types import EdgeKind

MODE_CHOICES = [kind.value for kind in EdgeKind]


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    click.echo(click.style(f"   {message}", dim=True))


def load_session(
    dataset_path: str,
    mode: str = EdgeKind.USAGE.value,
    config_path: Optional[str] = None,
) -> GraphSession:
    """
    Load a dataset and build a session in the requested edge mode.

    Raises:
        DatasetError: The dataset cannot be read or validated.
        ConfigError: The configuration file is invalid.
    """
    config = load_config(Path(config_path) if config_path else None)
    records = load_dataset(dataset_path)
    return GraphSession(records, config=config, mode=EdgeKind(mode))

"""
JSON output envelope for machine-readable command output.

Every `--json` response has the same shape:
    {"meta": {"command": ..., "status": "success" | "error", "version": ...},
     "data": {...}}   or   "error": {"message": ..., "type": ...}
"""

import io
import json
from contextlib import contextmanager, redirect_stdout
from typing import Iterator

import click
from pydantic import BaseModel

from .. import __version__


class JsonRenderer:
    """Renders command results inside the standard JSON envelope."""

    def __init__(self, command: str):
        self.command = command
        self.captured = ""

    @contextmanager
    def capture(self) -> Iterator[None]:
        """Swallow stray stdout so only the envelope reaches the caller."""
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            yield
        self.captured = buffer.getvalue()

    def _meta(self, status: str) -> dict:
        return {"command": self.command, "status": status, "version": __version__}

    def render_success(self, data: BaseModel) -> None:
        click.echo(json.dumps({
            "meta": self._meta("success"),
            "data": data.model_dump(mode="json"),
        }, indent=2))

    def render_error(self, error: Exception) -> None:
        click.echo(json.dumps({
            "meta": self._meta("error"),
            "error": {"message": str(error), "type": type(error).__name__},
        }, indent=2))

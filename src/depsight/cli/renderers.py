"""
JSON output envelope shared by every `--json` command.

Success:  {"ok": true, "command": "...", "data": {...}}
Failure:  {"ok": false, "command": "...", "error": {"type": "...", "message": "..."}}

Commands build their response inside `capture()` and render it after the
block, so the envelope is the only thing written to stdout.
"""

import io
import json
from contextlib import contextmanager, redirect_stdout
from typing import Iterator

import click
from pydantic import BaseModel


class JsonRenderer:
    """Writes command results in the standard envelope."""

    def __init__(self, command: str):
        self.command = command

    @contextmanager
    def capture(self) -> Iterator[None]:
        """Divert anything printed to stdout into stderr for the duration of the block."""
        stray = io.StringIO()
        try:
            with redirect_stdout(stray):
                yield
        finally:
            if stray.getvalue():
                click.echo(stray.getvalue(), err=True, nl=False)

    def render_success(self, data: BaseModel) -> None:
        envelope = {
            "ok": True,
            "command": self.command,
            "data": data.model_dump(mode="json"),
        }
        click.echo(json.dumps(envelope, indent=2, ensure_ascii=False))

    def render_error(self, error: Exception) -> None:
        envelope = {
            "ok": False,
            "command": self.command,
            "error": {
                "type": error.__class__.__name__,
                "message": str(error),
            },
        }
        click.echo(json.dumps(envelope, indent=2, ensure_ascii=False))

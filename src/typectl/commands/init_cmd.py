"""Command: project initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from typectl.commands._base import TypeCommand
from typectl.services.init import init_project

if TYPE_CHECKING:
    from typectl.commands._context import AppContext

_INIT_EXAMPLES = """\
  typectl init
  typectl init /path/to/project
  typectl --json init ."""


@click.command("init", cls=TypeCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.pass_obj
def init_cmd(app: AppContext, path: str) -> None:
    """Create typectl.toml and an empty database."""
    app.emit(init_project(Path(path).resolve()))

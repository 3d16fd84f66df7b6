"""Root CLI group for typectl: global flags, settings and the app context."""

from __future__ import annotations

from typing import Any

import click

from typectl import __version__
from typectl.commands import register_commands
from typectl.commands._base import TypeGroup
from typectl.commands._context import AppContext
from typectl.config.settings import TypeSettings

_ROOT_EXAMPLES = """\
  typectl init
  typectl --json type list
  typectl --log-sql type get customer
  typectl -c ci/typectl.toml type list"""


@click.group(cls=TypeGroup, examples=_ROOT_EXAMPLES, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="typectl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output on stdout.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--log-sql", is_flag=True, help="Log SQL statements to stderr ([database] echo).")
@click.option("-c", "--config", "config_path", default=None, help="Use this config file.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    log_sql: bool,
    config_path: str | None,
) -> None:
    """typectl — member type definition store.

    Settings come from typectl.toml, TYPECTL_* environment variables and
    these flags, in increasing priority.
    """
    overrides: dict[str, Any] = {}
    if log_sql:
        overrides["database"] = {"echo": True}

    app = AppContext(
        TypeSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
            **overrides,
        )
    )
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)

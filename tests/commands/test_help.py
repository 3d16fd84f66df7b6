"""Parametrized help and --examples tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from typectl import __version__
from typectl.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--help"], ["type", "init", "--json", "--config", "--log-sql", "--examples"]),
    (["type", "--help"], ["create", "get", "list", "delete", "exists", "add-property"]),
    (["type", "create", "--help"], ["ALIAS", "--name", "--icon", "--property"]),
    (["type", "get", "--help"], ["IDENT"]),
    (["type", "exists", "--help"], ["TYPE_ID"]),
    (["type", "add-property", "--help"], ["--data-type", "--group"]),
    (["type", "rename-property", "--help"], ["OLD_ALIAS", "NEW_ALIAS"]),
    (["type", "permissions", "--help"], ["--can-edit", "--can-view", "--sensitive"]),
    (["init", "--help"], ["PATH"]),
]


@pytest.mark.parametrize(("args", "keywords"), HELP_COMMANDS)
def test_help(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for keyword in keywords:
        assert keyword in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["type", "--examples"],
        ["type", "create", "--examples"],
        ["type", "permissions", "--examples"],
        ["init", "--examples"],
    ],
)
def test_examples(cli_runner: CliRunner, args: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    assert "typectl" in result.output


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_group_examples_cover_subcommands(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["type", "--examples"])
    assert result.exit_code == 0
    assert result.output.startswith("Examples for '")
    assert "type create:" in result.output
    assert "typectl type rename-property customer phone mobile" in result.output
    assert "typectl type permissions customer mobile --can-edit --can-view" in result.output


def test_root_examples_cover_every_command(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--examples"])
    assert result.exit_code == 0
    assert "typectl --log-sql type get customer" in result.output
    assert "typectl init /path/to/project" in result.output
    assert "typectl type exists 3" in result.output


def test_command_examples_have_no_headings(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["type", "exists", "--examples"])
    assert result.exit_code == 0
    assert result.output.splitlines()[1:] == ["", "  typectl type exists 3"]

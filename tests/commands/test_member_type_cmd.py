"""Tests for the ``typectl type`` command group."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click
import pytest
from click.testing import CliRunner

from typectl.cli import cli
from typectl.commands.member_type import _parse_property
from typectl.domain import stubs


def _json(cli_runner: CliRunner, *args: str) -> dict[str, Any]:
    result = cli_runner.invoke(cli, ["--json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestParseProperty:
    def test_alias_only(self) -> None:
        assert _parse_property("phone") == {"alias": "phone"}

    def test_full(self) -> None:
        assert _parse_property("tier:Tier:dropdown@content") == {
            "alias": "tier",
            "name": "Tier",
            "data_type": "dropdown",
            "group": "content",
        }

    def test_group_without_name(self) -> None:
        assert _parse_property("phone@contact") == {"alias": "phone", "group": "contact"}

    def test_empty_alias(self) -> None:
        with pytest.raises(click.BadParameter):
            _parse_property(":Name")


@pytest.mark.usefixtures("_isolated_root")
class TestTypeCommands:
    def test_create_and_get(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        created = _json(
            cli_runner, "type", "create", "customer", "--name", "Customer", "-p", "tier@content"
        )
        assert created["ok"] is True
        assert created["op"] == "create_type"
        assert (tmp_path / ".typectl" / "typectl.db").exists()

        fetched = _json(cli_runner, "type", "get", "customer")
        aliases = [p["alias"] for p in fetched["data"]["property_types"]]
        assert "tier" in aliases
        assert stubs.IS_APPROVED in aliases

    def test_create_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["type", "create", "customer"])
        assert result.exit_code == 0
        assert "create_type" in result.output
        assert stubs.LAST_LOGIN_DATE in result.output

    def test_create_duplicate_fails(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["type", "create", "customer"])
        result = cli_runner.invoke(cli, ["--json", "type", "create", "customer"])
        assert result.exit_code == 1
        assert "DUPLICATE_ALIAS" in result.output

    def test_list_quiet(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["type", "create", "a"])
        cli_runner.invoke(cli, ["type", "create", "b"])
        result = cli_runner.invoke(cli, ["-q", "type", "list"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["a", "b"]

    def test_get_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["type", "get", "ghost"])
        assert result.exit_code == 1
        assert "ERROR" in result.output

    def test_exists_and_delete(self, cli_runner: CliRunner) -> None:
        created = _json(cli_runner, "type", "create", "customer")
        type_id = str(created["data"]["id"])
        assert _json(cli_runner, "type", "exists", type_id)["data"]["exists"] is True
        assert _json(cli_runner, "type", "delete", "customer")["data"]["deleted"] is True
        assert _json(cli_runner, "type", "exists", type_id)["data"]["exists"] is False

    def test_add_and_rename_property(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["type", "create", "customer"])
        added = _json(
            cli_runner, "type", "add-property", "customer", "phone", "--group", "contact"
        )
        assert added["data"]["group"] == "contact"
        renamed = _json(cli_runner, "type", "rename-property", "customer", "phone", "mobile")
        assert renamed["data"]["alias"] == "mobile"

    def test_rename_standard_property_warns(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["type", "create", "customer"])
        result = cli_runner.invoke(
            cli, ["type", "rename-property", "customer", stubs.COMMENTS, "notes"]
        )
        assert result.exit_code == 0
        assert "WARNING" in result.output

    def test_permissions(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["type", "create", "customer", "-p", "phone"])
        data = _json(
            cli_runner, "type", "permissions", "customer", "phone", "--can-view", "--sensitive"
        )["data"]
        assert data["member_can_view"] is True
        assert data["is_sensitive"] is True
        assert data["member_can_edit"] is False

    def test_sql_echo_keeps_json_stdout_clean(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TYPECTL_DATABASE__ECHO", "true")
        try:
            cli_runner.invoke(cli, ["type", "create", "customer"])
            result = cli_runner.invoke(cli, ["--json", "type", "list"])
        finally:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [t["alias"] for t in data["data"]["items"]] == ["customer"]
        assert "SELECT" in result.stderr

    def test_log_sql_flag(self, cli_runner: CliRunner) -> None:
        try:
            result = cli_runner.invoke(cli, ["--json", "--log-sql", "type", "list"])
        finally:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["data"]["count"] == 0
        assert "SELECT" in result.stderr

    def test_config_controls_database_location(
        self, cli_runner: CliRunner, tmp_path: Path
    ) -> None:
        (tmp_path / "typectl.toml").write_text('[database]\npath = "data/types.db"\n')
        _json(cli_runner, "type", "create", "customer")
        assert (tmp_path / "data" / "types.db").exists()


@pytest.mark.usefixtures("_isolated_root")
class TestInitCommand:
    def test_init_json(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        data = _json(cli_runner, "init", str(tmp_path))
        assert data["op"] == "init"
        assert data["data"]["member_types"] == 0
        assert (tmp_path / "typectl.toml").is_file()

    def test_init_default_path(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["init"])
        assert result.exit_code == 0
        assert (tmp_path / "typectl.toml").is_file()

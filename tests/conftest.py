"""Shared pytest fixtures and test helpers for typectl tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from typectl.config.settings import TypeSettings
from typectl.domain.models import MemberType, PropertyGroup, PropertyType
from typectl.infrastructure.database.engine import init_database
from typectl.infrastructure.scope import ScopeProvider
from typectl.infrastructure.store import TypeStore


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep TYPECTL_* variables from the developer's shell out of tests."""
    monkeypatch.delenv("TYPECTL_CONFIG", raising=False)
    monkeypatch.delenv("TYPECTL_DATABASE__PATH", raising=False)
    monkeypatch.delenv("TYPECTL_DATABASE__ECHO", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "typectl.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def scope_provider(db_engine: Engine) -> ScopeProvider:
    return ScopeProvider(db_engine)


@pytest.fixture
def store(tmp_path: Path) -> Iterator[TypeStore]:
    """Fully wired store on a temp project root with default settings."""
    s = TypeStore(TypeSettings.from_cli(project_root=tmp_path))
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def build_member_type(alias: str = "simple", *, group_alias: str = "content") -> MemberType:
    """A member type with one custom group holding three properties."""
    group = PropertyGroup(
        alias=group_alias,
        name=group_alias.title(),
        property_types=[
            PropertyType(alias="title", name="Title", sort_order=0),
            PropertyType(alias="bodyText", name="Body Text", data_type="richtext", sort_order=1),
            PropertyType(alias="author", name="Author", sort_order=2),
        ],
    )
    return MemberType(alias=alias, name=alias.title(), property_groups=[group])


@pytest.fixture
def make_member_type() -> Callable[..., MemberType]:
    """Factory fixture for fresh, unsaved member types."""
    return build_member_type

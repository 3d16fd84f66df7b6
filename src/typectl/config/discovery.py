"""Locating and reading ``typectl.toml``.

A config file is chosen by the first rule that applies:

1. ``--config PATH`` on the command line
2. the ``TYPECTL_CONFIG`` environment variable
3. the nearest ``typectl.toml`` in the start directory or one of its parents

A file named by rule 1 or 2 must exist.  When rule 3 finds nothing the
start directory is the project root and every setting keeps its code
default.  The file itself is sparse: only the sections listed in
:data:`CONFIG_SECTIONS` may appear, each holding overrides only.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import click

CONFIG_FILENAME = "typectl.toml"
CONFIG_ENV_VAR = "TYPECTL_CONFIG"
CONFIG_SECTIONS = frozenset({"database", "cache", "reconcile"})

ConfigOrigin = Literal["option", "env", "walk-up", "none"]


@dataclass(frozen=True)
class ConfigLocation:
    """Where settings come from and which directory the project lives in."""

    path: Path | None
    root: Path
    origin: ConfigOrigin


def locate_config(explicit: str | Path | None = None, start: Path | None = None) -> ConfigLocation:
    """Resolve the config file for a run started in *start* (default: cwd)."""
    if explicit:
        return _named(Path(explicit), "option")

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return _named(Path(env_path), "env")

    base = (start or Path.cwd()).resolve()
    for directory in (base, *base.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return ConfigLocation(path=candidate, root=directory, origin="walk-up")
    return ConfigLocation(path=None, root=base, origin="none")


def read_config(path: Path | None) -> dict[str, Any]:
    """Parse *path* and return its sections; ``{}`` when there is no file.

    Raises:
        click.ClickException: The file is not valid TOML or carries a
            top-level key outside :data:`CONFIG_SECTIONS`.
    """
    if path is None:
        return {}
    try:
        data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc

    unknown = sorted(set(data) - CONFIG_SECTIONS)
    if unknown:
        allowed = ", ".join(f"[{name}]" for name in sorted(CONFIG_SECTIONS))
        msg = f"Unknown section(s) in {path}: {', '.join(unknown)} (allowed: {allowed})"
        raise click.ClickException(msg)
    return data


def _named(path: Path, origin: ConfigOrigin) -> ConfigLocation:
    if not path.is_file():
        source = "--config" if origin == "option" else CONFIG_ENV_VAR
        msg = f"Config file from {source} not found: {path}"
        raise click.ClickException(msg)
    return ConfigLocation(path=path, root=path.resolve().parent, origin=origin)

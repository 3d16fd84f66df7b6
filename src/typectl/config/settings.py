"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``TYPECTL_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``typectl.toml`` chosen by :func:`locate_config`
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` fed by
:func:`typectl.config.discovery.read_config`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from typectl.config.discovery import locate_config, read_config
from typectl.config.models import CacheConfig, DatabaseConfig
from typectl.domain.reconcile import ReconcilePolicy


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read the sections of a located ``typectl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_config(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# TOML path handed to settings_customise_sources during construction.
_tls = threading.local()


class TypeSettings(BaseSettings):
    """Unified settings for the typectl CLI and library entry points.

    Attributes:
        project_root: Directory the database path is resolved against
            (parent of ``typectl.toml``, or CWD if no config found).
        config_path: The TOML file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TYPECTL_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    reconcile: ReconcilePolicy = Field(default_factory=ReconcilePolicy)

    @property
    def database_path(self) -> Path:
        """Absolute database location."""
        path = Path(self.database.path)
        if path.is_absolute():
            return path
        return self.project_root / path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> TypeSettings:
        """Construct settings from a CLI invocation.

        The config file comes from :func:`locate_config`; *project_root*
        defaults to the directory it settles on.  CLI flags are merged as
        highest-priority overrides.
        """
        location = locate_config(config_path, start=project_root)

        _tls.toml_path = location.path
        try:
            return cls(
                project_root=project_root or location.root,
                config_path=location.path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

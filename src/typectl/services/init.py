"""Project initialization — config file plus an empty database."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typectl.config.discovery import CONFIG_FILENAME
from typectl.config.settings import TypeSettings
from typectl.infrastructure.store import TypeStore
from typectl.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

_DEFAULT_TOML = """\
[database]
path = ".typectl/typectl.db"

[cache]
enabled = true

[reconcile]
on_create = true
on_update = false
on_fetch = true
"""


def init_project(root: Path) -> ServiceResult:
    """Write ``typectl.toml`` (unless present) and create the database under *root*.

    Idempotent: an existing config file is left untouched.
    """
    op = "init"
    root.mkdir(parents=True, exist_ok=True)
    config_path = root / CONFIG_FILENAME
    warnings: list[str] = []
    if config_path.exists():
        warnings.append(f"{CONFIG_FILENAME} already exists; left unchanged")
    else:
        config_path.write_text(_DEFAULT_TOML, encoding="utf-8")

    settings = TypeSettings.from_cli(config_path=str(config_path), project_root=root)
    store = TypeStore(settings)
    try:
        with store.scopes.create_scope() as scope:
            count = store.member_types(scope).count()
    finally:
        store.close()

    return ServiceResult(
        ok=True,
        op=op,
        data={
            "root": str(root),
            "config": str(config_path),
            "database": str(settings.database_path),
            "member_types": count,
        },
        warnings=warnings,
    )

"""Pydantic models for the ``[database]`` and ``[cache]`` sections.

Sparse TOML contract: defaults baked here, typectl.toml only contains
overrides.  A fresh project needs no config file at all.  The
``[reconcile]`` section is :class:`typectl.domain.reconcile.ReconcilePolicy`
itself.
"""

from __future__ import annotations

from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    path: str = ".typectl/typectl.db"
    echo: bool = False


class CacheConfig(BaseModel):
    """[cache] section."""

    model_config = {"frozen": True}

    enabled: bool = True

"""TypeStore — the single dependency injected into every service.

Owns the database engine and the scope provider, and builds repositories
bound to a scope with the configured reconciliation policy.  Constructed
once at CLI startup from :class:`TypeSettings`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typectl.domain.reconcile import ReconcilePolicy, StandardPropertyReconciler
from typectl.infrastructure.database.engine import init_database
from typectl.infrastructure.repositories.common import ContentTypeCommonRepository
from typectl.infrastructure.repositories.member_type import MemberTypeRepository
from typectl.infrastructure.scope import ScopeProvider

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from typectl.config.settings import TypeSettings
    from typectl.infrastructure.scope import Scope


class TypeStore:
    """Engine, scopes and repository wiring for one database."""

    def __init__(self, settings: TypeSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(settings.database_path)
        self._scopes = ScopeProvider(self._engine, cache_enabled=settings.cache.enabled)
        self._common = ContentTypeCommonRepository()
        self._reconciler = StandardPropertyReconciler()

    @property
    def root(self) -> Path:
        return self._settings.project_root

    @property
    def settings(self) -> TypeSettings:
        return self._settings

    @property
    def scopes(self) -> ScopeProvider:
        return self._scopes

    @property
    def policy(self) -> ReconcilePolicy:
        return self._settings.reconcile

    def member_types(self, scope: Scope) -> MemberTypeRepository:
        """A member type repository bound to *scope*."""
        return MemberTypeRepository(
            scope,
            common=self._common,
            reconciler=self._reconciler,
            policy=self._settings.reconcile,
        )

    def close(self) -> None:
        """Dispose of pooled connections."""
        self._engine.dispose()

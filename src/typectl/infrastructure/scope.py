"""Scopes — the unit of work every repository call runs inside.

A scope owns one database connection with an open transaction and one
:class:`RepositoryCache`.  The transaction commits only when the caller
marked the scope complete; leaving the block any other way (including
an exception) rolls everything back, so a multi-row save or delete is
all-or-nothing.

Usage::

    with provider.create_scope() as scope:
        repo = MemberTypeRepository(scope)
        repo.save(member_type)
        scope.complete()
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from typectl.infrastructure.cache import NullCache, RepositoryCache

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


@dataclass
class Scope:
    """Active unit of work: connection, cache, completion flag."""

    conn: Connection
    cache: RepositoryCache[Any] = field(default_factory=RepositoryCache)
    completed: bool = False

    def complete(self) -> None:
        """Mark the scope for commit when its block exits normally."""
        self.completed = True


class ScopeProvider:
    """Creates scopes bound to a SQLAlchemy engine."""

    def __init__(self, engine: Engine, *, cache_enabled: bool = True) -> None:
        self._engine = engine
        self._cache_enabled = cache_enabled

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def cache_enabled(self) -> bool:
        return self._cache_enabled

    @contextmanager
    def create_scope(self) -> Iterator[Scope]:
        """Open a connection and transaction; commit only if completed.

        Exceptions raised inside the block roll back and propagate.
        """
        cache: RepositoryCache[Any] = RepositoryCache() if self._cache_enabled else NullCache()
        with self._engine.connect() as conn:
            trans = conn.begin()
            scope = Scope(conn=conn, cache=cache)
            try:
                yield scope
            except BaseException:
                trans.rollback()
                raise
            if scope.completed:
                trans.commit()
            else:
                logger.debug("Scope exited without complete(); rolling back")
                trans.rollback()

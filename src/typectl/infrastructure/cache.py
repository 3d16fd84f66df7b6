"""Per-scope lookup cache for type aggregates.

One cache lives on each :class:`~typectl.infrastructure.scope.Scope`, so
its lifetime is the caller's unit of work and it is never shared across
concurrent scopes.  An aggregate is reachable under three keys: integer
id, stable key, and normalized alias.

Entries are deep copies on the way in and on the way out; a caller that
mutates a fetched aggregate never changes what the next fetch returns.
The cache is not authoritative: a miss falls through to storage, and a
hit is trusted until the repository evicts it on a write.
"""

from __future__ import annotations

import copy
from typing import Generic, TypeVar
from uuid import UUID

from typectl.domain.models import ContentTypeBase, normalize_alias

T = TypeVar("T", bound=ContentTypeBase)


class RepositoryCache(Generic[T]):
    """Keyed aggregate cache (id, key, alias → aggregate)."""

    def __init__(self) -> None:
        self._by_id: dict[int, T] = {}
        self._by_key: dict[UUID, T] = {}
        self._by_alias: dict[str, T] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_id(self, type_id: int) -> T | None:
        return self._copy(self._by_id.get(type_id))

    def get_by_key(self, key: UUID) -> T | None:
        return self._copy(self._by_key.get(key))

    def get_by_alias(self, alias: str) -> T | None:
        return self._copy(self._by_alias.get(normalize_alias(alias)))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def put(self, entity: T) -> None:
        """Cache a snapshot of *entity* under all three keys.

        Aggregates without identity are ignored.
        """
        if not entity.has_identity or not entity.alias:
            return
        self.evict(entity)
        snapshot = copy.deepcopy(entity)
        self._by_id[snapshot.id] = snapshot
        self._by_key[snapshot.key] = snapshot
        self._by_alias[normalize_alias(snapshot.alias)] = snapshot

    def evict(self, entity: T) -> None:
        """Drop every entry for *entity*, including the alias it was cached under."""
        stale: list[T] = []
        for cached in (self._by_id.get(entity.id), self._by_key.get(entity.key)):
            if cached is not None:
                stale.append(cached)

        self._by_id.pop(entity.id, None)
        self._by_key.pop(entity.key, None)
        if entity.alias:
            self._by_alias.pop(normalize_alias(entity.alias), None)

        for cached in stale:
            self._by_id.pop(cached.id, None)
            self._by_key.pop(cached.key, None)
            if cached.alias:
                self._by_alias.pop(normalize_alias(cached.alias), None)

    @staticmethod
    def _copy(entity: T | None) -> T | None:
        if entity is None:
            return None
        return copy.deepcopy(entity)


class NullCache(RepositoryCache[T]):
    """Cache that stores nothing, so every lookup misses."""

    def put(self, entity: T) -> None:
        return None

"""MemberTypeRepository — persistence of member type aggregates.

The repository runs inside a caller-supplied :class:`Scope` and applies
the standard property rules at three points:

- **create** (no identity yet): missing standard properties are added
  before the first write and persisted with it.
- **update** (has identity): the aggregate is written as given.  Renamed
  or removed standard properties are *not* restored here.
- **fetch** (any ``get*`` call): missing standard properties are added
  to the freshly loaded aggregate and written back immediately, so a
  second fetch sees the same, stable structure.

Which of these runs the reconciler is decided by :class:`ReconcilePolicy`;
storage code below never branches on the policy itself.

Not-found is always ``None`` (or an omitted entry for batch fetches).
Validation failures raise :class:`TypeValidationError` before any row is
written.  Storage errors propagate unchanged; the scope rolls back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import delete, func, insert, select

from typectl.domain.errors import TypeValidationError
from typectl.domain.models import MemberPropertySettings, MemberType
from typectl.domain.reconcile import ReconcilePolicy, StandardPropertyReconciler
from typectl.infrastructure.database.schema import content_types, member_property_settings
from typectl.infrastructure.repositories.common import ContentTypeCommonRepository

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.sql.elements import ColumnElement

    from typectl.infrastructure.cache import RepositoryCache
    from typectl.infrastructure.scope import Scope

logger = logging.getLogger(__name__)


class MemberTypeRepository:
    """Create, update, fetch, list and delete member types within one scope."""

    def __init__(
        self,
        scope: Scope,
        *,
        common: ContentTypeCommonRepository | None = None,
        reconciler: StandardPropertyReconciler | None = None,
        policy: ReconcilePolicy | None = None,
    ) -> None:
        self._scope = scope
        self._common = common or ContentTypeCommonRepository()
        self._reconciler = reconciler or StandardPropertyReconciler()
        self._policy = policy or ReconcilePolicy()

    @property
    def _conn(self) -> Connection:
        return self._scope.conn

    @property
    def _cache(self) -> RepositoryCache[MemberType]:
        return self._scope.cache

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, member_type: MemberType) -> None:
        """Create or update *member_type*, assigning identity in place.

        Raises:
            TypeValidationError: alias missing or property aliases collide.
        """
        errors = member_type.validate()
        if errors:
            raise TypeValidationError(member_type.alias, errors)

        if member_type.has_identity:
            self._persist_updated(member_type)
        else:
            self._persist_new(member_type)

        self._cache.evict(member_type)

    def delete(self, member_type: MemberType) -> None:
        """Remove *member_type* and its whole structure.

        Deleting an aggregate whose rows are already gone is a no-op.
        """
        self._delete_member_settings(member_type.id)
        removed = self._common.delete(self._conn, member_type.id)
        self._cache.evict(member_type)
        logger.debug(
            "Deleted member type %r (id=%s, rows=%d)", member_type.alias, member_type.id, removed
        )

    def _persist_new(self, member_type: MemberType) -> None:
        if self._policy.on_create:
            self._ensure_standard_properties(member_type)
        self._common.insert(self._conn, member_type)
        self._insert_member_settings(member_type)

    def _persist_updated(self, member_type: MemberType) -> None:
        if self._policy.on_update:
            self._ensure_standard_properties(member_type)
        # Settings rows reference property rows the update may delete.
        self._delete_member_settings(member_type.id)
        self._common.update(self._conn, member_type)
        self._insert_member_settings(member_type)

    def _ensure_standard_properties(self, member_type: MemberType) -> bool:
        missing = self._reconciler.missing_aliases(member_type)
        if not self._reconciler.reconcile(member_type):
            return False
        logger.debug(
            "Added %d standard properties to member type %r: %s",
            len(missing),
            member_type.alias,
            ", ".join(missing),
        )
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, value: int | UUID | str) -> MemberType | None:
        """Fetch by id (``int``), stable key (``UUID``) or alias (``str``)."""
        if isinstance(value, bool):
            msg = f"Unsupported member type lookup value: {value!r}"
            raise TypeError(msg)
        if isinstance(value, int):
            return self.get_by_id(value)
        if isinstance(value, UUID):
            return self.get_by_key(value)
        if isinstance(value, str):
            return self.get_by_alias(value)
        msg = f"Unsupported member type lookup value: {value!r}"
        raise TypeError(msg)

    def get_by_id(self, type_id: int) -> MemberType | None:
        cached = self._cache.get_by_id(type_id)
        if cached is not None:
            return cached
        return self._fetch_one(content_types.c.id == type_id)

    def get_by_key(self, key: UUID) -> MemberType | None:
        cached = self._cache.get_by_key(key)
        if cached is not None:
            return cached
        return self._fetch_one(content_types.c.key == str(key))

    def get_by_alias(self, alias: str) -> MemberType | None:
        if not alias:
            return None
        cached = self._cache.get_by_alias(alias)
        if cached is not None:
            return cached
        return self._fetch_one(func.lower(content_types.c.alias) == alias.strip().lower())

    def get_many(self, keys: Iterable[UUID] | None = None) -> list[MemberType]:
        """All member types, or only those whose stable key is in *keys*.

        Unknown keys are silently omitted; result order is storage order.
        """
        if keys is None:
            return self._fetch(None)
        wanted = [str(key) for key in keys]
        if not wanted:
            return []
        return self._fetch(content_types.c.key.in_(wanted))

    def get_many_by_ids(self, ids: Iterable[int]) -> list[MemberType]:
        """Integer-id counterpart of :meth:`get_many`."""
        wanted = list(ids)
        if not wanted:
            return []
        return self._fetch(content_types.c.id.in_(wanted))

    def exists(self, type_id: int) -> bool:
        if self._cache.get_by_id(type_id) is not None:
            return True
        return self._common.exists(self._conn, MemberType, type_id)

    def count(self) -> int:
        return self._common.count(self._conn, MemberType)

    def _fetch_one(self, where: ColumnElement[bool]) -> MemberType | None:
        found = self._fetch(where)
        return found[0] if found else None

    def _fetch(self, where: ColumnElement[bool] | None) -> list[MemberType]:
        member_types = self._common.load(self._conn, MemberType, where=where)
        if not member_types:
            return []
        self._load_member_settings(member_types)
        for member_type in member_types:
            if self._policy.on_fetch and self._ensure_standard_properties(member_type):
                self._common.update(self._conn, member_type)
                logger.info(
                    "Persisted missing standard properties for member type %r", member_type.alias
                )
            self._cache.put(member_type)
        return member_types

    # ------------------------------------------------------------------
    # Member property settings
    # ------------------------------------------------------------------

    def _load_member_settings(self, member_types: list[MemberType]) -> None:
        by_id = {member_type.id: member_type for member_type in member_types}
        rows = self._conn.execute(
            select(member_property_settings).where(
                member_property_settings.c.content_type_id.in_(list(by_id))
            )
        ).all()
        for row in rows:
            member_type = by_id[row.content_type_id]
            for property_type in member_type.property_types:
                if property_type.id == row.property_type_id:
                    member_type.member_settings[property_type.key] = MemberPropertySettings(
                        can_edit=bool(row.member_can_edit),
                        can_view=bool(row.member_can_view),
                        is_sensitive=bool(row.is_sensitive),
                    )
                    break

    def _insert_member_settings(self, member_type: MemberType) -> None:
        rows = []
        for property_type in member_type.property_types:
            settings = member_type.settings_for(property_type)
            if settings.is_default:
                continue
            rows.append(
                {
                    "property_type_id": property_type.id,
                    "content_type_id": member_type.id,
                    "member_can_edit": int(settings.can_edit),
                    "member_can_view": int(settings.can_view),
                    "is_sensitive": int(settings.is_sensitive),
                }
            )
        if rows:
            self._conn.execute(insert(member_property_settings), rows)

    def _delete_member_settings(self, type_id: int) -> None:
        self._conn.execute(
            delete(member_property_settings).where(
                member_property_settings.c.content_type_id == type_id
            )
        )

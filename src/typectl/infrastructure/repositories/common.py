"""Row-level persistence shared by every composite type repository.

Member types (and any sibling kind sharing the ``content_types`` table)
persist the same three-level structure: the type row, its property
groups, and its property types.  This helper owns that SQL so the
kind-specific repositories only add their own rules on top.

Identity is assigned here: every insert writes the surrogate id back
into the in-memory object, so after a persist call every group and
property type of the aggregate has ``id != 0``.

The caller owns the transaction and passes the scope's ``Connection``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, insert, select, update

from typectl.domain.models import ContentTypeBase, PropertyGroup, PropertyType
from typectl.domain.types import ValueStorage
from typectl.infrastructure.database.schema import content_types, property_groups, property_types

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.sql.elements import ColumnElement

T = TypeVar("T", bound=ContentTypeBase)


class ContentTypeCommonRepository:
    """Persists and rebuilds the group/property structure of type aggregates."""

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, conn: Connection, content_type: ContentTypeBase) -> None:
        """Insert a new aggregate and its whole structure, assigning identity."""
        now = datetime.now(UTC)
        result = conn.execute(
            insert(content_types).values(
                key=str(content_type.key),
                object_type=str(content_type.object_type),
                alias=content_type.alias,
                name=content_type.name,
                description=content_type.description,
                icon=content_type.icon,
                created=now.isoformat(),
                modified=now.isoformat(),
            )
        )
        content_type.id = int(result.inserted_primary_key[0])
        content_type.create_date = now
        content_type.update_date = now
        self._persist_structure(conn, content_type)

    def update(self, conn: Connection, content_type: ContentTypeBase) -> None:
        """Write the aggregate's current state over its existing rows.

        Groups and property types missing from the aggregate are deleted;
        new ones are inserted and receive identity.
        """
        now = datetime.now(UTC)
        conn.execute(
            update(content_types)
            .where(content_types.c.id == content_type.id)
            .values(
                alias=content_type.alias,
                name=content_type.name,
                description=content_type.description,
                icon=content_type.icon,
                modified=now.isoformat(),
            )
        )
        content_type.update_date = now
        self._persist_structure(conn, content_type)

    def delete(self, conn: Connection, type_id: int) -> int:
        """Remove a type row and everything it contains.

        Returns the number of rows removed from the type table.
        """
        conn.execute(delete(property_types).where(property_types.c.content_type_id == type_id))
        conn.execute(delete(property_groups).where(property_groups.c.content_type_id == type_id))
        result = conn.execute(delete(content_types).where(content_types.c.id == type_id))
        return result.rowcount

    def _persist_structure(self, conn: Connection, content_type: ContentTypeBase) -> None:
        kept_groups: list[int] = []
        for group in content_type.property_groups:
            self._persist_group(conn, content_type.id, group)
            kept_groups.append(group.id)

        kept_properties: list[int] = []
        for property_type in content_type.property_types:
            self._persist_property_type(conn, content_type.id, property_type)
            kept_properties.append(property_type.id)

        conn.execute(
            delete(property_types).where(
                property_types.c.content_type_id == content_type.id,
                property_types.c.id.not_in(kept_properties),
            )
        )
        conn.execute(
            delete(property_groups).where(
                property_groups.c.content_type_id == content_type.id,
                property_groups.c.id.not_in(kept_groups),
            )
        )

    def _persist_group(self, conn: Connection, type_id: int, group: PropertyGroup) -> None:
        values = {
            "alias": group.alias,
            "name": group.name,
            "sort_order": group.sort_order,
        }
        if group.has_identity:
            conn.execute(
                update(property_groups).where(property_groups.c.id == group.id).values(**values)
            )
            return
        result = conn.execute(
            insert(property_groups).values(
                key=str(group.key),
                content_type_id=type_id,
                **values,
            )
        )
        group.id = int(result.inserted_primary_key[0])

    def _persist_property_type(
        self, conn: Connection, type_id: int, property_type: PropertyType
    ) -> None:
        values: dict[str, Any] = {
            "property_group_id": property_type.group.id if property_type.group else None,
            "alias": property_type.alias,
            "name": property_type.name,
            "description": property_type.description,
            "data_type": property_type.data_type,
            "value_storage": str(property_type.value_storage),
            "mandatory": int(property_type.mandatory),
            "validation_regex": property_type.validation_regex,
            "sort_order": property_type.sort_order,
        }
        if property_type.has_identity:
            conn.execute(
                update(property_types)
                .where(property_types.c.id == property_type.id)
                .values(**values)
            )
            return
        result = conn.execute(
            insert(property_types).values(
                key=str(property_type.key),
                content_type_id=type_id,
                **values,
            )
        )
        property_type.id = int(result.inserted_primary_key[0])

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load(
        self,
        conn: Connection,
        factory: type[T],
        *,
        where: ColumnElement[bool] | None = None,
    ) -> list[T]:
        """Rebuild every aggregate of *factory*'s object type matching *where*.

        Types without any group or property are returned too.
        """
        stmt = select(content_types).where(content_types.c.object_type == str(factory.object_type))
        if where is not None:
            stmt = stmt.where(where)
        type_rows = conn.execute(stmt.order_by(content_types.c.id)).all()
        if not type_rows:
            return []

        aggregates: dict[int, T] = {row.id: _build_aggregate(factory, row) for row in type_rows}
        type_ids = list(aggregates)

        groups: dict[int, PropertyGroup] = {}
        group_rows = conn.execute(
            select(property_groups)
            .where(property_groups.c.content_type_id.in_(type_ids))
            .order_by(property_groups.c.sort_order, property_groups.c.id)
        ).all()
        for row in group_rows:
            group = PropertyGroup(
                alias=row.alias,
                name=row.name or row.alias,
                sort_order=row.sort_order or 0,
                id=row.id,
                key=UUID(row.key),
            )
            groups[row.id] = group
            aggregates[row.content_type_id].property_groups.append(group)

        property_rows = conn.execute(
            select(property_types)
            .where(property_types.c.content_type_id.in_(type_ids))
            .order_by(property_types.c.sort_order, property_types.c.id)
        ).all()
        for row in property_rows:
            property_type = PropertyType(
                alias=row.alias,
                name=row.name or row.alias,
                data_type=row.data_type,
                value_storage=ValueStorage(row.value_storage),
                description=row.description,
                mandatory=bool(row.mandatory),
                validation_regex=row.validation_regex,
                sort_order=row.sort_order or 0,
                id=row.id,
                key=UUID(row.key),
            )
            group = groups.get(row.property_group_id) if row.property_group_id else None
            if group is not None:
                group.add_property_type(property_type)
            else:
                aggregates[row.content_type_id].no_group_property_types.append(property_type)

        return list(aggregates.values())

    def exists(self, conn: Connection, factory: type[T], type_id: int) -> bool:
        row = conn.execute(
            select(content_types.c.id).where(
                content_types.c.id == type_id,
                content_types.c.object_type == str(factory.object_type),
            )
        ).first()
        return row is not None

    def count(self, conn: Connection, factory: type[T]) -> int:
        stmt = select(func.count(content_types.c.id)).where(
            content_types.c.object_type == str(factory.object_type)
        )
        return int(conn.execute(stmt).scalar_one() or 0)


def _build_aggregate(factory: type[T], row: Any) -> T:
    return factory(
        alias=row.alias,
        name=row.name or "",
        description=row.description,
        icon=row.icon,
        id=row.id,
        key=UUID(row.key),
        create_date=datetime.fromisoformat(row.created),
        update_date=datetime.fromisoformat(row.modified),
    )

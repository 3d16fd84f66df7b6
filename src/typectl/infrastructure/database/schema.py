"""SQLAlchemy Core table definitions for the typectl database.

Three logical tables hold a type aggregate: the type row, its property
groups, and its property types (group FK nullable for groupless
properties).  ``object_type`` lets sibling composite kinds share the
tables; member-specific flags live in their own table.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    func,
)

metadata = MetaData()

content_types = Table(
    "content_types",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("key", Text, nullable=False, unique=True),  # UUID string
    Column("object_type", Text, nullable=False),
    Column("alias", Text, nullable=False),
    Column("name", Text),
    Column("description", Text),
    Column("icon", Text),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

property_groups = Table(
    "property_groups",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("key", Text, nullable=False, unique=True),
    Column("content_type_id", Integer, ForeignKey("content_types.id"), nullable=False),
    Column("alias", Text, nullable=False),
    Column("name", Text),
    Column("sort_order", Integer, default=0, server_default="0"),
)

property_types = Table(
    "property_types",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("key", Text, nullable=False, unique=True),
    Column("content_type_id", Integer, ForeignKey("content_types.id"), nullable=False),
    Column("property_group_id", Integer, ForeignKey("property_groups.id")),  # NULL = groupless
    Column("alias", Text, nullable=False),
    Column("name", Text),
    Column("description", Text),
    Column("data_type", Text, nullable=False),
    Column("value_storage", Text, nullable=False),
    Column("mandatory", Integer, default=0, server_default="0"),
    Column("validation_regex", Text),
    Column("sort_order", Integer, default=0, server_default="0"),
)

member_property_settings = Table(
    "member_property_settings",
    metadata,
    Column("property_type_id", Integer, ForeignKey("property_types.id"), primary_key=True),
    Column("content_type_id", Integer, ForeignKey("content_types.id"), nullable=False),
    Column("member_can_edit", Integer, default=0, server_default="0"),
    Column("member_can_view", Integer, default=0, server_default="0"),
    Column("is_sensitive", Integer, default=0, server_default="0"),
)

# ---------------------------------------------------------------------------
# Indexes for containment lookups
# ---------------------------------------------------------------------------

Index("ix_content_types_object_type", content_types.c.object_type)
Index("ix_property_groups_content_type", property_groups.c.content_type_id)
Index("ix_property_types_content_type", property_types.c.content_type_id)
Index("ix_property_types_group", property_types.c.property_group_id)
Index("ix_member_property_settings_content_type", member_property_settings.c.content_type_id)

# Type aliases are unique per object type regardless of case.
Index(
    "ux_content_types_alias",
    content_types.c.object_type,
    func.lower(content_types.c.alias),
    unique=True,
)

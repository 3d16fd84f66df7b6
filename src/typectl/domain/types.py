"""Classification enums for type definitions.

Object types distinguish the composite kinds that share the
``content_types`` table; value storage describes how property values
are stored by whoever consumes the definitions.
"""

from __future__ import annotations

from enum import StrEnum


class ObjectType(StrEnum):
    """Composite type kinds persisted in the shared type table."""

    MEMBER = "member"
    DOCUMENT = "document"
    MEDIA = "media"


class ValueStorage(StrEnum):
    """Storage class of the values held by a property type."""

    NVARCHAR = "nvarchar"
    NTEXT = "ntext"
    INTEGER = "integer"
    DATE = "date"
    DECIMAL = "decimal"

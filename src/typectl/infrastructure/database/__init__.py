"""SQLite database engine and schema via SQLAlchemy Core."""

from typectl.infrastructure.database.engine import create_db_engine, init_database
from typectl.infrastructure.database.schema import (
    content_types,
    member_property_settings,
    metadata,
    property_groups,
    property_types,
)

__all__ = [
    "content_types",
    "create_db_engine",
    "init_database",
    "member_property_settings",
    "metadata",
    "property_groups",
    "property_types",
]

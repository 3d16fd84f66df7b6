"""Shared service-layer helper functions."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from typectl.domain.models import MemberType, PropertyType


def parse_ident(value: str) -> int | UUID | str:
    """Interpret a user-supplied identifier.

    Digits are a surrogate id, a UUID is a stable key, anything else is
    an alias.

    Examples:
        >>> parse_ident("42")
        42
        >>> parse_ident("memberProfile")
        'memberProfile'
    """
    text = value.strip()
    if text.isdigit():
        return int(text)
    try:
        return UUID(text)
    except ValueError:
        return text


def serialize_property_type(member_type: MemberType, property_type: PropertyType) -> dict[str, Any]:
    settings = member_type.settings_for(property_type)
    return {
        "id": property_type.id,
        "key": str(property_type.key),
        "alias": property_type.alias,
        "name": property_type.name,
        "data_type": property_type.data_type,
        "value_storage": str(property_type.value_storage),
        "group": property_type.group.alias if property_type.group else None,
        "sort_order": property_type.sort_order,
        "mandatory": property_type.mandatory,
        "member_can_edit": settings.can_edit,
        "member_can_view": settings.can_view,
        "is_sensitive": settings.is_sensitive,
    }


def summarize_member_type(member_type: MemberType) -> dict[str, Any]:
    """Compact row for list output."""
    return {
        "id": member_type.id,
        "key": str(member_type.key),
        "alias": member_type.alias,
        "name": member_type.name,
        "groups": len(member_type.property_groups),
        "properties": len(member_type.property_types),
    }


def serialize_member_type(member_type: MemberType) -> dict[str, Any]:
    """Full JSON-safe representation of a member type."""
    data = summarize_member_type(member_type)
    data.update(
        {
            "description": member_type.description,
            "icon": member_type.icon,
            "created": member_type.create_date.isoformat() if member_type.create_date else None,
            "modified": member_type.update_date.isoformat() if member_type.update_date else None,
            "property_groups": [
                {
                    "id": group.id,
                    "key": str(group.key),
                    "alias": group.alias,
                    "name": group.name,
                    "sort_order": group.sort_order,
                    "property_types": [p.alias for p in group.property_types],
                }
                for group in member_type.property_groups
            ],
            "property_types": [
                serialize_property_type(member_type, p) for p in member_type.property_types
            ],
        }
    )
    return data

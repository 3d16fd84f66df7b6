"""Type aggregate model — composite type definitions with grouped properties.

A :class:`ContentTypeBase` owns an ordered list of :class:`PropertyGroup`
objects, each holding ordered :class:`PropertyType` objects, plus a
groupless bucket.  The flattened :attr:`ContentTypeBase.property_types`
view is computed on every access and never stored, so the grouped and
flat representations cannot diverge.

Identity:

- ``id`` is the storage surrogate, ``0`` until first persisted.
- ``key`` is a UUID assigned at construction and never changes.

INVARIANT: Property aliases are unique within one aggregate, compared
case-insensitively.  Group aliases follow the same rule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar
from uuid import UUID, uuid4

from typectl.domain.types import ObjectType, ValueStorage


def normalize_alias(alias: str) -> str:
    """Canonical form used for every alias comparison."""
    return alias.strip().lower()


# ---------------------------------------------------------------------------
# Property types and groups
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class PropertyType:
    """A single field definition within a type aggregate.

    ``data_type`` is an opaque editor alias; nothing here interprets it.
    ``group`` points back at the owning group, or None for groupless
    properties.
    """

    alias: str
    name: str = ""
    data_type: str = "textbox"
    value_storage: ValueStorage = ValueStorage.NVARCHAR
    description: str | None = None
    mandatory: bool = False
    validation_regex: str | None = None
    sort_order: int = 0
    id: int = 0
    key: UUID = field(default_factory=uuid4)
    group: PropertyGroup | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.alias

    @property
    def has_identity(self) -> bool:
        return self.id != 0


@dataclass(eq=False)
class PropertyGroup:
    """Named, ordered container of property types."""

    alias: str
    name: str = ""
    sort_order: int = 0
    id: int = 0
    key: UUID = field(default_factory=uuid4)
    property_types: list[PropertyType] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.alias
        for property_type in self.property_types:
            property_type.group = self

    @property
    def has_identity(self) -> bool:
        return self.id != 0

    def next_sort_order(self) -> int:
        """Sort order for a property appended after the existing ones."""
        if not self.property_types:
            return 0
        return max(p.sort_order for p in self.property_types) + 1

    def add_property_type(self, property_type: PropertyType) -> None:
        """Append *property_type* and point its back-reference at this group."""
        property_type.group = self
        self.property_types.append(property_type)

    def remove_property_type(self, property_type: PropertyType) -> None:
        self.property_types = [p for p in self.property_types if p is not property_type]
        property_type.group = None


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class ContentTypeBase:
    """Composite type definition shared by every object type.

    Subclasses set :attr:`object_type`; the common persistence helper
    uses it to keep sibling kinds apart in shared tables.
    """

    object_type: ClassVar[ObjectType]

    alias: str | None
    name: str = ""
    description: str | None = None
    icon: str | None = None
    id: int = 0
    key: UUID = field(default_factory=uuid4)
    create_date: datetime | None = None
    update_date: datetime | None = None
    property_groups: list[PropertyGroup] = field(default_factory=list)
    no_group_property_types: list[PropertyType] = field(default_factory=list)

    @property
    def has_identity(self) -> bool:
        return self.id != 0

    @property
    def property_types(self) -> list[PropertyType]:
        """Every property type, grouped ones first, deduplicated by reference."""
        seen: set[int] = set()
        result: list[PropertyType] = []
        for group in self.property_groups:
            for property_type in group.property_types:
                if id(property_type) not in seen:
                    seen.add(id(property_type))
                    result.append(property_type)
        for property_type in self.no_group_property_types:
            if id(property_type) not in seen:
                seen.add(id(property_type))
                result.append(property_type)
        return result

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def property_type(self, alias: str) -> PropertyType | None:
        wanted = normalize_alias(alias)
        for property_type in self.property_types:
            if normalize_alias(property_type.alias) == wanted:
                return property_type
        return None

    def has_property_type(self, alias: str) -> bool:
        return self.property_type(alias) is not None

    def property_group(self, alias: str) -> PropertyGroup | None:
        wanted = normalize_alias(alias)
        for group in self.property_groups:
            if normalize_alias(group.alias) == wanted:
                return group
        return None

    def property_aliases(self) -> set[str]:
        """Normalized aliases of every property type in the aggregate."""
        return {normalize_alias(p.alias) for p in self.property_types}

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def next_group_sort_order(self) -> int:
        if not self.property_groups:
            return 0
        return max(g.sort_order for g in self.property_groups) + 1

    def add_property_group(self, alias: str, name: str | None = None) -> PropertyGroup:
        """Return the group named *alias*, appending a new one if absent."""
        group = self.property_group(alias)
        if group is None:
            group = PropertyGroup(
                alias=alias,
                name=name or alias,
                sort_order=self.next_group_sort_order(),
            )
            self.property_groups.append(group)
        return group

    def add_property_type(
        self,
        property_type: PropertyType,
        group_alias: str | None = None,
        group_name: str | None = None,
    ) -> bool:
        """Add *property_type* to a group (created if missing) or the groupless bucket.

        Returns False and leaves the aggregate untouched when the alias
        is already taken.
        """
        if self.has_property_type(property_type.alias):
            return False

        if group_alias is None:
            property_type.group = None
            self.no_group_property_types.append(property_type)
            return True

        group = self.add_property_group(group_alias, group_name)
        if property_type.sort_order == 0 and group.property_types:
            property_type.sort_order = group.next_sort_order()
        group.add_property_type(property_type)
        return True

    def remove_property_type(self, alias: str) -> bool:
        """Remove the property type named *alias* wherever it lives."""
        property_type = self.property_type(alias)
        if property_type is None:
            return False
        if property_type.group is not None:
            property_type.group.remove_property_type(property_type)
        self.no_group_property_types = [
            p for p in self.no_group_property_types if p is not property_type
        ]
        return True

    def clear_property_types(self) -> None:
        """Remove every property type; the groups themselves are kept."""
        for group in self.property_groups:
            for property_type in group.property_types:
                property_type.group = None
            group.property_types = []
        self.no_group_property_types = []

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> list[str]:
        """Business-rule checks run before any write. Empty list means valid."""
        errors: list[str] = []
        if self.alias is None or not self.alias.strip():
            errors.append(f"{type(self).__name__} alias is required")

        seen: set[str] = set()
        for property_type in self.property_types:
            if not property_type.alias or not property_type.alias.strip():
                errors.append("Property type alias is required")
                continue
            normalized = normalize_alias(property_type.alias)
            if normalized in seen:
                errors.append(f"Duplicate property type alias: {property_type.alias!r}")
            seen.add(normalized)
        return errors


@dataclass
class MemberPropertySettings:
    """Member-facing flags for one property type."""

    can_edit: bool = False
    can_view: bool = False
    is_sensitive: bool = False

    @property
    def is_default(self) -> bool:
        return not (self.can_edit or self.can_view or self.is_sensitive)


@dataclass(eq=False)
class MemberType(ContentTypeBase):
    """Type aggregate describing members.

    Besides the shared structure, a member type records per-property
    flags (member can edit, member can view, sensitive data).  Flags are
    keyed by the property's stable key so renaming a property keeps them.
    """

    object_type: ClassVar[ObjectType] = ObjectType.MEMBER

    member_settings: dict[UUID, MemberPropertySettings] = field(
        default_factory=dict, repr=False
    )

    def settings_for(self, property_type: PropertyType) -> MemberPropertySettings:
        """Flags for *property_type* (defaults when never set)."""
        return self.member_settings.get(property_type.key, MemberPropertySettings())

    def member_can_edit_property(self, alias: str) -> bool:
        property_type = self.property_type(alias)
        return property_type is not None and self.settings_for(property_type).can_edit

    def member_can_view_property(self, alias: str) -> bool:
        property_type = self.property_type(alias)
        return property_type is not None and self.settings_for(property_type).can_view

    def is_sensitive_property(self, alias: str) -> bool:
        property_type = self.property_type(alias)
        return property_type is not None and self.settings_for(property_type).is_sensitive

    def set_member_can_edit_property(self, alias: str, value: bool) -> bool:
        return self._set_flag(alias, "can_edit", value)

    def set_member_can_view_property(self, alias: str, value: bool) -> bool:
        return self._set_flag(alias, "can_view", value)

    def set_is_sensitive_property(self, alias: str, value: bool) -> bool:
        return self._set_flag(alias, "is_sensitive", value)

    def _set_flag(self, alias: str, flag: str, value: bool) -> bool:
        property_type = self.property_type(alias)
        if property_type is None:
            return False
        settings = self.member_settings.setdefault(property_type.key, MemberPropertySettings())
        setattr(settings, flag, value)
        return True

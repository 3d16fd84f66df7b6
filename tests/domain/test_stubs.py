"""Tests for the standard member property catalog."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from typectl.domain import stubs
from typectl.domain.stubs import MemberStubProvider, standard_property_type_stubs
from typectl.domain.types import ValueStorage


class TestCatalog:
    def test_has_seven_entries_in_order(self) -> None:
        assert MemberStubProvider().aliases() == [
            stubs.COMMENTS,
            stubs.FAILED_PASSWORD_ATTEMPTS,
            stubs.IS_APPROVED,
            stubs.IS_LOCKED_OUT,
            stubs.LAST_LOCKOUT_DATE,
            stubs.LAST_LOGIN_DATE,
            stubs.LAST_PASSWORD_CHANGE_DATE,
        ]

    def test_stubs_keyed_by_alias(self) -> None:
        catalog = standard_property_type_stubs()
        assert list(catalog) == MemberStubProvider().aliases()
        for alias, template in catalog.items():
            assert template.alias == alias

    def test_group_identity(self) -> None:
        provider = MemberStubProvider()
        assert provider.group_alias == "Membership"
        assert provider.group_name == "Membership"

    def test_value_storage(self) -> None:
        catalog = standard_property_type_stubs()
        assert catalog[stubs.COMMENTS].value_storage == ValueStorage.NTEXT
        assert catalog[stubs.IS_APPROVED].value_storage == ValueStorage.INTEGER
        assert catalog[stubs.LAST_LOGIN_DATE].value_storage == ValueStorage.DATE

    def test_templates_are_frozen(self) -> None:
        template = standard_property_type_stubs()[stubs.COMMENTS]
        with pytest.raises(ValidationError):
            template.alias = "other"  # type: ignore[misc]


class TestToPropertyType:
    def test_builds_fresh_instances(self) -> None:
        template = standard_property_type_stubs()[stubs.IS_APPROVED]
        first = template.to_property_type()
        second = template.to_property_type(sort_order=3)
        assert first is not second
        assert first.key != second.key
        assert first.id == 0
        assert second.sort_order == 3
        assert first.alias == stubs.IS_APPROVED
        assert first.data_type == "boolean"
        assert first.name == "Is Approved"

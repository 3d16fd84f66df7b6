"""Standard member properties — the built-in stub catalog.

Every member type must eventually carry these property types inside the
``Membership`` group.  Templates are frozen and carry no identity; each
call to :meth:`PropertyTemplate.to_property_type` builds a brand-new
:class:`PropertyType` so two aggregates never share a property row.
"""

from __future__ import annotations

from pydantic import BaseModel

from typectl.domain.models import PropertyType
from typectl.domain.types import ValueStorage

STANDARD_GROUP_ALIAS = "Membership"
STANDARD_GROUP_NAME = "Membership"

COMMENTS = "umbracoMemberComments"
FAILED_PASSWORD_ATTEMPTS = "umbracoMemberFailedPasswordAttempts"
IS_APPROVED = "umbracoMemberApproved"
IS_LOCKED_OUT = "umbracoMemberLockedOut"
LAST_LOCKOUT_DATE = "umbracoMemberLastLockoutDate"
LAST_LOGIN_DATE = "umbracoMemberLastLogin"
LAST_PASSWORD_CHANGE_DATE = "umbracoMemberLastPasswordChangeDate"


class PropertyTemplate(BaseModel):
    """Immutable default definition of one standard property."""

    model_config = {"frozen": True}

    alias: str
    name: str
    data_type: str
    value_storage: ValueStorage = ValueStorage.NVARCHAR
    description: str | None = None

    def to_property_type(self, *, sort_order: int = 0) -> PropertyType:
        """Build a fresh, identity-less property type from this template."""
        return PropertyType(
            alias=self.alias,
            name=self.name,
            data_type=self.data_type,
            value_storage=self.value_storage,
            description=self.description,
            sort_order=sort_order,
        )


_STANDARD_TEMPLATES: tuple[PropertyTemplate, ...] = (
    PropertyTemplate(
        alias=COMMENTS,
        name="Comments",
        data_type="textarea",
        value_storage=ValueStorage.NTEXT,
    ),
    PropertyTemplate(
        alias=FAILED_PASSWORD_ATTEMPTS,
        name="Failed Password Attempts",
        data_type="label",
        value_storage=ValueStorage.INTEGER,
    ),
    PropertyTemplate(
        alias=IS_APPROVED,
        name="Is Approved",
        data_type="boolean",
        value_storage=ValueStorage.INTEGER,
    ),
    PropertyTemplate(
        alias=IS_LOCKED_OUT,
        name="Is Locked Out",
        data_type="boolean",
        value_storage=ValueStorage.INTEGER,
    ),
    PropertyTemplate(
        alias=LAST_LOCKOUT_DATE,
        name="Last Lockout Date",
        data_type="label",
        value_storage=ValueStorage.DATE,
    ),
    PropertyTemplate(
        alias=LAST_LOGIN_DATE,
        name="Last Login Date",
        data_type="label",
        value_storage=ValueStorage.DATE,
    ),
    PropertyTemplate(
        alias=LAST_PASSWORD_CHANGE_DATE,
        name="Last Password Change Date",
        data_type="label",
        value_storage=ValueStorage.DATE,
    ),
)


class MemberStubProvider:
    """Read-only provider of the standard member property catalog."""

    group_alias: str = STANDARD_GROUP_ALIAS
    group_name: str = STANDARD_GROUP_NAME

    def stubs(self) -> dict[str, PropertyTemplate]:
        """Alias → template, in catalog order."""
        return {template.alias: template for template in _STANDARD_TEMPLATES}

    def aliases(self) -> list[str]:
        return [template.alias for template in _STANDARD_TEMPLATES]


def standard_property_type_stubs() -> dict[str, PropertyTemplate]:
    """Shortcut for the default provider's catalog."""
    return MemberStubProvider().stubs()

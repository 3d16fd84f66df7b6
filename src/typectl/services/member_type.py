"""MemberTypeService — create, inspect, edit and delete member types.

Each public method runs in exactly one scope and completes it only when
the whole operation succeeded; returning early with a failure result
rolls the scope back.  Reads complete their scope too, because a fetch
may persist missing standard properties.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from typectl.domain.errors import TypeValidationError
from typectl.domain.models import MemberType, PropertyType, normalize_alias
from typectl.domain.stubs import MemberStubProvider
from typectl.services._helpers import (
    parse_ident,
    serialize_member_type,
    serialize_property_type,
    summarize_member_type,
)
from typectl.services.base import BaseService
from typectl.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from typectl.infrastructure.repositories.member_type import MemberTypeRepository

logger = logging.getLogger(__name__)


class MemberTypeService(BaseService):
    """Operations on member type definitions."""

    # ------------------------------------------------------------------
    # Create / read
    # ------------------------------------------------------------------

    def create_type(
        self,
        alias: str | None,
        *,
        name: str | None = None,
        description: str | None = None,
        icon: str | None = None,
        properties: list[dict[str, Any]] | None = None,
    ) -> ServiceResult:
        """Create a member type; standard properties are added automatically.

        *properties* items are dicts with ``alias`` and optional ``name``,
        ``data_type`` and ``group`` keys.
        """
        op = "create_type"
        member_type = MemberType(
            alias=alias,
            name=name or alias or "",
            description=description,
            icon=icon,
        )
        for item in properties or []:
            property_type = PropertyType(
                alias=str(item["alias"]),
                name=str(item.get("name") or ""),
                data_type=str(item.get("data_type") or "textbox"),
            )
            if not member_type.add_property_type(property_type, item.get("group")):
                return ServiceResult.failure(
                    op,
                    ErrorCode.PROPERTY_EXISTS,
                    f"Duplicate property alias: {property_type.alias}",
                    alias=property_type.alias,
                )

        with self._store.scopes.create_scope() as scope:
            repo = self._store.member_types(scope)
            if alias and repo.get_by_alias(alias) is not None:
                return ServiceResult.failure(
                    op,
                    ErrorCode.DUPLICATE_ALIAS,
                    f"A member type with alias {alias!r} already exists",
                    alias=alias,
                )
            try:
                repo.save(member_type)
            except TypeValidationError as exc:
                return ServiceResult.failure(
                    op, ErrorCode.VALIDATION_FAILED, str(exc), errors=exc.errors
                )
            scope.complete()

        logger.info("Created member type %r (id=%s)", member_type.alias, member_type.id)
        return ServiceResult(ok=True, op=op, data=serialize_member_type(member_type))

    def get_type(self, ident: str) -> ServiceResult:
        """Fetch one member type by id, key or alias."""
        op = "get_type"
        with self._store.scopes.create_scope() as scope:
            member_type = self._store.member_types(scope).get(parse_ident(ident))
            if member_type is None:
                return _not_found(op, ident)
            scope.complete()
        return ServiceResult(ok=True, op=op, data=serialize_member_type(member_type))

    def list_types(self) -> ServiceResult:
        op = "list_types"
        with self._store.scopes.create_scope() as scope:
            member_types = self._store.member_types(scope).get_many()
            scope.complete()
        items = [summarize_member_type(m) for m in member_types]
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})

    def exists(self, type_id: int) -> ServiceResult:
        op = "exists"
        with self._store.scopes.create_scope() as scope:
            found = self._store.member_types(scope).exists(type_id)
            scope.complete()
        return ServiceResult(ok=True, op=op, data={"id": type_id, "exists": found})

    # ------------------------------------------------------------------
    # Update / delete
    # ------------------------------------------------------------------

    def delete_type(self, ident: str) -> ServiceResult:
        op = "delete_type"
        with self._store.scopes.create_scope() as scope:
            repo = self._store.member_types(scope)
            member_type = repo.get(parse_ident(ident))
            if member_type is None:
                return _not_found(op, ident)
            repo.delete(member_type)
            scope.complete()
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": member_type.id, "alias": member_type.alias, "deleted": True},
        )

    def add_property(
        self,
        ident: str,
        alias: str,
        *,
        name: str | None = None,
        data_type: str = "textbox",
        group: str | None = None,
    ) -> ServiceResult:
        """Add a property type to an existing member type."""
        op = "add_property"
        with self._store.scopes.create_scope() as scope:
            repo = self._store.member_types(scope)
            member_type = repo.get(parse_ident(ident))
            if member_type is None:
                return _not_found(op, ident)

            property_type = PropertyType(alias=alias, name=name or "", data_type=data_type)
            if not member_type.add_property_type(property_type, group):
                return ServiceResult.failure(
                    op,
                    ErrorCode.PROPERTY_EXISTS,
                    f"Member type {member_type.alias!r} already has property {alias!r}",
                    alias=alias,
                )
            result = self._save(op, repo, member_type)
            if result is not None:
                return result
            scope.complete()

        return ServiceResult(
            ok=True, op=op, data=serialize_property_type(member_type, property_type)
        )

    def rename_property(self, ident: str, old_alias: str, new_alias: str) -> ServiceResult:
        """Rename a property type (update path; standard properties are not restored)."""
        op = "rename_property"
        warnings: list[str] = []
        with self._store.scopes.create_scope() as scope:
            repo = self._store.member_types(scope)
            member_type = repo.get(parse_ident(ident))
            if member_type is None:
                return _not_found(op, ident)

            property_type = member_type.property_type(old_alias)
            if property_type is None:
                return _property_not_found(op, member_type, old_alias)
            clash = member_type.property_type(new_alias)
            if clash is not None and clash is not property_type:
                return ServiceResult.failure(
                    op,
                    ErrorCode.PROPERTY_EXISTS,
                    f"Member type {member_type.alias!r} already has property {new_alias!r}",
                    alias=new_alias,
                )

            property_type.alias = new_alias
            result = self._save(op, repo, member_type)
            if result is not None:
                return result
            scope.complete()

        standard = {normalize_alias(alias) for alias in MemberStubProvider().stubs()}
        moved = normalize_alias(old_alias) != normalize_alias(new_alias)
        if moved and normalize_alias(old_alias) in standard:
            warnings.append(
                f"{old_alias!r} is a standard property; it will be re-added on next fetch"
            )
        return ServiceResult(
            ok=True,
            op=op,
            data=serialize_property_type(member_type, property_type),
            warnings=warnings,
        )

    def set_member_permissions(
        self,
        ident: str,
        property_alias: str,
        *,
        can_edit: bool | None = None,
        can_view: bool | None = None,
        sensitive: bool | None = None,
    ) -> ServiceResult:
        """Change member-facing flags of one property; None leaves a flag as is."""
        op = "set_member_permissions"
        with self._store.scopes.create_scope() as scope:
            repo = self._store.member_types(scope)
            member_type = repo.get(parse_ident(ident))
            if member_type is None:
                return _not_found(op, ident)
            property_type = member_type.property_type(property_alias)
            if property_type is None:
                return _property_not_found(op, member_type, property_alias)

            if can_edit is not None:
                member_type.set_member_can_edit_property(property_alias, can_edit)
            if can_view is not None:
                member_type.set_member_can_view_property(property_alias, can_view)
            if sensitive is not None:
                member_type.set_is_sensitive_property(property_alias, sensitive)

            result = self._save(op, repo, member_type)
            if result is not None:
                return result
            scope.complete()

        return ServiceResult(
            ok=True, op=op, data=serialize_property_type(member_type, property_type)
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _save(
        op: str, repo: MemberTypeRepository, member_type: MemberType
    ) -> ServiceResult | None:
        """Save, translating validation failures. None means success."""
        try:
            repo.save(member_type)
        except TypeValidationError as exc:
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, str(exc), errors=exc.errors
            )
        return None


def _not_found(op: str, ident: str) -> ServiceResult:
    return ServiceResult.failure(
        op, ErrorCode.NOT_FOUND, f"No member type found for: {ident}", ident=ident
    )


def _property_not_found(op: str, member_type: MemberType, alias: str) -> ServiceResult:
    return ServiceResult.failure(
        op,
        ErrorCode.PROPERTY_NOT_FOUND,
        f"Member type {member_type.alias!r} has no property {alias!r}",
        alias=alias,
    )

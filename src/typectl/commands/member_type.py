"""Command group: member type definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from typectl.commands._base import TypeGroup
from typectl.services.member_type import MemberTypeService

if TYPE_CHECKING:
    from typectl.commands._context import AppContext


def _parse_property(raw: str) -> dict[str, str]:
    """Parse ``alias[:name[:data_type]][@group]`` into a property dict."""
    head, _, group = raw.partition("@")
    parts = head.split(":")
    if not parts[0]:
        msg = f"Invalid property definition: {raw!r}"
        raise click.BadParameter(msg)
    item = {"alias": parts[0]}
    if len(parts) > 1 and parts[1]:
        item["name"] = parts[1]
    if len(parts) > 2 and parts[2]:
        item["data_type"] = parts[2]
    if group:
        item["group"] = group
    return item


@click.group("type", cls=TypeGroup)
def member_type() -> None:
    """Create, inspect, edit and delete member types."""


@member_type.command(
    examples="""\
  typectl type create customer
  typectl type create customer --name Customer --icon icon-user
  typectl type create customer -p "tier:Tier:dropdown@content" -p nickname"""
)
@click.argument("alias")
@click.option("--name", default=None, help="Display name (defaults to the alias).")
@click.option("--description", default=None, help="Description.")
@click.option("--icon", default=None, help="Icon name.")
@click.option(
    "-p",
    "--property",
    "properties",
    multiple=True,
    help="Property as alias[:name[:data_type]][@group]. Repeatable.",
)
@click.pass_obj
def create(
    app: AppContext,
    alias: str,
    name: str | None,
    description: str | None,
    icon: str | None,
    properties: tuple[str, ...],
) -> None:
    """Create a member type (standard properties are added automatically)."""
    svc = MemberTypeService(app.store)
    app.emit(
        svc.create_type(
            alias,
            name=name,
            description=description,
            icon=icon,
            properties=[_parse_property(p) for p in properties],
        )
    )


@member_type.command(
    examples="""\
  typectl type get customer
  typectl type get 3
  typectl --json type get 2f1c8a52-8d7e-4a4b-9d55-4fdc1f4f7c0e"""
)
@click.argument("ident")
@click.pass_obj
def get(app: AppContext, ident: str) -> None:
    """Show a member type by id, key or alias."""
    app.emit(MemberTypeService(app.store).get_type(ident))


@member_type.command(
    "list",
    examples="""\
  typectl type list
  typectl -q type list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List every member type."""
    app.emit(MemberTypeService(app.store).list_types())


@member_type.command(examples="  typectl type exists 3")
@click.argument("type_id", type=int)
@click.pass_obj
def exists(app: AppContext, type_id: int) -> None:
    """Check whether a member type id exists."""
    app.emit(MemberTypeService(app.store).exists(type_id))


@member_type.command(examples="  typectl type delete customer")
@click.argument("ident")
@click.pass_obj
def delete(app: AppContext, ident: str) -> None:
    """Delete a member type with all its groups and properties."""
    app.emit(MemberTypeService(app.store).delete_type(ident))


@member_type.command(
    "add-property",
    examples="""\
  typectl type add-property customer phone
  typectl type add-property customer phone --name Phone --group contact""",
)
@click.argument("ident")
@click.argument("alias")
@click.option("--name", default=None, help="Display name (defaults to the alias).")
@click.option("--data-type", default="textbox", show_default=True, help="Editor alias.")
@click.option("--group", default=None, help="Group alias (created if missing).")
@click.pass_obj
def add_property(
    app: AppContext,
    ident: str,
    alias: str,
    name: str | None,
    data_type: str,
    group: str | None,
) -> None:
    """Add a property type to a member type."""
    svc = MemberTypeService(app.store)
    app.emit(svc.add_property(ident, alias, name=name, data_type=data_type, group=group))


@member_type.command(
    "rename-property",
    examples="  typectl type rename-property customer phone mobile",
)
@click.argument("ident")
@click.argument("old_alias")
@click.argument("new_alias")
@click.pass_obj
def rename_property(app: AppContext, ident: str, old_alias: str, new_alias: str) -> None:
    """Rename a property type."""
    app.emit(MemberTypeService(app.store).rename_property(ident, old_alias, new_alias))


@member_type.command(
    examples="""\
  typectl type permissions customer mobile --can-edit --can-view
  typectl type permissions customer mobile --no-can-edit --sensitive"""
)
@click.argument("ident")
@click.argument("property_alias")
@click.option("--can-edit/--no-can-edit", default=None, help="Member may edit the value.")
@click.option("--can-view/--no-can-view", default=None, help="Member may view the value.")
@click.option("--sensitive/--not-sensitive", default=None, help="Value is sensitive data.")
@click.pass_obj
def permissions(
    app: AppContext,
    ident: str,
    property_alias: str,
    can_edit: bool | None,
    can_view: bool | None,
    sensitive: bool | None,
) -> None:
    """Set member-facing flags on a property type."""
    svc = MemberTypeService(app.store)
    app.emit(
        svc.set_member_permissions(
            ident,
            property_alias,
            can_edit=can_edit,
            can_view=can_view,
            sensitive=sensitive,
        )
    )

"""Subcommand modules for typectl.

Provides register_commands() which uses deferred imports to keep
``typectl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``type`` group and the standalone ``init`` command."""
    from typectl.commands.init_cmd import init_cmd
    from typectl.commands.member_type import member_type

    cli.add_command(member_type)
    cli.add_command(init_cmd)

"""Click base classes that carry usage examples.

Each command declares its examples beside its options.  ``--examples``
on a command prints that command's own list; on a group it prints the
group's list followed by every subcommand's, depth first.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import click


def iter_examples(command: click.Command, path: str) -> Iterator[tuple[str, str]]:
    """Yield ``(command path, examples)`` for *command* and its subcommands."""
    examples = getattr(command, "examples", None)
    if examples:
        yield path, examples
    if isinstance(command, click.Group):
        for name, sub in command.commands.items():
            if not sub.hidden:
                yield from iter_examples(sub, f"{path} {name}")


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    sections = list(iter_examples(ctx.command, ctx.command_path))
    if not sections:
        click.echo(f"No examples for '{ctx.command_path}'.")
        ctx.exit(0)

    click.echo(f"Examples for '{ctx.command_path}':")
    for path, examples in sections:
        click.echo()
        if len(sections) > 1:
            click.echo(f"{path}:")
        click.echo(examples)
    ctx.exit(0)


def _examples_option() -> click.Option:
    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_show_examples,
        help="Show usage examples.",
    )


class TypeCommand(click.Command):
    """Command with an ``--examples`` flag when it declares examples."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option())


class TypeGroup(click.Group):
    """Group whose ``--examples`` also covers its subcommands.

    Subcommands default to :class:`TypeCommand`.  The flag is always
    present because subcommands are attached after the group exists.
    """

    command_class = TypeCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.params.append(_examples_option())

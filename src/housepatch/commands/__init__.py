"""Subcommand modules for housepatch.

Provides register_commands() which uses deferred imports to keep
``housepatch --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from housepatch.commands.create import create
    from housepatch.commands.init_cmd import init_cmd
    from housepatch.commands.patch import patch
    from housepatch.commands.query import get, list_cmd
    from housepatch.commands.remove import remove
    from housepatch.commands.replace import replace

    cli.add_command(init_cmd)
    cli.add_command(create)
    cli.add_command(get)
    cli.add_command(list_cmd)
    cli.add_command(patch)
    cli.add_command(replace)
    cli.add_command(remove)

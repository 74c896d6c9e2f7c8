"""Commands: read houses."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from housepatch.commands._base import HouseCommand

if TYPE_CHECKING:
    from housepatch.commands._context import AppContext


@click.command(
    cls=HouseCommand,
    examples="""\
  housepatch get 7b4283fe-d046-4766-8015-ad4e50df4f67
  housepatch --json get 7b4283fe-d046-4766-8015-ad4e50df4f67""",
)
@click.argument("house_id")
@click.pass_obj
def get(app: AppContext, house_id: str) -> None:
    """Show one house with its address and rooms."""
    app.run("get_house", lambda: app.service.get_house(house_id))


@click.command(
    "list",
    cls=HouseCommand,
    examples="""\
  housepatch list
  housepatch --json list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all houses."""
    app.run("list_houses", lambda: app.service.list_houses())

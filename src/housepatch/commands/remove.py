"""Command: delete a house."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from housepatch.commands._base import HouseCommand

if TYPE_CHECKING:
    from housepatch.commands._context import AppContext


@click.command(
    cls=HouseCommand,
    examples="""\
  housepatch remove 7b4283fe-d046-4766-8015-ad4e50df4f67""",
)
@click.argument("house_id")
@click.pass_obj
def remove(app: AppContext, house_id: str) -> None:
    """Delete a house together with its address and rooms."""
    app.run("remove_house", lambda: app.service.remove_house(house_id))

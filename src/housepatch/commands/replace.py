"""Command: overwrite name, color and area of a house."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from housepatch.commands._base import HouseCommand

if TYPE_CHECKING:
    from housepatch.commands._context import AppContext

_REPLACE_EXAMPLES = """\
  housepatch replace 7b4283fe-d046-4766-8015-ad4e50df4f67 --name Home --color Blue --area 30.5"""


@click.command(cls=HouseCommand, examples=_REPLACE_EXAMPLES)
@click.argument("house_id")
@click.option("--name", required=True, help="New house name.")
@click.option("--color", required=True, help="New house color.")
@click.option("--area", required=True, help="New house area (decimal).")
@click.pass_obj
def replace(app: AppContext, house_id: str, name: str, color: str, area: str) -> None:
    """Replace the name, color and area of a house in one step."""
    update = {"name": name, "color": color, "area": area}
    app.run("update_by_replacement", lambda: app.service.update_by_replacement(update, house_id))

"""Command: create a house from a JSON document or from flags."""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING, Any

import click

from housepatch.commands._base import HouseCommand

if TYPE_CHECKING:
    from housepatch.commands._context import AppContext

_CREATE_EXAMPLES = """\
  housepatch create --name "Lake House" --color Blue --area 80
  housepatch create house.json
  echo '{"name": "Cabin", "color": "Brown", "area": 30}' | housepatch create -
  housepatch --json create house.json"""


@click.command(cls=HouseCommand, examples=_CREATE_EXAMPLES)
@click.argument("document", type=click.File("r"), required=False)
@click.option("--name", default=None, help="House name.")
@click.option("--color", default=None, help="House color.")
@click.option("--area", default=None, help="House area (decimal).")
@click.pass_obj
def create(
    app: AppContext,
    document: IO[str] | None,
    name: str | None,
    color: str | None,
    area: str | None,
) -> None:
    """Create a house.

    DOCUMENT is a JSON file (or ``-`` for stdin) with ``name``, ``color``,
    ``area`` and optional ``address`` and ``rooms``. Flags override the
    matching document fields.
    """
    request: dict[str, Any] = {}
    if document is not None:
        try:
            request = json.load(document)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"not valid JSON: {exc}", param_hint="DOCUMENT") from exc
        if not isinstance(request, dict):
            raise click.BadParameter("expected a JSON object", param_hint="DOCUMENT")
    overrides = {"name": name, "color": color, "area": area}
    request.update({k: v for k, v in overrides.items() if v is not None})

    app.run("create_house", lambda: app.service.create_house(request))

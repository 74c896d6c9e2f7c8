"""Command: apply a pointer-path patch document to a house."""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING

import click

from housepatch.commands._base import HouseCommand

if TYPE_CHECKING:
    from housepatch.commands._context import AppContext

_PATCH_EXAMPLES = """\
  housepatch patch 7b4283fe-d046-4766-8015-ad4e50df4f67 changes.json
  echo '[{"op": "replace", "path": "/name", "value": "Renamed"}]' \\
    | housepatch patch 7b4283fe-d046-4766-8015-ad4e50df4f67 -
  housepatch -v patch 2d6dea12-f724-45ad-adfb-c04703a41805 rooms.json"""


@click.command(cls=HouseCommand, examples=_PATCH_EXAMPLES)
@click.argument("house_id")
@click.argument("document", type=click.File("r"))
@click.pass_obj
def patch(app: AppContext, house_id: str, document: IO[str]) -> None:
    """Apply the patch in DOCUMENT (a JSON file, or ``-`` for stdin) to a house.

    The document is a JSON array of operations: ``add``, ``remove``,
    ``replace``, ``move``, ``copy`` and ``test``. Either all operations
    are applied or none are.
    """
    try:
        operations = json.load(document)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="DOCUMENT") from exc

    app.run("update_by_patch", lambda: app.service.update_by_patch(operations, house_id))

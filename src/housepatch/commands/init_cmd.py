"""Command: database initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from housepatch.commands._base import HouseCommand
from housepatch.services.result import ServiceResult

if TYPE_CHECKING:
    from housepatch.commands._context import AppContext

_INIT_EXAMPLES = """\
  housepatch init
  housepatch init --seed
  housepatch --db /tmp/houses.db init --seed"""


@click.command("init", cls=HouseCommand, examples=_INIT_EXAMPLES)
@click.option("--seed", is_flag=True, help="Load the sample houses into an empty database.")
@click.pass_obj
def init_cmd(app: AppContext, seed: bool) -> None:
    """Create the house database if it does not exist."""

    def _init() -> ServiceResult:
        from housepatch.infrastructure.seed import seed_store

        store = app.store
        seeded = seed_store(store) if seed else 0
        return ServiceResult(
            ok=True,
            op="init",
            data={"path": str(app.settings.db_path), "seeded": seeded},
        )

    app.run("init", _init)

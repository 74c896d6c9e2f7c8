"""Root CLI group for housepatch with global flags and command registration."""

from __future__ import annotations

import click

from housepatch import __version__
from housepatch.commands import register_commands
from housepatch.commands._context import AppContext
from housepatch.config.settings import HousePatchSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="housepatch")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with telemetry.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Database file (overrides [database] path).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    db_path: str | None,
) -> None:
    """housepatch — partial updates for houses, addresses and rooms."""
    ctx.ensure_object(dict)
    settings = HousePatchSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        verbose=verbose or None,
        log_json=log_json or None,
        db=db_path,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)

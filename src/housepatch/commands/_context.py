"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy store initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import click
import structlog

from housepatch.output.formatters import OutputSettings, format_result
from housepatch.services.result import UNEXPECTED, ServiceResult

if TYPE_CHECKING:
    from housepatch.config.settings import HousePatchSettings
    from housepatch.infrastructure.repository import HouseRepository
    from housepatch.services.house import HouseService

log = structlog.get_logger("housepatch.cli")


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The repository is created on first use so ``--help`` and ``--version``
    never touch the database.
    """

    def __init__(self, settings: HousePatchSettings) -> None:
        self.settings = settings
        self._store: HouseRepository | None = None

        from housepatch.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from housepatch.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> HouseRepository:
        """The house repository (created lazily on first access)."""
        if self._store is None:
            from housepatch.infrastructure.database.engine import init_database
            from housepatch.infrastructure.repository import HouseRepository

            engine = init_database(self.settings.db_path, echo=self.settings.database.echo)
            self._store = HouseRepository(engine)
        return self._store

    @property
    def service(self) -> HouseService:
        from housepatch.services.house import HouseService

        return HouseService(self.store)

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def run(self, op: str, call: Callable[[], ServiceResult]) -> None:
        """Invoke a service call and emit its result.

        Exceptions that escape the service are logged at critical level
        and reported as an ``UNEXPECTED`` failure with exit code 2.
        """
        exit_code = 1
        try:
            result = call()
        except Exception as exc:
            log.critical("command.failed", op=op, exc_info=True)
            result = ServiceResult.failure(op, UNEXPECTED, f"{type(exc).__name__}: {exc}")
            exit_code = 2
        finally:
            self.close()
        self.emit(result, exit_code=exit_code)

    def emit(self, result: ServiceResult, *, exit_code: int = 1) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with *exit_code*.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
            width=self.settings.output.width,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(exit_code)

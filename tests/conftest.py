"""Shared pytest fixtures for housepatch tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from housepatch.cli import cli
from housepatch.infrastructure.database.engine import init_database
from housepatch.infrastructure.repository import HouseRepository
from housepatch.infrastructure.seed import seed_store
from housepatch.services.house import HouseService
from housepatch.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _reset_cli_state() -> Generator[None]:
    """Undo what a CLI invocation configures process-wide.

    ``--verbose`` switches telemetry on for the whole context, and every
    invocation points the root log handler at the runner's stderr.
    """
    root = logging.getLogger()
    handlers = root.handlers[:]
    root_level = root.level
    pkg_level = logging.getLogger("housepatch").level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(root_level)
    logging.getLogger("housepatch").setLevel(pkg_level)
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "houses.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def repository(db_engine: Engine) -> HouseRepository:
    """Empty repository over a fresh database."""
    return HouseRepository(db_engine)


@pytest.fixture
def seeded_repository(repository: HouseRepository) -> HouseRepository:
    """Repository holding the sample houses.

    Includes "First House" (address, no rooms), "Second House" (address,
    two rooms) and "Eleventh House" (no address).
    """
    seed_store(repository)
    return repository


@pytest.fixture
def service(seeded_repository: HouseRepository) -> HouseService:
    return HouseService(seeded_repository)


@pytest.fixture
def _isolated_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI commands from a temp directory with no config or env overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_db")`` on command test
    classes. The database lands in ``tmp_path/.housepatch/houses.db``.
    """
    for var in (
        "HOUSEPATCH_CONFIG",
        "HOUSEPATCH_DB",
        "HOUSEPATCH_VERBOSE",
        "HOUSEPATCH_JSON_OUTPUT",
        "HOUSEPATCH_LOG_JSON",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def seeded_cli(cli_runner: CliRunner, _isolated_db: None) -> CliRunner:
    """CLI runner whose isolated database holds the sample houses."""
    result = cli_runner.invoke(cli, ["init", "--seed"])
    assert result.exit_code == 0, result.output
    return cli_runner

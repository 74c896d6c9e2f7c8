"""Tests for database engine setup."""

from pathlib import Path

from sqlalchemy import inspect, text

from housepatch.infrastructure.database.engine import create_db_engine, init_database


class TestInitDatabase:
    def test_creates_tables(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "houses.db")
        try:
            assert set(inspect(engine).get_table_names()) == {"houses", "addresses", "rooms"}
        finally:
            engine.dispose()

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "dir" / "houses.db"
        engine = init_database(db_path)
        engine.dispose()
        assert db_path.is_file()

    def test_idempotent(self, tmp_path: Path) -> None:
        init_database(tmp_path / "houses.db").dispose()
        engine = init_database(tmp_path / "houses.db")
        engine.dispose()

    def test_foreign_keys_enabled(self, tmp_path: Path) -> None:
        engine = create_db_engine(tmp_path / "houses.db")
        try:
            with engine.connect() as conn:
                assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        finally:
            engine.dispose()

"""Tests for HousePatchSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from housepatch.config.settings import HousePatchSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("CONFIG", "DB", "VERBOSE", "JSON_OUTPUT", "OUTPUT__WIDTH"):
        monkeypatch.delenv(f"HOUSEPATCH_{var}", raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = HousePatchSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.database.echo is False
        assert settings.output.width == 120
        assert settings.db_path == tmp_path / ".housepatch" / "houses.db"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = HousePatchSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "housepatch.toml").write_text('[database]\npath = "data/h.db"\necho = true\n')
        settings = HousePatchSettings.from_cli(root=tmp_path)
        assert settings.database.echo is True
        assert settings.db_path == tmp_path / "data" / "h.db"
        assert settings.output.width == 120

    def test_root_defaults_to_config_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "housepatch.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = HousePatchSettings.from_cli()
        assert settings.config_path == tmp_path / "housepatch.toml"
        assert settings.root == tmp_path

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[output]\nwidth = 80\n")
        settings = HousePatchSettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.output.width == 80
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "housepatch.toml").write_text("[database\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            HousePatchSettings.from_cli(root=tmp_path)


class TestPriority:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "housepatch.toml").write_text("[output]\nwidth = 80\n")
        monkeypatch.setenv("HOUSEPATCH_OUTPUT__WIDTH", "100")
        settings = HousePatchSettings.from_cli(root=tmp_path)
        assert settings.output.width == 100

    def test_cli_beats_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOUSEPATCH_DB", str(tmp_path / "env.db"))
        settings = HousePatchSettings.from_cli(root=tmp_path, db=tmp_path / "cli.db")
        assert settings.db_path == tmp_path / "cli.db"

    def test_none_flags_ignored(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOUSEPATCH_VERBOSE", "true")
        settings = HousePatchSettings.from_cli(root=tmp_path, verbose=None)
        assert settings.verbose is True

    def test_absolute_db_path_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere" / "x.db"
        settings = HousePatchSettings.from_cli(root=tmp_path / "root", db=target)
        assert settings.db_path == target

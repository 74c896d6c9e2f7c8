"""Tests for the create command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from housepatch.cli import cli


@pytest.mark.usefixtures("_isolated_db")
class TestCreateCommand:
    def test_from_flags(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "create", "--name", "Cabin", "--color", "Brown", "--area", "30"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["name"] == "Cabin"
        assert data["area"] == "30"
        assert data["address"] is None

    def test_from_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        doc = tmp_path / "house.json"
        doc.write_text(
            json.dumps(
                {
                    "name": "Lake House",
                    "color": "Blue",
                    "area": 80,
                    "address": {
                        "street": "Shore",
                        "houseNumber": "7",
                        "city": "Lakeside",
                        "country": "Nowhere",
                    },
                    "rooms": [{"name": "Hall", "color": "White", "area": 12}],
                }
            )
        )
        result = cli_runner.invoke(cli, ["--json", "create", str(doc)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["address"]["house_number"] == "7"
        assert data["rooms"][0]["name"] == "Hall"

        listed = json.loads(cli_runner.invoke(cli, ["--json", "list"]).stdout)
        assert listed["data"]["count"] == 1

    def test_flags_override_document(self, cli_runner: CliRunner) -> None:
        doc = json.dumps({"name": "Old", "color": "Red", "area": 1})
        result = cli_runner.invoke(cli, ["--json", "create", "-", "--name", "New"], input=doc)
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["data"]["name"] == "New"

    def test_missing_fields(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "create", "--name", "Cabin"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "MALFORMED_REQUEST"

    def test_non_object_document(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["create", "-"], input="[]")
        assert result.exit_code == 2
        assert "expected a JSON object" in result.stderr

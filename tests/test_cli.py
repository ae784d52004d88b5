# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the CLI layer using Click's CliRunner."""

from __future__ import annotations

import json

from click.testing import CliRunner

from rack_inventory.cli.app import cli


class TestCLI:
    """Tests for CLI commands."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "rack-inventory" in result.output
        for command in ("ingest", "show", "sites", "battery"):
            assert command in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_sites_list(self):
        result = CliRunner().invoke(cli, ["--no-color", "sites"])
        assert result.exit_code == 0
        assert "Sites" in result.output
        assert "moreno" in result.output

    def test_sites_detail(self):
        result = CliRunner().invoke(cli, ["--no-color", "sites", "moreno"])
        assert result.exit_code == 0
        assert "EQUIPMENT" in result.output
        assert "POWER" in result.output
        assert "330 W" in result.output

    def test_sites_unknown(self):
        result = CliRunner().invoke(cli, ["sites", "atlantis"])
        assert result.exit_code != 0

    def test_battery_due(self):
        result = CliRunner().invoke(cli, ["--no-color", "battery", "2000-01-01"])
        assert result.exit_code == 0
        assert "Remaining life: 0 months" in result.output
        assert "Battery replacement due" in result.output

    def test_sites_search_ignores_accents(self):
        result = CliRunner().invoke(
            cli, ["--no-color", "sites", "--search", "san martin"], env={"COLUMNS": "200"}
        )
        assert result.exit_code == 0
        assert "san-martin" in result.output
        assert "moreno" not in result.output
        assert "FLEET" in result.output

    def test_sites_search_no_match(self):
        result = CliRunner().invoke(cli, ["--no-color", "sites", "-s", "rosario"])
        assert result.exit_code == 0
        assert "No sites match" in result.output

    def test_battery_rejects_non_positive_lifespan(self):
        result = CliRunner().invoke(cli, ["battery", "2024-01-01", "--lifespan", "-5"])
        assert result.exit_code == 2
        assert "--lifespan" in result.output

    def test_battery_invalid_date(self):
        result = CliRunner().invoke(cli, ["battery", "not-a-date"])
        assert result.exit_code == 1
        assert "Invalid date" in result.output


class TestIngestCommand:
    """Tests for ingesting spreadsheets from the command line."""

    def test_ingest_and_show(self, rack_xlsx, tmp_path):
        runner = CliRunner()
        out = tmp_path / "site.json"
        result = runner.invoke(
            cli, ["--no-color", "ingest", str(rack_xlsx), "--export-json", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert "EQUIPMENT" in result.output
        assert "Site record exported to:" in result.output

        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["id"] == "cine_test"
        assert data["name"] == "Cine Test"
        assert len(data["equipment"]) == 7
        assert "powerConsumptionWatts" in data["equipment"][0]

        shown = runner.invoke(cli, ["--no-color", "show", str(out)])
        assert shown.exit_code == 0, shown.output
        assert "POWER" in shown.output

    def test_ingest_missing_file(self, tmp_path):
        result = CliRunner().invoke(cli, ["ingest", str(tmp_path / "missing.xlsx")])
        assert result.exit_code == 1
        assert "Could not ingest" in result.output
        assert "Fix the file and try again." in result.output

    def test_ingest_corrupt_file(self, tmp_path):
        path = tmp_path / "corrupt.xlsx"
        path.write_bytes(b"not a workbook")
        result = CliRunner().invoke(cli, ["ingest", str(path)])
        assert result.exit_code == 1
        assert "Could not ingest" in result.output

    def test_config_sheet_name(self, rack_xlsx, tmp_path):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("sheet_name: Missing\n")
        result = CliRunner().invoke(cli, ["-c", str(cfg), "ingest", str(rack_xlsx)])
        assert result.exit_code == 1
        assert "Missing" in result.output


class TestShowCommand:
    """Tests for showing exported site records."""

    def test_show_malformed_snapshot(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"id": "x", "equipment": [{"id": 1}]}', encoding="utf-8")
        result = CliRunner().invoke(cli, ["show", str(path)])
        assert result.exit_code == 1
        assert "Invalid site record" in result.output
        assert "Fix the file and try again." in result.output

    def test_show_not_json(self, tmp_path):
        path = tmp_path / "garbage.json"
        path.write_text("not json at all", encoding="utf-8")
        result = CliRunner().invoke(cli, ["show", str(path)])
        assert result.exit_code == 1
        assert "Invalid site record" in result.output

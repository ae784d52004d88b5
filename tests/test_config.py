# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for YAML configuration loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rack_inventory.config import AppConfig, load_config


class TestConfig:
    def test_defaults(self):
        cfg = AppConfig()
        assert cfg.battery_lifespan_months == 48
        assert cfg.battery_warning_months == 12
        assert cfg.sheet_name is None

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("battery_warning_months: 6\nsheet_name: Rack\n")
        cfg = load_config(path)
        assert cfg.battery_warning_months == 6
        assert cfg.sheet_name == "Rack"
        assert cfg.battery_lifespan_months == 48

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == AppConfig()

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/config.yaml")

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("battery_lifespan_months: 0\n")
        with pytest.raises(ValidationError):
            load_config(path)

# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Application configuration model and YAML loader."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from rack_inventory.analysis.battery import DEFAULT_WARNING_THRESHOLD_MONTHS
from rack_inventory.data.models import DEFAULT_BATTERY_LIFESPAN_MONTHS


class AppConfig(BaseModel):
    """Operator-tunable settings.

    The UPS efficiency and battery-health factors are engine constants
    in :mod:`rack_inventory.analysis.power`, not settings.
    """

    battery_lifespan_months: int = Field(default=DEFAULT_BATTERY_LIFESPAN_MONTHS, gt=0)
    battery_warning_months: int = Field(default=DEFAULT_WARNING_THRESHOLD_MONTHS, ge=0)
    sheet_name: str | None = Field(
        default=None, description="Worksheet to ingest; first sheet when unset"
    )
    log_level: str = Field(default="WARNING")


def load_config(path: str | Path) -> AppConfig:
    """Load an AppConfig from a YAML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    return AppConfig.model_validate(raw)

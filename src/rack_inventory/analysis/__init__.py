# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Pure calculators over a rack snapshot."""

from rack_inventory.analysis.battery import (
    battery_status,
    is_due_for_replacement,
    parse_install_date,
    remaining_life_months,
)
from rack_inventory.analysis.power import (
    autonomy_hours,
    estimated_autonomy_hours,
    total_power_consumption,
    total_ups_capacity_va,
    ups_load_percentage,
)
from rack_inventory.analysis.rack_summary import RackSummary, summarize_rack

__all__ = [
    "RackSummary",
    "autonomy_hours",
    "battery_status",
    "estimated_autonomy_hours",
    "is_due_for_replacement",
    "parse_install_date",
    "remaining_life_months",
    "summarize_rack",
    "total_power_consumption",
    "total_ups_capacity_va",
    "ups_load_percentage",
]

# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Power draw, UPS capacity, load and autonomy calculations.

Every figure is recomputed from the equipment list on each call; nothing
here caches or stores derived values.  Consumption is the rated draw of
every unit regardless of status, so offline equipment still counts.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from rack_inventory.data.models import EquipmentKind, EquipmentRecord

# Fixed engine-wide factors applied to the rated VA capacity.
UPS_EFFICIENCY = 0.9
BATTERY_HEALTH_FACTOR = 0.7


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a spreadsheet does (0.5 goes up), not banker's rounding."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def total_power_consumption(records: Iterable[EquipmentRecord]) -> float:
    """Sum of rated power draw in watts across all records."""
    return sum(r.power_consumption_watts or 0.0 for r in records)


def total_ups_capacity_va(records: Iterable[EquipmentRecord]) -> float:
    """Sum of rated capacity in VA across UPS records only."""
    return sum(
        r.ups_spec.capacity_va
        for r in records
        if r.kind is EquipmentKind.ups and r.ups_spec is not None
    )


def ups_load_percentage(total_consumption_w: float, total_capacity_va: float) -> int:
    """Consumption as a whole percentage of UPS capacity.

    Returns 0 when there is no UPS capacity.
    """
    if total_capacity_va <= 0:
        return 0
    return int(round_half_up(100 * total_consumption_w / total_capacity_va))


def autonomy_hours(total_capacity_va: float, total_consumption_w: float) -> float | None:
    """Hours the UPS bank can carry the load, to one decimal.

    Returns ``None`` (unbounded) when nothing draws power.
    """
    if total_consumption_w <= 0:
        return None
    hours = (
        total_capacity_va * UPS_EFFICIENCY * BATTERY_HEALTH_FACTOR
    ) / total_consumption_w
    return round_half_up(hours, 1)


def estimated_autonomy_hours(records: Sequence[EquipmentRecord]) -> float | None:
    """Estimated autonomy of the rack's UPS bank at its current rated load."""
    return autonomy_hours(
        total_ups_capacity_va(records), total_power_consumption(records)
    )

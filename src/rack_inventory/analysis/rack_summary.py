# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Dashboard summary for a single rack snapshot.

Projects the equipment list into the figures shown on the site
dashboard: power breakdown, UPS load and autonomy levels, status counts,
port usage and per-UPS battery health.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from datetime import date

from pydantic import BaseModel, Field

from rack_inventory.analysis.battery import (
    DEFAULT_WARNING_THRESHOLD_MONTHS,
    battery_status,
    is_due_for_replacement,
    remaining_life_months,
)
from rack_inventory.analysis.power import (
    autonomy_hours,
    total_power_consumption,
    total_ups_capacity_va,
    ups_load_percentage,
)
from rack_inventory.data.models import (
    BatteryStatus,
    EquipmentKind,
    EquipmentRecord,
    EquipmentStatus,
)
from rack_inventory.errors import InvalidDateError

logger = logging.getLogger(__name__)

_NETWORK_GROUP = {EquipmentKind.switch, EquipmentKind.router, EquipmentKind.firewall}

# Load thresholds (percent, exclusive lower bounds).
LOAD_RED_ABOVE = 80
LOAD_YELLOW_ABOVE = 60

# Autonomy thresholds (hours, exclusive upper bounds).
AUTONOMY_RED_BELOW = 2
AUTONOMY_YELLOW_BELOW = 4

# Dashboard alert thresholds.
LOAD_WARNING_ABOVE = 90
AUTONOMY_WARNING_BELOW = 2


class BatteryReport(BaseModel):
    """Battery health of one UPS unit."""

    equipment_id: str
    name: str
    install_date: str
    lifespan_months: int
    remaining_months: int
    due_for_replacement: bool
    status: BatteryStatus


class RackSummary(BaseModel):
    """Derived metrics for one snapshot. Never stored; rebuilt on demand."""

    equipment_count: int = 0
    total_power_w: float = 0.0
    power_by_group: dict[str, float] = Field(default_factory=dict)
    ups_units: int = 0
    ups_capacity_va: float = 0.0
    load_percentage: int = 0
    load_level: str = "green"
    autonomy_hours: float | None = None
    autonomy_level: str = "green"
    status_counts: dict[str, int] = Field(default_factory=dict)
    total_ports: int = 0
    active_ports: int = 0
    power_warnings: list[str] = Field(default_factory=list)
    batteries: list[BatteryReport] = Field(default_factory=list)

    @property
    def batteries_due(self) -> list[BatteryReport]:
        return [b for b in self.batteries if b.due_for_replacement]


def load_level(percentage: float) -> str:
    """Color level for a UPS load percentage."""
    if percentage > LOAD_RED_ABOVE:
        return "red"
    if percentage > LOAD_YELLOW_ABOVE:
        return "yellow"
    return "green"


def autonomy_level(hours: float | None) -> str:
    """Color level for an autonomy estimate; unbounded counts as green."""
    if hours is None:
        return "green"
    if hours < AUTONOMY_RED_BELOW:
        return "red"
    if hours < AUTONOMY_YELLOW_BELOW:
        return "yellow"
    return "green"


def power_alerts(load_percentage: float, hours: float | None) -> list[str]:
    """Operator alerts for high UPS load or low autonomy.

    Unbounded autonomy (``None``) never raises an alert.
    """
    warnings = []
    if load_percentage > LOAD_WARNING_ABOVE:
        warnings.append(
            f"Carga UPS alta ({load_percentage}%) - considerar reducir consumo."
        )
    if hours is not None and hours < AUTONOMY_WARNING_BELOW:
        warnings.append(
            f"Autonomía baja ({hours:g}h) - considerar agregar baterías."
        )
    return warnings


def _power_by_group(records: Sequence[EquipmentRecord]) -> dict[str, float]:
    groups = {"servers": 0.0, "network": 0.0, "other": 0.0}
    for r in records:
        if r.kind is EquipmentKind.server:
            groups["servers"] += r.power_consumption_watts
        elif r.kind in _NETWORK_GROUP:
            groups["network"] += r.power_consumption_watts
        elif r.kind is not EquipmentKind.ups:
            groups["other"] += r.power_consumption_watts
    return groups


def battery_reports(
    records: Sequence[EquipmentRecord],
    warning_threshold_months: int = DEFAULT_WARNING_THRESHOLD_MONTHS,
    today: date | None = None,
) -> list[BatteryReport]:
    """Battery health for every UPS that has a known install date."""
    reports: list[BatteryReport] = []
    for r in records:
        if r.kind is not EquipmentKind.ups or r.ups_spec is None:
            continue
        spec = r.ups_spec
        if not spec.battery_install_date:
            continue
        lifespan = spec.battery_lifespan_months
        try:
            remaining = remaining_life_months(
                spec.battery_install_date, lifespan, today=today
            )
            due = is_due_for_replacement(
                spec.battery_install_date, lifespan, warning_threshold_months, today=today
            )
            status = battery_status(spec.battery_install_date, lifespan, today=today)
        except InvalidDateError:
            logger.warning(
                "Ignoring unparseable battery date %r on %s",
                spec.battery_install_date, r.id,
            )
            continue
        reports.append(BatteryReport(
            equipment_id=r.id,
            name=r.name,
            install_date=spec.battery_install_date,
            lifespan_months=lifespan,
            remaining_months=remaining,
            due_for_replacement=due,
            status=status,
        ))
    return reports


def summarize_rack(
    records: Sequence[EquipmentRecord],
    warning_threshold_months: int = DEFAULT_WARNING_THRESHOLD_MONTHS,
    today: date | None = None,
) -> RackSummary:
    """Compute every dashboard figure for *records*."""
    total_power = total_power_consumption(records)
    capacity = total_ups_capacity_va(records)
    load = ups_load_percentage(total_power, capacity)
    autonomy = autonomy_hours(capacity, total_power)

    counts = Counter(r.status.value for r in records)
    status_counts = {s.value: counts.get(s.value, 0) for s in EquipmentStatus}

    total_ports = 0
    active_ports = 0
    for r in records:
        if r.network_spec is not None:
            total_ports += r.network_spec.total_ports
            active_ports += r.network_spec.active_ports

    return RackSummary(
        equipment_count=len(records),
        total_power_w=total_power,
        power_by_group=_power_by_group(records),
        ups_units=sum(1 for r in records if r.kind is EquipmentKind.ups),
        ups_capacity_va=capacity,
        load_percentage=load,
        load_level=load_level(load),
        autonomy_hours=autonomy,
        autonomy_level=autonomy_level(autonomy),
        power_warnings=power_alerts(load, autonomy),
        status_counts=status_counts,
        total_ports=total_ports,
        active_ports=active_ports,
        batteries=battery_reports(records, warning_threshold_months, today=today),
    )

# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Turn extracted spreadsheet tables into canonical equipment records.

This is the bridge between the section-scanning extractor and the rest
of the engine.  Components, status rows and port-detail JSON are joined
by row index (see :func:`join_components`), UPS units are matched to the
UPS table by brand and model, and patch panels are built from their own
ports table and placed after every other component.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from pydantic import BaseModel

from rack_inventory.data.models import (
    DEFAULT_BATTERY_LIFESPAN_MONTHS,
    NETWORK_KINDS,
    EquipmentKind,
    EquipmentRecord,
    EquipmentStatus,
    IngestionResult,
    PortRecord,
    RackFacts,
    UpsSpec,
)
from rack_inventory.ingest.extractor import (
    ComponentRow,
    ExtractedRackData,
    PatchPanelPortRow,
    StatusRow,
    UpsTableRow,
)
from rack_inventory.ingest.ports import (
    FREE_PORT_DESCRIPTION,
    USED_PORT_DESCRIPTION,
    build_port_details,
    network_spec_for,
)

logger = logging.getLogger(__name__)

# Capacity assumed for a UPS that is missing from the UPS table.
DEFAULT_UPS_CAPACITY_VA = 1000.0

# Nominal figures written onto ingested UPS records.
UPS_POWER_FACTOR = 0.9
INGESTED_BATTERY_HEALTH = 90

PATCH_PANEL_TARGET = "Dispositivo conectado"


class JoinedComponent(BaseModel):
    """A component row together with its status row and port-detail JSON."""

    row: ComponentRow
    status: StatusRow
    port_json: str = "{}"


def join_components(
    components: Sequence[ComponentRow],
    statuses: Sequence[StatusRow],
    port_details_json: Sequence[str],
) -> list[JoinedComponent]:
    """Pair the Nth component with the Nth status row and Nth JSON entry.

    The sheet has no key column, so the three regions are matched purely
    by position.  Missing entries default to a used unit with no ports.
    """
    joined = []
    for index, row in enumerate(components):
        status = statuses[index] if index < len(statuses) else StatusRow()
        port_json = port_details_json[index] if index < len(port_details_json) else "{}"
        joined.append(JoinedComponent(row=row, status=status, port_json=port_json))
    if len(statuses) != len(components):
        logger.debug(
            "Component/status row count mismatch: %d components, %d status rows",
            len(components), len(statuses),
        )
    return joined


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class RackAssembler:
    """Builds the equipment list for one extracted spreadsheet."""

    def assemble(self, data: ExtractedRackData) -> IngestionResult:
        """Convert *data* into an :class:`IngestionResult`."""
        joined = join_components(data.components, data.statuses, data.port_details_json)
        equipment = [
            self._build_component(item, position, data.facts, data.ups_units)
            for position, item in enumerate(joined, start=1)
        ]
        equipment.extend(self._build_patch_panels(data.patch_panel_ports, len(equipment)))
        logger.info("Assembled %d equipment records", len(equipment))
        return IngestionResult(facts=data.facts, equipment=equipment)

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def _build_component(
        self,
        item: JoinedComponent,
        position: int,
        facts: RackFacts,
        ups_units: Sequence[UpsTableRow],
    ) -> EquipmentRecord:
        row, status = item.row, item.status
        kind = row.kind
        is_used = status.is_used

        description = f"{row.brand} {row.model} - {kind.label}"
        if not is_used:
            description += " (SIN USAR)"

        record = EquipmentRecord(
            id=f"{kind.value}-{position}",
            kind=kind,
            name=f"{row.brand} {row.model}",
            brand=row.brand,
            model=row.model,
            description=description,
            status=EquipmentStatus.online if is_used else EquipmentStatus.maintenance,
            position=position,
            power_consumption_watts=row.consumption_w,
            is_used=is_used,
        )

        if kind in NETWORK_KINDS:
            ports = build_port_details(item.port_json, status.total_ports, status.used_ports)
            record.network_spec = network_spec_for(ports)
        if kind is EquipmentKind.ups:
            record.ups_spec = self._build_ups_spec(row, facts, ups_units)
        return record

    def _build_ups_spec(
        self,
        row: ComponentRow,
        facts: RackFacts,
        ups_units: Sequence[UpsTableRow],
    ) -> UpsSpec:
        match = _match_ups(row, ups_units)
        if match is None:
            logger.debug(
                "UPS %s %s not in UPS table, assuming %s VA",
                row.brand, row.model, _format_number(DEFAULT_UPS_CAPACITY_VA),
            )
        capacity_va = match.capacity_va if match else DEFAULT_UPS_CAPACITY_VA
        watts = math.floor(capacity_va * UPS_POWER_FACTOR)

        return UpsSpec(
            capacity_va=capacity_va,
            capacity_label=f"{_format_number(capacity_va)}VA / {watts}W",
            battery_health=INGESTED_BATTERY_HEALTH,
            load_percentage=math.floor(100 * row.consumption_w / capacity_va),
            estimated_runtime_minutes=max(0, math.floor(facts.estimated_autonomy * 60)),
            battery_install_date=facts.last_battery_change or None,
            battery_lifespan_months=DEFAULT_BATTERY_LIFESPAN_MONTHS,
        )

    # ------------------------------------------------------------------
    # Patch panels
    # ------------------------------------------------------------------

    def _build_patch_panels(
        self, rows: Sequence[PatchPanelPortRow], first_position: int
    ) -> list[EquipmentRecord]:
        grouped: dict[str, list[PatchPanelPortRow]] = {}
        for row in rows:
            grouped.setdefault(row.patch_panel_id, []).append(row)

        panels = []
        for offset, (panel_id, panel_rows) in enumerate(grouped.items(), start=1):
            declared = panel_rows[0].total_ports
            connected: dict[int, bool] = {}
            for row in panel_rows:
                connected.setdefault(row.port_number, row.is_connected)

            port_count = max(declared, max(connected))
            ports = [
                PortRecord(
                    port_number=number,
                    is_connected=connected.get(number, False),
                    connected_to=PATCH_PANEL_TARGET if connected.get(number) else None,
                    description=(
                        USED_PORT_DESCRIPTION if connected.get(number) else FREE_PORT_DESCRIPTION
                    ),
                )
                for number in range(1, port_count + 1)
            ]

            panels.append(EquipmentRecord(
                id=panel_id,
                kind=EquipmentKind.patch_panel,
                name=f"Panel de Conexiones {panel_id}",
                status=EquipmentStatus.online,
                position=first_position + offset,
                power_consumption_watts=0.0,
                network_spec=network_spec_for(ports),
                description=f"Panel de conexiones de {declared} puertos",
                is_used=True,
            ))
        return panels


def _match_ups(row: ComponentRow, ups_units: Sequence[UpsTableRow]) -> UpsTableRow | None:
    brand, model = row.brand.lower(), row.model.lower()
    for unit in ups_units:
        if unit.brand.lower() == brand and unit.model.lower() == model:
            return unit
    return None


def assemble(data: ExtractedRackData) -> IngestionResult:
    """Module-level shortcut for :meth:`RackAssembler.assemble`."""
    return RackAssembler().assemble(data)

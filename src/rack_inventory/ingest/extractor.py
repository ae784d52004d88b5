# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Section-scanning parser for rack description spreadsheets.

The sheet is not a single table.  It holds several independent sections
(header facts, a UPS table, a components table, a status/ports table, a
column of port-detail JSON, a patch-panel ports table), each introduced
by a label in the first column.  Every section is located with its own
linear scan over the grid, so sections may appear in any order and any
of them may be missing.

Row-level problems never raise: malformed rows are skipped or end their
section, and a missing section yields an empty list.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from rack_inventory.data.models import EquipmentKind, RackFacts
from rack_inventory.ingest.classifier import classify

logger = logging.getLogger(__name__)

Row = Sequence[Any]
Grid = Sequence[Row]


# ---------------------------------------------------------------------------
# Intermediate tables
# ---------------------------------------------------------------------------

class UpsTableRow(BaseModel):
    """One row of the UPS table (``UPS ID | Marca | Modelo | VA``)."""

    ups_id: str
    brand: str
    model: str
    capacity_va: float


class ComponentRow(BaseModel):
    """One row of the components table (``Tipo | Marca | Modelo | Consumo``)."""

    type_label: str
    kind: EquipmentKind
    brand: str
    model: str
    consumption_w: float = 0.0


class StatusRow(BaseModel):
    """One row of the status table (``Estado | Nº puertos | Puertos usados``)."""

    estado: str = "usado"
    total_ports: int = 0
    used_ports: int = 0

    @property
    def is_used(self) -> bool:
        return "usado" in self.estado


class PatchPanelPortRow(BaseModel):
    """One port of one patch panel."""

    patch_panel_id: str
    total_ports: int
    port_number: int
    is_connected: bool


class ExtractedRackData(BaseModel):
    """Everything the extractor found, before record assembly."""

    facts: RackFacts = Field(default_factory=RackFacts)
    ups_units: list[UpsTableRow] = Field(default_factory=list)
    components: list[ComponentRow] = Field(default_factory=list)
    statuses: list[StatusRow] = Field(default_factory=list)
    port_details_json: list[str] = Field(default_factory=list)
    patch_panel_ports: list[PatchPanelPortRow] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Section labels
# ---------------------------------------------------------------------------

LABEL_CINEMA_NAME = "nombre del cine"
LABEL_ADDRESS = "dirección"
LABEL_TOTAL_KVA = "kva totales del rack (suma ups)"
LABEL_TOTAL_CONSUMPTION = "consumo total de componentes (w)"
LABEL_AUTONOMY = "autonomía estimada (hr)"
LABEL_LAST_BATTERY_CHANGE = "fecha último cambio de baterías"
LABEL_NEXT_BATTERY_CHANGE = "fecha próxima de cambio (aprox +4 años)"
LABEL_HAS_GENERATOR = "¿tiene generador?"

LABEL_UPS_TABLE = "ups id"
LABEL_PATCH_PANEL_TABLE = "patchpanel id"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_rack_data(grid: Grid) -> ExtractedRackData:
    """Run every section scan over *grid*."""
    data = ExtractedRackData(
        facts=extract_facts(grid),
        ups_units=extract_ups_table(grid),
        components=extract_components(grid),
        statuses=extract_statuses(grid),
        port_details_json=extract_port_details(grid),
        patch_panel_ports=extract_patch_panel_ports(grid),
    )
    logger.info(
        "Extracted %d components, %d UPS rows, %d status rows, "
        "%d port-detail entries, %d patch-panel ports",
        len(data.components), len(data.ups_units), len(data.statuses),
        len(data.port_details_json), len(data.patch_panel_ports),
    )
    return data


def extract_facts(grid: Grid) -> RackFacts:
    """Collect ``[label, value]`` header facts from anywhere in the sheet."""
    facts = RackFacts()
    for row in grid:
        if not row or len(row) < 2:
            continue
        label = _label(row[0])
        value = row[1]

        if label == LABEL_CINEMA_NAME:
            facts.cinema_name = _text(value)
            # No separate location column; the cinema name stands in for it.
            facts.location = facts.cinema_name
        elif label == LABEL_ADDRESS:
            facts.address = _text(value)
        elif label == LABEL_TOTAL_KVA:
            facts.total_kva = _number(value)
        elif label == LABEL_TOTAL_CONSUMPTION:
            facts.total_consumption = _number(value)
        elif label == LABEL_AUTONOMY:
            facts.estimated_autonomy = _number(value)
        elif label == LABEL_LAST_BATTERY_CHANGE:
            facts.last_battery_change = _text(value)
        elif label == LABEL_NEXT_BATTERY_CHANGE:
            facts.next_battery_change = _text(value)
        elif label == LABEL_HAS_GENERATOR:
            facts.has_generator = "sí" in _label(value)
    return facts


def extract_ups_table(grid: Grid) -> list[UpsTableRow]:
    start = _find_section(grid, lambda row: _label(row[0]) == LABEL_UPS_TABLE)
    if start is None:
        return []

    units: list[UpsTableRow] = []
    for row in grid[start:]:
        if not row or len(row) < 4 or _is_empty(row[0]) or "tipo" in _label(row[0]):
            break
        ups_id = _text(row[0])
        brand = _text(row[1])
        model = _text(row[2])
        capacity = _number(row[3])
        if ups_id and brand and model and capacity > 0:
            units.append(UpsTableRow(
                ups_id=ups_id, brand=brand, model=model, capacity_va=capacity,
            ))
        else:
            logger.debug("Skipping incomplete UPS row: %r", row)
    return units


def extract_components(grid: Grid) -> list[ComponentRow]:
    start = _find_section(grid, _is_components_header)
    if start is None:
        return []

    components: list[ComponentRow] = []
    for row in grid[start:]:
        if not row or len(row) < 4:
            continue
        type_label = _text(row[0]).strip()
        brand = _text(row[1]).strip()
        model = _text(row[2]).strip()

        lowered = type_label.lower()
        if (
            not type_label
            or not brand
            or not model
            or "patchpanel" in lowered
            or "estado" in lowered
            or "detalle" in lowered
        ):
            break

        components.append(ComponentRow(
            type_label=type_label,
            kind=classify(type_label),
            brand=brand,
            model=model,
            consumption_w=max(0.0, _number(row[3])),
        ))
    return components


def extract_statuses(grid: Grid) -> list[StatusRow]:
    start = _find_section(grid, _is_status_header)
    if start is None:
        return []

    statuses: list[StatusRow] = []
    for row in grid[start:]:
        if not row or len(row) < 3:
            continue
        estado = _label(row[0])
        if "detalle" in estado or "ubicación" in estado:
            break
        if "usado" in estado or "sin usar" in estado:
            statuses.append(StatusRow(
                estado=estado,
                total_ports=max(0, int(_number(row[1]))),
                used_ports=max(0, int(_number(row[2]))),
            ))
        else:
            logger.debug("Skipping status row without usage marker: %r", row)
    return statuses


def extract_port_details(grid: Grid) -> list[str]:
    """Collect the raw port-detail JSON strings, one per component.

    The terminating empty / ``{}`` entry is kept, matching the component
    at that index with "no details".
    """
    start = _find_section(
        grid,
        lambda row: "detalle de puertos" in _label(row[0]) and "json" in _label(row[0]),
    )
    if start is None:
        return []

    details: list[str] = []
    for row in grid[start:]:
        if not row:
            continue
        text = "{}" if _is_empty(row[0]) else _text(row[0])
        details.append(text)
        if not text.strip() or text == "{}":
            break
    return details


def extract_patch_panel_ports(grid: Grid) -> list[PatchPanelPortRow]:
    start = _find_section(grid, lambda row: _label(row[0]) == LABEL_PATCH_PANEL_TABLE)
    if start is None:
        return []

    ports: list[PatchPanelPortRow] = []
    for row in grid[start:]:
        if not row or len(row) < 4 or _is_empty(row[0]):
            break
        pp_id = _text(row[0])
        total_ports = int(_number(row[1]))
        port_number = int(_number(row[2]))
        status = _label(row[3])
        if pp_id and total_ports > 0 and port_number > 0:
            ports.append(PatchPanelPortRow(
                patch_panel_id=pp_id,
                total_ports=total_ports,
                port_number=port_number,
                is_connected=_is_connected_status(status),
            ))
        else:
            logger.debug("Skipping incomplete patch-panel row: %r", row)
    return ports


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _find_section(grid: Grid, is_header: Callable[[Row], bool]) -> int | None:
    """Index of the first row after the header matched by *is_header*."""
    for i, row in enumerate(grid):
        if row and is_header(row):
            return i + 1
    return None


def _is_components_header(row: Row) -> bool:
    return (
        len(row) >= 4
        and _label(row[0]) == "tipo"
        and _label(row[1]) == "marca"
        and _label(row[2]) == "modelo"
        and "consumo" in _label(row[3])
    )


def _is_status_header(row: Row) -> bool:
    return (
        len(row) >= 3
        and "estado" in _label(row[0])
        and "nº puertos" in _label(row[1])
    )


def _is_connected_status(status: str) -> bool:
    if "usado" in status:
        return True
    return "used" in status and "unused" not in status


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value is False or value == 0


def _text(value: Any) -> str:
    """Render a cell as the text a spreadsheet user would see."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, datetime):
        if value.time() == datetime.min.time():
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _label(value: Any) -> str:
    return _text(value).lower().strip()


def _number(value: Any) -> float:
    """Coerce a cell to a number; anything unparseable becomes 0."""
    if value is None or isinstance(value, (date, datetime)):
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number

# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Shared test fixtures for the rack inventory test suite."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

import pytest
from openpyxl import Workbook

from rack_inventory.data.models import (
    EquipmentKind,
    EquipmentRecord,
    Site,
    UpsSpec,
)
from rack_inventory.data.samples import get_sample_site

# Fixed "now" for every battery calculation in the suite.
TODAY = date(2025, 6, 15)


def build_rack_grid() -> list[list]:
    """A complete rack sheet with every section present."""
    return [
        ["Nombre del cine", "Cine Test"],
        ["Dirección", "Av. Siempre Viva 742"],
        ["KVA totales del rack (suma ups)", 1.5],
        ["Consumo total de componentes (W)", 475],
        ["Autonomía estimada (hr)", 2.5],
        ["Fecha último cambio de baterías", "2023-03-10"],
        ["Fecha próxima de cambio (aprox +4 años)", "2027-03-10"],
        ["¿Tiene generador?", "Sí"],
        [],
        ["UPS ID", "Marca", "Modelo", "Capacidad (VA)"],
        ["UPS-1", "APC", "Smart-UPS 1500", 1500],
        ["UPS-2", "APC", "Smart-UPS 3000", 3000],
        [],
        ["Tipo", "Marca", "Modelo", "Consumo (W)"],
        ["Switch", "Cisco", "Catalyst 2960", 40],
        ["Servidor", "Dell", "R740", 300],
        ["Router Wireless", "Cisco", "C8200", 60],
        ["UPS", "APC", "Smart-UPS 1500", 50],
        ["Firewall", "Fortinet", "FG-60F", 25],
        [],
        ["Estado", "Nº Puertos", "Puertos usados"],
        ["usado", 24, 3],
        ["usado", 0, 0],
        ["usado", 8, 2],
        ["usado", 0, 0],
        ["sin usar", 8, 0],
        [],
        ["Detalle de puertos (JSON)"],
        ['{"1-2": "Servidor Dell", "24": "Router"}'],
        ['{"5": "ignored for servers"}'],
        ["not json"],
        ["{}"],
        [],
        ["PatchPanel ID", "Nº Puertos", "Puerto", "Estado"],
        ["PP-1", 12, 1, "usado"],
        ["PP-1", 12, 2, "libre"],
        ["PP-1", 12, 3, "usado"],
        ["PP-2", 6, 1, "used"],
    ]


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def rack_grid() -> list[list]:
    return build_rack_grid()


@pytest.fixture()
def minimal_grid() -> list[list]:
    """One server, one matching status row, nothing else."""
    return [
        ["Nombre del cine", "Cine Test"],
        ["Tipo", "Marca", "Modelo", "Consumo"],
        ["Servidor", "Dell", "R740", 300],
        ["Estado", "Nº Puertos", "Puertos usados"],
        ["usado", 0, 0],
    ]


@pytest.fixture()
def rack_xlsx(tmp_path: Path) -> Path:
    """The full rack grid written to an .xlsx file, with a real date cell."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Rack"
    for row in build_rack_grid():
        if row and row[0] == "Fecha último cambio de baterías":
            row = [row[0], datetime(2023, 3, 10)]
        ws.append(row)
    path = tmp_path / "cine_test.xlsx"
    wb.save(path)
    return path


@pytest.fixture()
def moreno_site() -> Site:
    """Two servers and two UPS units with ageing batteries."""
    return get_sample_site("moreno")


def make_record(**overrides) -> EquipmentRecord:
    defaults = {
        "id": "srv-1",
        "kind": EquipmentKind.server,
        "name": "test-server",
        "position": 1,
        "power_consumption_watts": 100.0,
    }
    defaults.update(overrides)
    return EquipmentRecord(**defaults)


def make_ups(capacity_va: float, install_date: str | None = None, **overrides) -> EquipmentRecord:
    defaults = {
        "id": f"ups-{int(capacity_va)}",
        "kind": EquipmentKind.ups,
        "name": f"UPS {int(capacity_va)}VA",
        "position": 10,
        "power_consumption_watts": 0.0,
        "ups_spec": UpsSpec(capacity_va=capacity_va, battery_install_date=install_date),
    }
    defaults.update(overrides)
    return EquipmentRecord(**defaults)

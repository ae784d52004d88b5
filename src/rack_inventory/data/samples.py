# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Demo sites used by the CLI ``sites`` command and the test suite.

Each site mirrors a real-world cinema rack layout: a mix of servers,
network gear and one or more UPS units with battery install dates.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from datetime import date

from rack_inventory.data.models import (
    EquipmentKind,
    EquipmentRecord,
    EquipmentStatus,
    NetworkSpec,
    PortRecord,
    ServerSpec,
    Site,
    UpsSpec,
)


def _network_spec(total_ports: int, connections: dict[int, str]) -> NetworkSpec:
    """Build a port list where *connections* maps port number to far end."""
    ports = []
    for number in range(1, total_ports + 1):
        connected_to = connections.get(number)
        ports.append(PortRecord(
            port_number=number,
            is_connected=connected_to is not None,
            connected_to=connected_to,
            description=f"Conectado a {connected_to}" if connected_to else "Puerto libre",
        ))
    return NetworkSpec(
        total_ports=total_ports,
        active_ports=len(connections),
        port_details=ports,
    )


SAMPLE_SITES: dict[str, Site] = {
    "malvinas-argentinas": Site(
        id="malvinas-argentinas",
        name="Cine Malvinas Argentinas",
        location="Malvinas Argentinas",
        address="Av. Presidente Perón 2500, Malvinas Argentinas, Buenos Aires",
        last_updated=date(2024, 1, 8),
        generator=False,
        equipment=[
            EquipmentRecord(
                id="quidway-3308",
                kind=EquipmentKind.switch,
                name="Quidway 3308 Series",
                model="Quidway 3308",
                status=EquipmentStatus.online,
                position=1,
                power_consumption_watts=25,
                network_spec=_network_spec(24, {
                    1: "Servidor de Proyección 01",
                    2: "Servidor de Audio",
                    3: "Cisco C8200 4T",
                    4: "Cisco FPR1000",
                }),
                description="Switch principal de distribución de red",
            ),
            EquipmentRecord(
                id="hp-proliant-dl360",
                kind=EquipmentKind.server,
                name="HP ProLiant DL360 Gen 10",
                model="DL360 Gen10",
                status=EquipmentStatus.online,
                position=7,
                power_consumption_watts=275,
                server_spec=ServerSpec(
                    cpu="2x Intel Xeon Silver 4214R",
                    ram_description="64GB DDR4 ECC",
                    storage_description="4x 1TB NVMe SSD RAID 10",
                ),
                description="Servidor principal para aplicaciones críticas del cine",
            ),
            EquipmentRecord(
                id="ups-main-10kva",
                kind=EquipmentKind.ups,
                name="UPS Principal 10kVA",
                model="APC Smart-UPS SRT 10kVA",
                status=EquipmentStatus.online,
                position=14,
                ups_spec=UpsSpec(
                    capacity_va=10000,
                    battery_install_date="2023-08-15",
                    load_percentage=8,
                ),
                description="UPS principal con autonomía de 5-7 horas",
            ),
        ],
    ),
    "moreno": Site(
        id="moreno",
        name="Cine Moreno",
        location="Moreno",
        address="Av. Victorica 1234, Moreno, Buenos Aires",
        last_updated=date(2024, 1, 8),
        generator=False,
        equipment=[
            EquipmentRecord(
                id="server-1",
                kind=EquipmentKind.server,
                name="Servidor de Proyección 01",
                position=1,
                power_consumption_watts=180,
                server_spec=ServerSpec(
                    cpu="Intel Xeon E5-2680 v4",
                    ram_description="64GB DDR4",
                    storage_description="4TB NVMe SSD",
                ),
                description="Servidor principal de proyección digital de cine",
            ),
            EquipmentRecord(
                id="ups-1",
                kind=EquipmentKind.ups,
                name="UPS Alimentación Principal",
                model="APC Smart-UPS 3000",
                status=EquipmentStatus.warning,
                position=2,
                ups_spec=UpsSpec(
                    capacity_va=3000,
                    battery_install_date="2022-03-15",
                    load_percentage=70,
                ),
                description="UPS principal para equipos críticos del cine",
            ),
            EquipmentRecord(
                id="server-2",
                kind=EquipmentKind.server,
                name="Servidor de Audio",
                position=3,
                power_consumption_watts=150,
                server_spec=ServerSpec(
                    cpu="AMD EPYC 7542",
                    ram_description="32GB DDR4",
                    storage_description="2TB SSD",
                ),
                description="Servidor de procesamiento de audio Dolby Atmos",
            ),
            EquipmentRecord(
                id="ups-2",
                kind=EquipmentKind.ups,
                name="UPS Secundario",
                model="APC Smart-UPS 1500",
                status=EquipmentStatus.warning,
                position=5,
                ups_spec=UpsSpec(
                    capacity_va=1500,
                    battery_install_date="2022-01-10",
                    load_percentage=80,
                ),
                description="UPS secundario para equipos de red",
            ),
        ],
    ),
    "san-martin": Site(
        id="san-martin",
        name="Cine San Martín",
        location="San Martín",
        address="Av. San Martín 9012, San Martín, Buenos Aires",
        last_updated=date(2024, 1, 8),
        generator=True,
        equipment=[
            EquipmentRecord(
                id="server-1",
                kind=EquipmentKind.server,
                name="Servidor de Proyección 01",
                position=1,
                power_consumption_watts=140,
                server_spec=ServerSpec(
                    cpu="AMD Ryzen 9 5900X",
                    ram_description="32GB DDR4",
                    storage_description="1TB NVMe SSD",
                ),
                description="Servidor de proyección de última generación",
            ),
            EquipmentRecord(
                id="ups-1",
                kind=EquipmentKind.ups,
                name="UPS Alimentación Principal",
                model="APC Smart-UPS 3000",
                position=2,
                ups_spec=UpsSpec(
                    capacity_va=3000,
                    battery_install_date="2023-11-01",
                    load_percentage=40,
                ),
                description="Nuevo sistema UPS principal",
            ),
        ],
    ),
}


def get_sample_site(site_id: str) -> Site:
    """Return a deep copy of the named demo site.

    Raises:
        KeyError: If *site_id* is not a known demo site.
    """
    if site_id not in SAMPLE_SITES:
        available = ", ".join(sorted(SAMPLE_SITES))
        raise KeyError(f"Unknown site '{site_id}'. Available: {available}")
    return SAMPLE_SITES[site_id].model_copy(deep=True)


def normalize_text(text: str) -> str:
    """Lower-case *text* and strip accents (``"Martín"`` -> ``"martin"``)."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).lower()


def search_sites(sites: Iterable[Site], query: str) -> list[Site]:
    """Sites whose name or location contains *query*, ignoring case and accents.

    An empty query matches every site.
    """
    needle = normalize_text(query)
    return [
        site for site in sites
        if needle in normalize_text(site.name) or needle in normalize_text(site.location)
    ]

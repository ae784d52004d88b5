# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Core Pydantic v2 data models for the rack inventory engine.

This module defines the data contract shared by the calculators, the
spreadsheet ingestion pipeline, the CLI and whatever persistence service
stores site records.  Field names are snake_case in Python and camelCase
on the wire (``model_dump(by_alias=True)``).
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class EquipmentKind(str, Enum):
    """Closed set of equipment kinds that can occupy a rack slot."""

    server = "server"
    patch_panel = "patch-panel"
    ups = "ups"
    switch = "switch"
    router = "router"
    firewall = "firewall"
    wireless_controller = "wireless-controller"
    converter = "converter"

    @property
    def label(self) -> str:
        """Upper-case label used in synthesized descriptions."""
        return self.value.replace("-", " ").upper()


class EquipmentStatus(str, Enum):
    """Operational status of a unit as recorded by the operator."""

    online = "online"
    offline = "offline"
    warning = "warning"
    maintenance = "maintenance"


class BatteryStatus(str, Enum):
    """Replacement urgency of a UPS battery bank."""

    critical = "critical"
    warning = "warning"
    good = "good"

    @property
    def color(self) -> str:
        """Terminal / report color associated with this status."""
        if self is BatteryStatus.critical:
            return "red"
        if self is BatteryStatus.warning:
            return "yellow"
        return "green"


# Kinds that carry a port list.
NETWORK_KINDS = frozenset({
    EquipmentKind.switch,
    EquipmentKind.router,
    EquipmentKind.firewall,
    EquipmentKind.wireless_controller,
    EquipmentKind.converter,
    EquipmentKind.patch_panel,
})

DEFAULT_BATTERY_LIFESPAN_MONTHS = 48


class _WireModel(BaseModel):
    model_config = {
        "frozen": False,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


# ---------------------------------------------------------------------------
# Equipment specs
# ---------------------------------------------------------------------------

class PortRecord(_WireModel):
    """One physical port on a network-capable unit."""

    port_number: int = Field(..., gt=0, description="1-based port index")
    is_connected: bool = Field(default=False)
    connected_to: Optional[str] = Field(
        default=None, description="Label of the far-end endpoint"
    )
    description: Optional[str] = None


class NetworkSpec(_WireModel):
    """Port inventory of a switch, router, firewall, converter or patch panel."""

    total_ports: int = Field(default=0, ge=0)
    active_ports: int = Field(default=0, ge=0)
    port_details: list[PortRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_ports(self) -> NetworkSpec:
        if self.active_ports > self.total_ports:
            raise ValueError(
                f"active_ports ({self.active_ports}) exceeds "
                f"total_ports ({self.total_ports})"
            )
        if self.port_details:
            numbers = [p.port_number for p in self.port_details]
            if numbers != list(range(1, self.total_ports + 1)):
                raise ValueError(
                    "port_details must list ports 1..total_ports exactly once, "
                    "in ascending order"
                )
        return self


class ServerSpec(_WireModel):
    """Descriptive hardware facts for a server; not used in calculations."""

    cpu: Optional[str] = None
    ram_description: Optional[str] = None
    storage_description: Optional[str] = None


class UpsSpec(_WireModel):
    """Rated capacity and battery facts for a UPS unit.

    ``battery_install_date`` is kept as the text the operator entered
    (ISO ``YYYY-MM-DD`` or ``DD/MM/YYYY``); the battery calculator parses
    it on use and raises ``InvalidDateError`` if it cannot.
    """

    capacity_va: float = Field(default=0.0, ge=0, description="Rated capacity in VA")
    battery_install_date: Optional[str] = None
    battery_lifespan_months: int = Field(
        default=DEFAULT_BATTERY_LIFESPAN_MONTHS, gt=0
    )
    load_percentage: Optional[float] = None

    # Annotations written by spreadsheet ingestion
    capacity_label: Optional[str] = None
    battery_health: Optional[int] = Field(default=None, ge=0, le=100)
    estimated_runtime_minutes: Optional[int] = Field(default=None, ge=0)


# ---------------------------------------------------------------------------
# Equipment record
# ---------------------------------------------------------------------------

class EquipmentRecord(_WireModel):
    """One physical unit occupying a rack position."""

    id: str = Field(..., description="Opaque identifier, stable across edits")
    kind: EquipmentKind
    name: str
    model: Optional[str] = None
    description: Optional[str] = None
    status: EquipmentStatus = EquipmentStatus.online
    position: int = Field(..., gt=0, description="Rack-unit slot")
    power_consumption_watts: float = Field(
        default=0.0, ge=0, description="Rated power draw in watts"
    )

    network_spec: Optional[NetworkSpec] = None
    server_spec: Optional[ServerSpec] = None
    ups_spec: Optional[UpsSpec] = None

    brand: Optional[str] = None
    is_used: bool = True

    @property
    def is_network(self) -> bool:
        return self.kind in NETWORK_KINDS


# ---------------------------------------------------------------------------
# Site and ingestion result
# ---------------------------------------------------------------------------

class Site(_WireModel):
    """A physical site (cinema) and the equipment currently in its rack."""

    id: str
    name: str
    location: str = ""
    address: str = ""
    generator: bool = False
    last_updated: Optional[date] = None
    equipment: list[EquipmentRecord] = Field(default_factory=list)


class RackFacts(_WireModel):
    """Header facts declared at the top of a rack spreadsheet."""

    cinema_name: str = ""
    location: str = ""
    address: str = ""
    total_kva: float = 0.0
    total_consumption: float = 0.0
    estimated_autonomy: float = 0.0
    last_battery_change: str = ""
    next_battery_change: str = ""
    has_generator: bool = False


class IngestionResult(_WireModel):
    """Output of spreadsheet ingestion: header facts plus canonical records."""

    facts: RackFacts = Field(default_factory=RackFacts)
    equipment: list[EquipmentRecord] = Field(default_factory=list)

    def to_site(self, site_id: str, last_updated: date | None = None) -> Site:
        """Bundle this result into a ``Site`` ready to hand to persistence."""
        return Site(
            id=site_id,
            name=self.facts.cinema_name or site_id,
            location=self.facts.location,
            address=self.facts.address,
            generator=self.facts.has_generator,
            last_updated=last_updated,
            equipment=list(self.equipment),
        )

# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Rack Inventory - server rack inventory and power engine for cinema sites."""

__version__ = "0.1.0"

from rack_inventory.data.models import (
    BatteryStatus,
    EquipmentKind,
    EquipmentRecord,
    EquipmentStatus,
    IngestionResult,
    NetworkSpec,
    PortRecord,
    RackFacts,
    ServerSpec,
    Site,
    UpsSpec,
)
from rack_inventory.analysis.rack_summary import RackSummary, summarize_rack
from rack_inventory.ingest.reader import load_rack_file, parse_rack_bytes, parse_rack_file

__all__ = [
    "BatteryStatus",
    "EquipmentKind",
    "EquipmentRecord",
    "EquipmentStatus",
    "IngestionResult",
    "NetworkSpec",
    "PortRecord",
    "RackFacts",
    "RackSummary",
    "ServerSpec",
    "Site",
    "UpsSpec",
    "load_rack_file",
    "parse_rack_bytes",
    "parse_rack_file",
    "summarize_rack",
]

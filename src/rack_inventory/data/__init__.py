# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Data models, snapshot edits, and demo sites."""

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
from rack_inventory.data.samples import SAMPLE_SITES, get_sample_site, search_sites

__all__ = [
    "BatteryStatus",
    "EquipmentKind",
    "EquipmentRecord",
    "EquipmentStatus",
    "IngestionResult",
    "NetworkSpec",
    "PortRecord",
    "RackFacts",
    "SAMPLE_SITES",
    "ServerSpec",
    "Site",
    "UpsSpec",
    "get_sample_site",
    "search_sites",
]

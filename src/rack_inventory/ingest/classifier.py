# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Map free-text equipment type labels to an :class:`EquipmentKind`."""

from __future__ import annotations

from rack_inventory.data.models import EquipmentKind

# First match wins.  Keep this order: "Router Wireless" must be a router,
# and "servidor" must be tested before the short "ap" token.
_RULES: list[tuple[tuple[str, ...], EquipmentKind]] = [
    (("firewall",), EquipmentKind.firewall),
    (("router",), EquipmentKind.router),
    (("switch",), EquipmentKind.switch),
    (("wlc", "wireless"), EquipmentKind.wireless_controller),
    (("servidor", "server"), EquipmentKind.server),
    (("ap", "access point"), EquipmentKind.wireless_controller),
    (("patch", "panel"), EquipmentKind.patch_panel),
    (("ups",), EquipmentKind.ups),
    (("converter", "conversor"), EquipmentKind.converter),
]


def classify(raw_label: str) -> EquipmentKind:
    """Classify a spreadsheet type label; unknown labels become servers."""
    label = (raw_label or "").lower()
    for needles, kind in _RULES:
        if any(needle in label for needle in needles):
            return kind
    return EquipmentKind.server

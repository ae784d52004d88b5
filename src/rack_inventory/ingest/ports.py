# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Port-list synthesis for network equipment.

Port details arrive as compact JSON where each key is a port number
(``"5"``) or an inclusive range (``"1-20"``) and each value is the label
of whatever is plugged in::

    {"1-3": "Switch A", "5": "Switch B"}

Ranges are expanded to individual connected ports and every other port
up to the unit's size is filled in as free, so the result always lists
ports ``1..N`` exactly once, in order.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from rack_inventory.data.models import NetworkSpec, PortRecord

logger = logging.getLogger(__name__)

# Assumed port count when the status table gives none.
FALLBACK_PORT_COUNT = 24

# Highest port number a range key may expand to.
MAX_PORT_NUMBER = 1024

FREE_PORT_DESCRIPTION = "Puerto libre"
USED_PORT_DESCRIPTION = "Puerto en uso"


def parse_port_map(text: str) -> dict[int, str]:
    """Expand range notation into ``{port_number: connected_to}``.

    Keys that are not a positive number or a ``start-end`` range are
    ignored.  When two keys cover the same port, the first one wins.

    Raises:
        ValueError: If *text* is not a JSON object.
    """
    raw = json.loads(text)
    if not isinstance(raw, dict):
        raise ValueError(f"Port details must be a JSON object, got {type(raw).__name__}")

    connections: dict[int, str] = {}
    for key, target in raw.items():
        label = "" if target is None else str(target)
        for port in _expand_key(str(key)):
            connections.setdefault(port, label)
    return connections


def _expand_key(key: str) -> range:
    key = key.strip()
    try:
        if "-" in key:
            start_text, end_text = key.split("-", 1)
            start, end = int(start_text), int(end_text)
        else:
            start = end = int(key)
    except ValueError:
        logger.debug("Ignoring port key %r", key)
        return range(0)
    if end > MAX_PORT_NUMBER:
        logger.debug("Capping port key %r at port %d", key, MAX_PORT_NUMBER)
        end = MAX_PORT_NUMBER
    return range(max(start, 1), end + 1)


def connected_ports(connections: Mapping[int, str], port_count: int) -> list[PortRecord]:
    """Ports ``1..port_count`` with *connections* marked as connected."""
    ports = []
    for number in range(1, port_count + 1):
        if number in connections:
            target = connections[number]
            ports.append(PortRecord(
                port_number=number,
                is_connected=True,
                connected_to=target,
                description=f"Conectado a {target}",
            ))
        else:
            ports.append(PortRecord(
                port_number=number,
                is_connected=False,
                description=FREE_PORT_DESCRIPTION,
            ))
    return ports


def binary_fill(total_ports: int, used_ports: int) -> list[PortRecord]:
    """Ports ``1..used_ports`` in use and the rest free, targets unknown."""
    return [
        PortRecord(
            port_number=number,
            is_connected=number <= used_ports,
            description=USED_PORT_DESCRIPTION if number <= used_ports else FREE_PORT_DESCRIPTION,
        )
        for number in range(1, total_ports + 1)
    ]


def build_port_details(
    json_text: str | None, total_ports: int, used_ports: int
) -> list[PortRecord]:
    """Synthesize the full port list for one unit.

    Without usable JSON the list falls back to :func:`binary_fill`.  With
    JSON, the list covers ``total_ports`` (or :data:`FALLBACK_PORT_COUNT`
    when that is 0), widened if a connected port lies beyond it.
    """
    text = (json_text or "").strip()
    if not text or text == "{}":
        return binary_fill(total_ports, used_ports)

    try:
        connections = parse_port_map(text)
    except ValueError as exc:
        logger.warning("Invalid port-detail JSON %r: %s", text, exc)
        return binary_fill(total_ports, used_ports)

    highest = max(connections, default=0)
    port_count = total_ports or max(highest, FALLBACK_PORT_COUNT)
    port_count = max(port_count, highest)
    return connected_ports(connections, port_count)


def network_spec_for(ports: list[PortRecord]) -> NetworkSpec:
    """Wrap a complete port list in a :class:`NetworkSpec`."""
    return NetworkSpec(
        total_ports=len(ports),
        active_ports=sum(1 for p in ports if p.is_connected),
        port_details=ports,
    )

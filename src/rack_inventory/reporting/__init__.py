# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Terminal rendering for rack views."""

from rack_inventory.reporting.terminal import RackRenderer

__all__ = ["RackRenderer"]

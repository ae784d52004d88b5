# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Exception types raised by the rack inventory engine."""

from __future__ import annotations


class RackInventoryError(Exception):
    """Base class for all rack inventory errors."""


class InvalidDateError(RackInventoryError, ValueError):
    """A battery install date is missing or cannot be parsed."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid date: {value!r}")


class FileReadError(RackInventoryError):
    """The spreadsheet file could not be read from disk."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error reading file {path}: {reason}")


class SpreadsheetDecodeError(RackInventoryError):
    """The binary spreadsheet container is corrupt or unsupported."""


class EquipmentNotFoundError(RackInventoryError, KeyError):
    """No equipment with the requested id exists in the snapshot."""

    def __init__(self, equipment_id: str) -> None:
        self.equipment_id = equipment_id
        super().__init__(equipment_id)

    def __str__(self) -> str:
        return f"Equipment not found: {self.equipment_id}"

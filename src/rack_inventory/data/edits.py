# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Operator edits over a rack snapshot.

Every function returns a new list and leaves the input snapshot alone;
merging the result back into the stored site is the persistence
service's job.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Any

from rack_inventory.data.models import EquipmentRecord
from rack_inventory.errors import EquipmentNotFoundError


def new_equipment_id() -> str:
    """Return a fresh opaque id for an operator-created record."""
    return uuid.uuid4().hex[:12]


def _index_of(snapshot: Sequence[EquipmentRecord], equipment_id: str) -> int:
    for i, record in enumerate(snapshot):
        if record.id == equipment_id:
            return i
    raise EquipmentNotFoundError(equipment_id)


def add_equipment(
    snapshot: Sequence[EquipmentRecord], record: EquipmentRecord
) -> list[EquipmentRecord]:
    """Append *record* to the snapshot."""
    return [*snapshot, record]


def replace_field(
    snapshot: Sequence[EquipmentRecord],
    equipment_id: str,
    field: str,
    value: Any,
) -> list[EquipmentRecord]:
    """Replace one field of a record wholesale.

    Nested specs are replaced, not merged.  The edited record is
    re-validated, so an invalid value raises ``pydantic.ValidationError``.
    """
    idx = _index_of(snapshot, equipment_id)
    if field == "id" or field not in EquipmentRecord.model_fields:
        raise ValueError(f"Field cannot be edited: {field}")

    data = snapshot[idx].model_dump()
    data[field] = value.model_dump() if hasattr(value, "model_dump") else value
    updated = EquipmentRecord.model_validate(data)

    result = list(snapshot)
    result[idx] = updated
    return result


def remove_equipment(
    snapshot: Sequence[EquipmentRecord], equipment_id: str
) -> list[EquipmentRecord]:
    """Drop the record with *equipment_id* from the snapshot."""
    idx = _index_of(snapshot, equipment_id)
    return [r for i, r in enumerate(snapshot) if i != idx]

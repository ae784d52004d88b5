# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for snapshot edit operations."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from conftest import make_record

from rack_inventory.data.edits import (
    add_equipment,
    new_equipment_id,
    remove_equipment,
    replace_field,
)
from rack_inventory.data.models import EquipmentStatus, ServerSpec
from rack_inventory.errors import EquipmentNotFoundError


@pytest.fixture()
def snapshot():
    return [
        make_record(id="a", position=1),
        make_record(id="b", position=2, server_spec=ServerSpec(cpu="Xeon")),
    ]


class TestEdits:
    """Tests for add / replace / remove."""

    def test_new_ids_are_unique(self):
        assert len({new_equipment_id() for _ in range(50)}) == 50

    def test_add(self, snapshot):
        record = make_record(id=new_equipment_id(), position=3)
        result = add_equipment(snapshot, record)
        assert len(result) == 3
        assert len(snapshot) == 2

    def test_replace_field(self, snapshot):
        result = replace_field(snapshot, "a", "status", EquipmentStatus.offline)
        assert result[0].status is EquipmentStatus.offline
        assert snapshot[0].status is EquipmentStatus.online

    def test_replace_nested_spec_wholesale(self, snapshot):
        result = replace_field(snapshot, "b", "server_spec", ServerSpec(ram_description="64GB"))
        assert result[1].server_spec.cpu is None
        assert result[1].server_spec.ram_description == "64GB"

    def test_replace_revalidates(self, snapshot):
        with pytest.raises(ValidationError):
            replace_field(snapshot, "a", "position", -4)

    def test_id_not_editable(self, snapshot):
        with pytest.raises(ValueError):
            replace_field(snapshot, "a", "id", "z")

    def test_unknown_field(self, snapshot):
        with pytest.raises(ValueError):
            replace_field(snapshot, "a", "colour", "red")

    def test_remove(self, snapshot):
        result = remove_equipment(snapshot, "a")
        assert [r.id for r in result] == ["b"]

    def test_unknown_id(self, snapshot):
        with pytest.raises(EquipmentNotFoundError):
            remove_equipment(snapshot, "zzz")
        with pytest.raises(KeyError):
            replace_field(snapshot, "zzz", "name", "x")

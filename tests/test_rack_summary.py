# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the dashboard rack summary."""

from __future__ import annotations

import logging

from conftest import make_record, make_ups

from rack_inventory.analysis.rack_summary import (
    autonomy_level,
    battery_reports,
    load_level,
    power_alerts,
    summarize_rack,
)
from rack_inventory.data.models import BatteryStatus, EquipmentKind, EquipmentStatus
from rack_inventory.data.samples import get_sample_site


class TestLevels:
    def test_load_levels(self):
        assert load_level(81) == "red"
        assert load_level(80) == "yellow"
        assert load_level(61) == "yellow"
        assert load_level(60) == "green"

    def test_autonomy_levels(self):
        assert autonomy_level(1.9) == "red"
        assert autonomy_level(2.0) == "yellow"
        assert autonomy_level(3.9) == "yellow"
        assert autonomy_level(4.0) == "green"
        assert autonomy_level(None) == "green"


class TestSummarizeRack:
    """Tests for summarize_rack on sample sites."""

    def test_moreno(self, moreno_site, today):
        summary = summarize_rack(moreno_site.equipment, today=today)
        assert summary.equipment_count == 4
        assert summary.total_power_w == 330
        assert summary.ups_capacity_va == 4500
        assert summary.load_percentage == 7
        assert summary.load_level == "green"
        assert summary.autonomy_hours == 8.6
        assert summary.autonomy_level == "green"
        assert summary.power_by_group == {"servers": 330, "network": 0, "other": 0}
        assert summary.status_counts["online"] == 2
        assert summary.status_counts["warning"] == 2
        assert summary.status_counts["offline"] == 0

    def test_moreno_batteries_due(self, moreno_site, today):
        summary = summarize_rack(moreno_site.equipment, today=today)
        remaining = {b.equipment_id: b.remaining_months for b in summary.batteries}
        assert remaining == {"ups-1": 9, "ups-2": 7}
        assert len(summary.batteries_due) == 2
        assert all(b.status is BatteryStatus.warning for b in summary.batteries)

    def test_ports_aggregated(self, today):
        site = get_sample_site("malvinas-argentinas")
        summary = summarize_rack(site.equipment, today=today)
        assert summary.total_ports == 24
        assert summary.active_ports == 4
        assert summary.power_by_group["network"] == 25

    def test_recomputed_after_edit(self, moreno_site, today):
        before = summarize_rack(moreno_site.equipment, today=today)
        moreno_site.equipment.append(make_record(id="extra", position=9, power_consumption_watts=170))
        after = summarize_rack(moreno_site.equipment, today=today)
        assert after.total_power_w == before.total_power_w + 170

    def test_empty_rack(self):
        summary = summarize_rack([])
        assert summary.total_power_w == 0
        assert summary.load_percentage == 0
        assert summary.autonomy_hours is None
        assert summary.batteries == []

    def test_other_group_excludes_ups(self, today):
        records = [
            make_record(id="c1", kind=EquipmentKind.converter, power_consumption_watts=10),
            make_ups(1000, power_consumption_watts=30),
        ]
        summary = summarize_rack(records, today=today)
        assert summary.power_by_group["other"] == 10
        assert summary.total_power_w == 40

    def test_status_counts_cover_all_statuses(self):
        summary = summarize_rack([make_record(status=EquipmentStatus.maintenance)])
        assert set(summary.status_counts) == {"online", "offline", "warning", "maintenance"}


class TestBatteryReports:
    """Tests for per-UPS battery entries."""

    def test_missing_date_suppressed(self, today):
        assert battery_reports([make_ups(1000, None)], today=today) == []

    def test_unparseable_date_logged_and_skipped(self, today, caplog):
        with caplog.at_level(logging.WARNING):
            reports = battery_reports([make_ups(1000, "someday")], today=today)
        assert reports == []
        assert "someday" in caplog.text

    def test_custom_threshold(self, today):
        ups = make_ups(1000, "2024-06-01")  # 12 months elapsed -> 36 left
        assert battery_reports([ups], today=today)[0].due_for_replacement is False
        assert battery_reports([ups], 40, today=today)[0].due_for_replacement is True

    def test_non_ups_ignored(self, today):
        assert battery_reports([make_record()], today=today) == []


class TestPowerWarnings:
    """Tests for the high-load and low-autonomy alerts."""

    def test_load_at_90_is_not_an_alert(self):
        assert power_alerts(90, 5.0) == []

    def test_load_above_90_alerts(self):
        warnings = power_alerts(91, 5.0)
        assert len(warnings) == 1
        assert "Carga UPS alta (91%)" in warnings[0]

    def test_autonomy_at_two_hours_is_not_an_alert(self):
        assert power_alerts(50, 2.0) == []

    def test_autonomy_below_two_hours_alerts(self):
        warnings = power_alerts(50, 1.9)
        assert warnings == ["Autonomía baja (1.9h) - considerar agregar baterías."]

    def test_unbounded_autonomy_never_alerts(self):
        assert power_alerts(0, None) == []

    def test_both_alerts(self):
        assert len(power_alerts(95, 0.5)) == 2

    def test_summary_carries_warnings(self, today):
        # 950 W on 1000 VA: load 95 %, autonomy 0.7 h
        records = [make_ups(1000), make_record(power_consumption_watts=950)]
        summary = summarize_rack(records, today=today)
        assert summary.load_percentage == 95
        assert summary.autonomy_hours == 0.7
        assert len(summary.power_warnings) == 2

    def test_healthy_rack_has_no_warnings(self, moreno_site, today):
        summary = summarize_rack(moreno_site.equipment, today=today)
        assert summary.power_warnings == []

    def test_ups_units_counted(self, moreno_site, today):
        assert summarize_rack(moreno_site.equipment, today=today).ups_units == 2

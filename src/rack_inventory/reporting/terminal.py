# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Rich terminal renderer for sites and ingestion results.

Composes Rich tables and panels into the rack view: a header, the
equipment elevation, the power/autonomy panel and battery health.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from rack_inventory.analysis.rack_summary import RackSummary
from rack_inventory.data.models import (
    EquipmentRecord,
    EquipmentStatus,
    RackFacts,
    Site,
)

_STATUS_STYLE = {
    EquipmentStatus.online: "green",
    EquipmentStatus.offline: "red",
    EquipmentStatus.warning: "yellow",
    EquipmentStatus.maintenance: "blue",
}


class RackRenderer:
    """Renders rack snapshots to the terminal using Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_site(self, site: Site, summary: RackSummary) -> None:
        """Render the full rack view for one site."""
        self._render_header(site.name, site.location, site.address, site.generator)
        self._render_equipment(site.equipment)
        self._render_power(summary)
        self._render_batteries(summary)

    def render_ingestion(
        self, facts: RackFacts, equipment: Sequence[EquipmentRecord], summary: RackSummary
    ) -> None:
        """Render an ingested spreadsheet, including its declared totals."""
        self._render_header(
            facts.cinema_name or "(sin nombre)", facts.location, facts.address,
            facts.has_generator,
        )
        self._render_equipment(equipment)
        self._render_power(summary)
        self._render_declared(facts)
        self._render_batteries(summary)

    def render_site_list(
        self,
        rows: Sequence[tuple[Site, RackSummary]],
        fleet: Sequence[tuple[Site, RackSummary]] | None = None,
    ) -> None:
        """Render a one-line-per-site overview followed by fleet totals.

        Totals cover *fleet* when given (e.g. every site while *rows* is a
        search result), otherwise *rows*.
        """
        table = Table(title="Sites", show_header=True, header_style="bold")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="bold")
        table.add_column("Units", justify="right")
        table.add_column("Power", justify="right")
        table.add_column("UPS Load", justify="right")
        table.add_column("Autonomy", justify="right")
        table.add_column("Batteries Due", justify="right")

        for site, summary in rows:
            table.add_row(
                site.id,
                site.name,
                str(summary.equipment_count),
                f"{summary.total_power_w:.0f} W",
                f"[{summary.load_level}]{summary.load_percentage}%[/{summary.load_level}]",
                _autonomy_text(summary),
                str(len(summary.batteries_due)),
            )
        self.console.print(table)
        self._render_fleet_totals(rows if fleet is None else fleet)

    # ------------------------------------------------------------------
    # Private rendering methods
    # ------------------------------------------------------------------

    def _render_fleet_totals(self, rows: Sequence[tuple[Site, RackSummary]]) -> None:
        online = sum(s.status_counts.get(EquipmentStatus.online.value, 0) for _, s in rows)
        alerts = sum(len(s.batteries_due) for _, s in rows)
        ups_units = sum(s.ups_units for _, s in rows)

        totals = Table.grid(padding=(0, 3))
        for _ in range(4):
            totals.add_column(justify="center")
        totals.add_row(
            f"[bold blue]{len(rows)}[/bold blue]",
            f"[bold green]{online}[/bold green]",
            f"[bold red]{alerts}[/bold red]",
            f"[bold magenta]{ups_units}[/bold magenta]",
        )
        totals.add_row("Sites", "Units online", "UPS alerts", "UPS units")
        self.console.print(Panel(totals, title="FLEET"))

    def _render_header(
        self, name: str, location: str, address: str, generator: bool
    ) -> None:
        header_text = Text()
        header_text.append("RACK", style="bold cyan")
        header_text.append(" | ", style="dim")
        header_text.append(name, style="bold")
        if location and location != name:
            header_text.append(f" ({location})", style="dim")
        if address:
            header_text.append(f" | {address}")
        header_text.append(" | ", style="dim")
        header_text.append("generador" if generator else "sin generador")

        self.console.print()
        self.console.print(Panel(header_text, title="Rack Inventory"))

    def _render_equipment(self, equipment: Sequence[EquipmentRecord]) -> None:
        self.console.print()
        self.console.print(Rule("[bold]EQUIPMENT[/bold]"))
        if not equipment:
            self.console.print("  [dim]No equipment recorded.[/dim]")
            return

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("U", justify="right", style="bold", width=3)
        table.add_column("Kind", min_width=10)
        table.add_column("Name", min_width=20)
        table.add_column("Status", justify="center")
        table.add_column("Power", justify="right")
        table.add_column("Ports", justify="right")

        for record in sorted(equipment, key=lambda r: r.position):
            style = _STATUS_STYLE[record.status]
            ports = ""
            if record.network_spec is not None:
                ports = f"{record.network_spec.active_ports}/{record.network_spec.total_ports}"
            table.add_row(
                str(record.position),
                record.kind.value,
                record.name,
                f"[{style}]{record.status.value}[/{style}]",
                f"{record.power_consumption_watts:.0f} W",
                ports,
            )
        self.console.print(table)

    def _render_power(self, summary: RackSummary) -> None:
        groups = summary.power_by_group
        lines = [
            f"[bold]Consumo total:[/bold] {summary.total_power_w:.0f} W "
            f"(servidores {groups.get('servers', 0):.0f} W, "
            f"red {groups.get('network', 0):.0f} W, "
            f"otros {groups.get('other', 0):.0f} W)",
            f"[bold]Capacidad UPS:[/bold] {summary.ups_capacity_va:.0f} VA",
            f"[bold]Carga:[/bold] [{summary.load_level}]{summary.load_percentage}%"
            f"[/{summary.load_level}]",
            f"[bold]Autonomía estimada:[/bold] {_autonomy_text(summary)}",
        ]
        for warning in summary.power_warnings:
            lines.append(f"[bold red]! {warning}[/bold red]")
        self.console.print()
        self.console.print(Panel("\n".join(lines), title="POWER"))

    def _render_declared(self, facts: RackFacts) -> None:
        self.console.print(
            f"  [dim]Declared in sheet: {facts.total_kva:g} kVA, "
            f"{facts.total_consumption:g} W, {facts.estimated_autonomy:g} h autonomy[/dim]"
        )

    def _render_batteries(self, summary: RackSummary) -> None:
        if not summary.batteries:
            return
        self.console.print()
        self.console.print(Rule("[bold]BATTERIES[/bold]"))

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("UPS", min_width=20)
        table.add_column("Installed")
        table.add_column("Remaining", justify="right")
        table.add_column("Status", justify="center")

        for report in summary.batteries:
            color = report.status.color
            flag = " (replace)" if report.due_for_replacement else ""
            table.add_row(
                report.name,
                report.install_date,
                f"{report.remaining_months} months",
                f"[{color}]{report.status.value}{flag}[/{color}]",
            )
        self.console.print(table)


def _autonomy_text(summary: RackSummary) -> str:
    if summary.autonomy_hours is None:
        return "[green]unbounded[/green]"
    level = summary.autonomy_level
    return f"[{level}]{summary.autonomy_hours:.1f} h[/{level}]"

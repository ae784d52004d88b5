# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Main CLI application for rack-inventory."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from rack_inventory.analysis.battery import (
    battery_status,
    is_due_for_replacement,
    remaining_life_months,
)
from rack_inventory.analysis.rack_summary import summarize_rack
from rack_inventory.config import AppConfig, load_config
from rack_inventory.data.models import Site
from rack_inventory.data.samples import SAMPLE_SITES, get_sample_site, search_sites
from rack_inventory.errors import FileReadError, InvalidDateError, SpreadsheetDecodeError
from rack_inventory.ingest.reader import load_rack_file
from rack_inventory.reporting.terminal import RackRenderer


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version="0.1.0")
@click.option("--config", "-c", type=click.Path(exists=True), default=None,
              help="YAML config file")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx: click.Context, config: str | None, no_color: bool, verbose: bool) -> None:
    """rack-inventory: server rack inventory for cinema sites

    \b
    Ingest rack spreadsheets, inspect equipment, and check power,
    UPS autonomy and battery replacement dates.
    """
    cfg = load_config(config) if config else AppConfig()
    _configure_logging("DEBUG" if verbose else cfg.log_level)

    ctx.ensure_object(dict)
    ctx.obj["console"] = Console(no_color=no_color)
    ctx.obj["config"] = cfg


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--sheet", type=str, default=None, help="Worksheet name (default: first sheet)")
@click.option("--site-id", type=str, default=None,
              help="Site id for the exported record (default: file name)")
@click.option("--export-json", type=click.Path(), default=None,
              help="Write the ingested site record as JSON to this path")
@click.pass_context
def ingest(
    ctx: click.Context,
    file: str,
    sheet: str | None,
    site_id: str | None,
    export_json: str | None,
) -> None:
    """Ingest a rack spreadsheet (.xlsx) and show the resulting rack."""
    console: Console = ctx.obj["console"]
    cfg: AppConfig = ctx.obj["config"]

    try:
        with console.status("[bold cyan]Reading spreadsheet..."):
            result = load_rack_file(file, sheet or cfg.sheet_name)
    except (FileReadError, SpreadsheetDecodeError) as exc:
        console.print(f"[red]Could not ingest {escape(file)}:[/] {escape(str(exc))}")
        console.print("[yellow]Fix the file and try again.[/]")
        raise SystemExit(1)

    summary = summarize_rack(
        result.equipment, warning_threshold_months=cfg.battery_warning_months
    )
    renderer = RackRenderer(console)
    renderer.render_ingestion(result.facts, result.equipment, summary)

    if export_json:
        site = result.to_site(site_id or Path(file).stem, last_updated=date.today())
        _export_json(site, export_json, console)


@cli.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def show(ctx: click.Context, snapshot: str) -> None:
    """Show a site record previously exported as JSON."""
    console: Console = ctx.obj["console"]
    cfg: AppConfig = ctx.obj["config"]

    try:
        site = Site.model_validate_json(Path(snapshot).read_text(encoding="utf-8"))
    except ValidationError as exc:
        console.print(
            f"[red]Invalid site record {escape(snapshot)}:[/] "
            f"{exc.error_count()} validation error(s)"
        )
        console.print(f"  {escape(exc.errors()[0]['msg'])}")
        console.print("[yellow]Fix the file and try again.[/]")
        raise SystemExit(1)

    summary = summarize_rack(
        site.equipment, warning_threshold_months=cfg.battery_warning_months
    )
    RackRenderer(console).render_site(site, summary)


@cli.command()
@click.argument("site_id", required=False,
                type=click.Choice(sorted(SAMPLE_SITES.keys())))
@click.option("--search", "-s", type=str, default=None,
              help="Filter by name or location (case and accent insensitive)")
@click.pass_context
def sites(ctx: click.Context, site_id: str | None, search: str | None) -> None:
    """List the demo sites, or show one in detail."""
    console: Console = ctx.obj["console"]
    cfg: AppConfig = ctx.obj["config"]
    renderer = RackRenderer(console)

    if site_id:
        site = get_sample_site(site_id)
        summary = summarize_rack(
            site.equipment, warning_threshold_months=cfg.battery_warning_months
        )
        renderer.render_site(site, summary)
        return

    fleet = []
    for key in sorted(SAMPLE_SITES):
        site = get_sample_site(key)
        fleet.append((site, summarize_rack(
            site.equipment, warning_threshold_months=cfg.battery_warning_months
        )))

    rows = fleet
    if search:
        matched = {s.id for s in search_sites((site for site, _ in fleet), search)}
        rows = [row for row in fleet if row[0].id in matched]
        if not rows:
            console.print(f"[yellow]No sites match '{escape(search)}'.[/yellow]")
            return
    renderer.render_site_list(rows, fleet=fleet)


@cli.command()
@click.argument("install_date")
@click.option("--lifespan", type=click.IntRange(min=1), default=None,
              help="Battery lifespan in months (default from config, 48)")
@click.option("--threshold", type=click.IntRange(min=0), default=None,
              help="Warning threshold in months (default from config, 12)")
@click.pass_context
def battery(
    ctx: click.Context,
    install_date: str,
    lifespan: int | None,
    threshold: int | None,
) -> None:
    """Check remaining battery life for a given install date."""
    console: Console = ctx.obj["console"]
    cfg: AppConfig = ctx.obj["config"]
    lifespan = lifespan or cfg.battery_lifespan_months
    threshold = cfg.battery_warning_months if threshold is None else threshold

    try:
        remaining = remaining_life_months(install_date, lifespan)
        due = is_due_for_replacement(install_date, lifespan, threshold)
        status = battery_status(install_date, lifespan)
    except InvalidDateError as exc:
        console.print(f"[red]{escape(str(exc))}[/]")
        raise SystemExit(1)

    color = status.color
    console.print(
        f"  Remaining life: [{color}]{remaining} months[/{color}] "
        f"of {lifespan} ({status.value})"
    )
    if due:
        console.print("  [bold red]Battery replacement due[/bold red]")
    else:
        console.print("  [green]No replacement needed yet[/green]")


def _export_json(site: Site, path: str, console: Console) -> None:
    """Export a site record to JSON."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(site.model_dump_json(indent=2, by_alias=True))
    console.print(f"  [green]Site record exported to:[/green] {path}")

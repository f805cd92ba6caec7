#!/usr/bin/env python3
"""Problem Dashboard - Compile company-wise problem lists into one HTML page."""

import sys
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from dashboard.aggregate import with_aggregate
from dashboard.config import CONFIG_FILENAME, load_config
from dashboard.exporter import export_report
from dashboard.filters import FilterState
from dashboard.formatting import difficulty_class, format_acceptance_rate
from dashboard.reader import load_categories
from dashboard.records import ACCEPTANCE_RATE, DIFFICULTY, LINK
from dashboard.state import MemoryStorage, ReportSession

console = Console()

DIFFICULTY_STYLES = {"easy": "green", "medium": "yellow", "hard": "red"}


def load_project(ctx):
    """Read config and company datasets for the selected root."""
    root = ctx.obj["root"]
    if not root.is_dir():
        console.print(f"[red]Root directory not found: {root}[/red]")
        sys.exit(1)

    config_path = ctx.obj["config_path"] or root / CONFIG_FILENAME
    try:
        config = load_config(config_path)
    except (ValueError, OSError) as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    categories = load_categories(root, config)
    return config, categories


@click.group()
@click.option("--root", "-r", default=".", help="Directory containing one folder per company")
@click.option("--config", "-c", "config_path", help=f"Config file (default: <root>/{CONFIG_FILENAME})")
@click.option("--debug", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, root, config_path, debug):
    """Problem Dashboard - Compile company-wise problem lists into one HTML page."""
    # Configure logging
    log_level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=debug)]
    )

    ctx.ensure_object(dict)
    ctx.obj["root"] = Path(root)
    ctx.obj["config_path"] = Path(config_path) if config_path else None


@cli.command()
@click.option("--output", "-o", help="Output HTML file (default: <root>/index.html)")
@click.option("--title", "-t", help="Page title")
@click.pass_context
def build(ctx, output, title):
    """Generate the dashboard HTML from every company's dataset."""
    config, categories = load_project(ctx)

    if title:
        config.title = title
    output_path = Path(output) if output else ctx.obj["root"] / config.output

    dataset_name = config.csv_names[0] if config.csv_names else "a dataset"
    console.print(f"Found {len(categories)} companies with {dataset_name}")
    export_report(categories, output_path, config)


@cli.command()
@click.pass_context
def categories(ctx):
    """List discovered companies and their datasets."""
    config, loaded = load_project(ctx)

    if not loaded:
        console.print("[yellow]No company datasets found.[/yellow]")
        return

    table = Table(title="Companies")
    table.add_column("Name", style="cyan")
    table.add_column("Problems", justify="right")
    table.add_column("Columns", justify="right")
    table.add_column("Dataset", style="dim")

    for name, category in with_aggregate(loaded, config.all_label).items():
        table.add_row(
            escape(name),
            str(len(category.records)),
            str(len(category.headers)),
            category.source or "(aggregate)",
        )

    console.print(table)


@cli.command()
@click.argument("name")
@click.option("--easy/--no-easy", default=True, help="Include Easy problems")
@click.option("--medium/--no-medium", default=True, help="Include Medium problems")
@click.option("--hard/--no-hard", default=True, help="Include Hard problems")
@click.option("--freq-min", type=float, help="Minimum frequency")
@click.option("--freq-max", type=float, help="Maximum frequency")
@click.option("--accept-min", type=float, help="Minimum acceptance rate (percent)")
@click.option("--accept-max", type=float, help="Maximum acceptance rate (percent)")
@click.option("--limit", "-n", default=50, help="Max rows to display")
@click.pass_context
def show(ctx, name, easy, medium, hard, freq_min, freq_max, accept_min, accept_max, limit):
    """Show one company's problems with the dashboard's filters applied."""
    config, loaded = load_project(ctx)

    session = ReportSession(
        categories=with_aggregate(loaded, config.all_label),
        storage=MemoryStorage(),
        config=config,
        filters=FilterState(
            easy=easy,
            medium=medium,
            hard=hard,
            freq_min=freq_min,
            freq_max=freq_max,
            accept_min=accept_min,
            accept_max=accept_max,
        ),
    )

    try:
        session.select(name)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print(f"Available: {', '.join(session.names)}")
        sys.exit(1)

    category = session.current
    rows = session.visible_rows()

    console.print(f"\n[bold]{escape(name)}[/bold] - {session.summary()}")
    if not rows:
        console.print("[yellow]No problems in this list.[/yellow]")
        return

    headers = [h for h in category.headers if h != LINK]
    table = Table(show_lines=False)
    for header in headers:
        table.add_column(header, overflow="fold")

    for row in rows[:limit]:
        cells = []
        for header in headers:
            raw = row.record.text(header)
            value = escape(raw)
            if header == DIFFICULTY:
                style = DIFFICULTY_STYLES[difficulty_class(value)]
                value = f"[{style}]{value}[/{style}]"
            elif header == ACCEPTANCE_RATE:
                value = format_acceptance_rate(raw)
            cells.append(value)
        table.add_row(*cells)

    console.print(table)
    if len(rows) > limit:
        console.print(f"[dim]... {len(rows) - limit} more (use --limit)[/dim]")


if __name__ == "__main__":
    cli()

"""
StoneForged-Intel CLI

Examples:
    # Run the API and dashboard on :3000
    stoneforged serve

    # Load the example prospects
    stoneforged seed

    # Search and sort, as a table
    stoneforged list -q sleep --sort score --desc

    # JSON output, piped to jq
    stoneforged list -f json | jq '.[0]'

    # Add a prospect (score auto-set from trigger)
    stoneforged add "NightCalm" --trigger "Reformulation" --decision-maker "Head of R&D"

    # Export the current view
    stoneforged export -q energy -o hot.csv
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .client import ProspectAPIClient, ProspectAPIError
from .config import CONFIG_PATH_ENV, Settings, load_config
from .constants import MESSAGES, SORTABLE_FIELDS
from .dashboard import ProspectDashboard
from . import __version__
from .export import NothingToExportError, export_csv_string, export_filename, export_prospects
from .models import DraftValidationError, ProspectDraft
from .scoring import TRIGGER_OPTIONS, format_score, readiness_band, score_for_trigger

# Progress to stderr, data to stdout
console = Console(stderr=True)
logger = logging.getLogger(__name__)

BAND_COLORS = {"high": "green", "medium": "yellow", "low": "red"}


def setup_logging(verbose: bool, quiet: bool, debug: bool) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def make_client(ctx: click.Context) -> ProspectAPIClient:
    settings: Settings = ctx.obj["settings"]
    return ProspectAPIClient(settings.api_url, timeout=settings.request_timeout)


def open_dashboard(ctx: click.Context, query: Optional[str], sort: Optional[str], desc: bool):
    """Load a dashboard session with the given view applied."""
    client = make_client(ctx)
    dashboard = ProspectDashboard(client)
    dashboard.load()
    dashboard.search_term = query or ""
    if sort:
        dashboard.request_sort(sort)
        if desc:
            dashboard.request_sort(sort)
    return client, dashboard


def display_prospects(dashboard: ProspectDashboard) -> None:
    """Display the current view as a table."""
    rows = dashboard.visible
    if not rows:
        console.print(f"[dim]{dashboard.empty_message}[/dim]")
        return

    table = Table(title="Hot Prospects", show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right", style="dim")
    table.add_column(f"Brand{dashboard.sort_indicator('brand')}", style="cyan", max_width=30)
    table.add_column("Trigger", max_width=30)
    table.add_column(f"Score{dashboard.sort_indicator('score')}", justify="right")
    table.add_column("Decision Maker", max_width=25)
    table.add_column("Next Action", style="yellow", max_width=30)

    for p in rows:
        color = BAND_COLORS[readiness_band(p.score)]
        table.add_row(
            str(p.id),
            p.brand,
            p.trigger,
            f"[{color}]{format_score(p.score)}[/{color}]",
            p.decision_maker,
            p.next_action,
        )

    console.print(table)


def display_stats(dashboard: ProspectDashboard) -> None:
    stats = dashboard.stats
    console.print(
        f"[bold]Total:[/bold] {stats.total}   "
        f"[bold green]High readiness:[/bold green] {stats.high_readiness}   "
        f"[bold]Avg score:[/bold] {stats.average_display}"
    )


# ============================================================================
# CLI Group
# ============================================================================

@click.group(invoke_without_command=True)
@click.option("--config", type=click.Path(exists=True), help="YAML config file")
@click.option("--api-url", help="Prospects service URL (default: STONEFORGED_API_URL)")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option("-q", "--quiet", is_flag=True, help="Only show errors")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config: Optional[str], api_url: Optional[str], verbose: bool, quiet: bool, debug: bool):
    """Track brands showing buying triggers and how ready they are to engage."""
    setup_logging(verbose, quiet, debug)

    settings = load_config(config)
    if api_url:
        settings.api_url = api_url

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["config_path"] = config

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============================================================================
# Query Commands
# ============================================================================

@cli.command("list")
@click.option("-q", "--query", help="Search brand, trigger, person, next action")
@click.option("-s", "--sort", type=click.Choice(SORTABLE_FIELDS), help="Sort column")
@click.option("--desc", is_flag=True, help="Sort descending")
@click.option("-f", "--format", "output_format",
              type=click.Choice(["table", "csv", "json"]), default="table", help="Output format")
@click.pass_context
def list_command(ctx, query: Optional[str], sort: Optional[str], desc: bool, output_format: str):
    """List prospects (highest score first unless sorted)."""
    client, dashboard = open_dashboard(ctx, query, sort, desc)
    with client:
        if output_format == "json":
            click.echo(json.dumps([p.to_dict() for p in dashboard.visible], indent=2))
        elif output_format == "csv":
            click.echo(export_csv_string(dashboard.visible), nl=False)
        else:
            display_prospects(dashboard)
            display_stats(dashboard)


@cli.command()
@click.pass_context
def stats(ctx):
    """Show total, high-readiness count and average score."""
    client, dashboard = open_dashboard(ctx, None, None, False)
    with client:
        display_stats(dashboard)


@cli.command()
def triggers():
    """Show trigger categories and the score each one sets."""
    table = Table(title="Trigger Categories", show_header=True, header_style="bold magenta")
    table.add_column("Value", style="cyan")
    table.add_column("Label")
    table.add_column("Bonus", justify="right")
    table.add_column("Score", justify="right")

    for option in TRIGGER_OPTIONS:
        table.add_row(
            option.value or "[dim](custom)[/dim]",
            option.label,
            f"+{option.bonus}",
            format_score(score_for_trigger(option.value)),
        )

    console.print(table)


# ============================================================================
# Mutation Commands
# ============================================================================

@cli.command()
@click.argument("brand")
@click.option("-t", "--trigger", default="", help="Trigger category value or free text")
@click.option("--score", type=float, help="Readiness score (default: from trigger)")
@click.option("-d", "--decision-maker", default="", help="Decision maker / title")
@click.option("-n", "--next-action", default="", help="Next action / outreach plan")
@click.pass_context
def add(ctx, brand: str, trigger: str, score: Optional[float], decision_maker: str, next_action: str):
    """Add a prospect."""
    draft = ProspectDraft(
        brand=brand,
        decision_maker=decision_maker,
        next_action=next_action,
    ).select_trigger(trigger)
    if not draft.trigger and trigger:
        draft = draft.update(trigger=trigger)  # free-text trigger
    if score is not None:
        draft = draft.with_score(score)

    try:
        draft.validate()
    except DraftValidationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    with make_client(ctx) as client:
        try:
            new_id = client.create_prospect(draft)
        except ProspectAPIError as e:
            console.print(f"[red]Could not add prospect:[/red] {e}")
            sys.exit(1)

    console.print(
        f"[green]Added[/green] {draft.brand} (id {new_id}, score {format_score(draft.score)})"
    )


@cli.command()
@click.argument("prospect_id", type=int)
@click.pass_context
def delete(ctx, prospect_id: int):
    """Delete a prospect by id."""
    with make_client(ctx) as client:
        try:
            success = client.delete_prospect(prospect_id)
        except ProspectAPIError as e:
            console.print(f"[red]Could not delete prospect:[/red] {e}")
            sys.exit(1)

    if success:
        console.print(f"[green]Deleted[/green] prospect {prospect_id}")
    else:
        console.print(f"[yellow]No prospect with id {prospect_id}[/yellow]")
        sys.exit(1)


@cli.command()
@click.pass_context
def seed(ctx):
    """Load the example prospects (safe to repeat)."""
    with make_client(ctx) as client:
        try:
            result = client.seed()
        except ProspectAPIError as e:
            console.print(f"[red]Could not seed examples:[/red] {e}")
            sys.exit(1)

    if result.inserted == 0:
        console.print(f"[yellow]{MESSAGES['nothing_seeded']}[/yellow]")
    elif result.inserted is None:
        console.print(f"[green]{result.message}[/green]")
    else:
        console.print(f"[green]{result.message}[/green] ({result.inserted} new)")


# ============================================================================
# Export Command
# ============================================================================

@cli.command()
@click.option("-q", "--query", help="Search brand, trigger, person, next action")
@click.option("-s", "--sort", type=click.Choice(SORTABLE_FIELDS), help="Sort column")
@click.option("--desc", is_flag=True, help="Sort descending")
@click.option("-f", "--format", "output_format",
              type=click.Choice(["csv", "json"]), default="csv", help="File format")
@click.option("-o", "--output", type=click.Path(), help="Output file (default: dated filename)")
@click.pass_context
def export(ctx, query: Optional[str], sort: Optional[str], desc: bool,
           output_format: str, output: Optional[str]):
    """Export the current view to CSV or JSON."""
    client, dashboard = open_dashboard(ctx, query, sort, desc)
    with client:
        try:
            rows = dashboard.export_rows()
        except NothingToExportError as e:
            console.print(f"[yellow]{e}[/yellow]")
            sys.exit(1)

    output_path = export_prospects(
        rows, output or export_filename(extension=output_format), format=output_format
    )
    console.print(f"[green]Saved:[/green] {output_path} ({len(rows)} prospects)")


# ============================================================================
# Check / Version
# ============================================================================

@cli.command()
@click.pass_context
def check(ctx):
    """Check the prospects service is reachable."""
    settings: Settings = ctx.obj["settings"]
    click.echo(f"API URL: {settings.api_url}")

    with make_client(ctx) as client:
        try:
            health = client.health()
        except ProspectAPIError as e:
            click.echo(f"✗ Service: {e}")
            sys.exit(1)

    click.echo(f"✓ Service: {health.get('status')} (v{health.get('version')})")
    db_mark = "✓" if health.get("database") else "✗"
    click.echo(f"{db_mark} Database")


@cli.command()
def version():
    """Show version info."""
    click.echo(f"stoneforged {__version__}")


# ============================================================================
# Serve Command
# ============================================================================

@cli.command()
@click.option("--host", help="Host to bind to.")
@click.option("--port", type=int, help="Port to bind to.")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development.")
@click.pass_context
def serve(ctx, host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the API and dashboard."""
    import uvicorn

    settings: Settings = ctx.obj["settings"]
    host = host or settings.host
    port = port or settings.port

    # uvicorn imports the app by name, so the server reads the same file
    config_path = ctx.obj.get("config_path")
    if config_path:
        os.environ[CONFIG_PATH_ENV] = str(Path(config_path).resolve())

    console.print(
        Panel.fit(
            f"[bold]StoneForged-Intel[/bold]\n"
            f"Running at: [cyan]http://{host}:{port}[/cyan]",
            border_style="yellow",
        )
    )
    console.print("Press Ctrl+C to stop\n")

    uvicorn.run(
        "stoneforged.web.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


def main():
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()

"""CLI entry point for profile reports."""
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from schemas.enums import ReportMode
from schemas.events import ProfileEvent

from .callstack import CallstackRow
from .errors import ConfigurationError, MismatchError
from .formatting import DEFAULT_INDENT
from .loader import load_events
from .route import ProfileLogRoute, load_route_config
from .summary import SummaryRow

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

console = Console()


def read_events(events_file: str) -> List[ProfileEvent]:
    """Load the events file, exiting with an error message if it is unreadable."""
    try:
        return load_events(Path(events_file))
    except (ValidationError, json.JSONDecodeError, UnicodeDecodeError) as e:
        click.echo(f"Error: Could not read events from {events_file}: {e}", err=True)
        raise SystemExit(1)


def run_route(route: ProfileLogRoute, events: List[ProfileEvent]) -> List[Union[SummaryRow, CallstackRow]]:
    """Build and deliver the report, exiting on nesting errors."""
    try:
        rows = route.build_rows(events)
    except MismatchError as e:
        logger.debug("Mismatch details:", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        if e.open_tokens:
            click.echo(f"  Open blocks: {' > '.join(e.open_tokens)}", err=True)
        raise SystemExit(1)

    entries = route.make_entries(rows)
    route.write_entries(entries)
    if route.log_file is not None and entries:
        click.echo(f"Report appended to: {route.log_file}", err=True)
    return rows


def echo_rows(route: ProfileLogRoute, rows: List[Union[SummaryRow, CallstackRow]]) -> None:
    if not rows:
        click.echo("No profiled code blocks found.")
        return
    for row in rows:
        click.echo(route.format_row(row))


def show_summary_table(rows: List[SummaryRow], group_by_token: bool) -> None:
    """Render summary rows as a Rich table."""
    table = Table(title="Profiling Summary")
    table.add_column("Token" if group_by_token else "Category", style="cyan")
    table.add_column("Calls", justify="right")
    table.add_column("Min (s)", justify="right")
    table.add_column("Max (s)", justify="right")
    table.add_column("Avg (s)", justify="right")
    table.add_column("Total (s)", justify="right", style="bold")
    if group_by_token:
        table.add_column("Category", style="dim")

    for row in rows:
        cells = [
            row.key,
            str(row.calls),
            f"{row.min:.5f}",
            f"{row.max:.5f}",
            f"{row.average:.5f}",
            f"{row.total:.5f}",
        ]
        if group_by_token:
            cells.append(row.category)
        table.add_row(*cells)

    console.print(table)


@click.group()
def cli():
    """Profile report - summarize begin/end profiling markers."""
    pass


@cli.command()
@click.argument('events_file', type=click.Path(exists=True))
@click.option('--group-by', type=click.Choice(['token', 'category']), default='token',
              help='Aggregate by span token or by category')
@click.option('--output', '-o', type=click.Path(), default=None,
              help='Log file to append the report lines to')
@click.option('--table', is_flag=True, default=False,
              help='Show the report as a table instead of log messages')
def summary(events_file: str, group_by: str, output: Optional[str], table: bool):
    """
    Show execution statistics for every profiled code block.

    EVENTS_FILE: JSON or JSON-lines file of log events

    Example:
        profile-report summary events.jsonl
        profile-report summary events.jsonl --group-by category --table
    """
    route = ProfileLogRoute(
        report=ReportMode.SUMMARY,
        group_by_token=(group_by == 'token'),
        log_file=Path(output) if output else None,
    )
    rows = run_route(route, read_events(events_file))

    if table and rows:
        show_summary_table(rows, route.group_by_token)
    else:
        echo_rows(route, rows)


@cli.command()
@click.argument('events_file', type=click.Path(exists=True))
@click.option('--indent', type=click.IntRange(min=0), default=DEFAULT_INDENT,
              help='Spaces per nesting level')
@click.option('--output', '-o', type=click.Path(), default=None,
              help='Log file to append the report lines to')
def callstack(events_file: str, indent: int, output: Optional[str]):
    """
    Show profiled code blocks in call order, indented by nesting depth.

    EVENTS_FILE: JSON or JSON-lines file of log events

    Example:
        profile-report callstack events.jsonl
    """
    route = ProfileLogRoute(
        report=ReportMode.CALLSTACK,
        indent=indent,
        log_file=Path(output) if output else None,
    )
    echo_rows(route, run_route(route, read_events(events_file)))


@cli.command()
@click.argument('events_file', type=click.Path(exists=True))
@click.option('--mode', default=None,
              help='Report type: summary or callstack (overrides the config file)')
@click.option('--config', 'config_path', type=click.Path(exists=True), default=None,
              help='YAML file with route settings')
@click.option('--output', '-o', type=click.Path(), default=None,
              help='Log file to append the report lines to (overrides the config file)')
def report(events_file: str, mode: Optional[str], config_path: Optional[str], output: Optional[str]):
    """
    Build the report type chosen by --mode or the route config.

    EVENTS_FILE: JSON or JSON-lines file of log events

    Example:
        profile-report report events.jsonl --mode callstack
        profile-report report events.jsonl --config route.yaml
    """
    try:
        config = load_route_config(Path(config_path) if config_path else None)
        route = ProfileLogRoute.from_config(config)
        if mode is not None:
            route.set_report(mode)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if output:
        route.log_file = Path(output)

    echo_rows(route, run_route(route, read_events(events_file)))


if __name__ == '__main__':
    cli()

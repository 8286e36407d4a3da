"""Command-line interface for priority placement scheduling."""

import dataclasses
import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Annotated, Optional

import typer

from priority_placement.config import DurationConfig
from priority_placement.duration import schedule_activities
from priority_placement.loaders import load_activities_json, load_matches_json
from priority_placement.ordering import SortDirection
from priority_placement.report import (
    format_activity_line,
    format_match_line,
    show_calendar,
    show_resource_timeline,
)
from priority_placement.slots import schedule_matches
from priority_placement.types import ValidationError

app = typer.Typer(
    name="priority-placement",
    help="Greedy priority scheduling of activities and matches",
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _fail(error: ValidationError) -> None:
    for message in error.errors:
        typer.echo(message, err=True)
    raise typer.Exit(1)


@app.command("activities")
def activities(
    input_file: Annotated[
        Path,
        typer.Argument(help="JSON file with an 'activities' list", exists=True, readable=True),
    ],
    descending: Annotated[
        bool,
        typer.Option("--descending", help="Process higher priority values first"),
    ] = False,
    gantt: Annotated[
        bool,
        typer.Option("--gantt", help="Also print an ASCII timeline per resource"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Schedule activities onto shared resources."""
    setup_logging(verbose)
    try:
        batch = load_activities_json(input_file)
        direction = SortDirection.DESCENDING if descending else SortDirection.ASCENDING
        results = schedule_activities(batch, DurationConfig(direction=direction))
    except ValidationError as e:
        _fail(e)
        return

    for placement in results:
        typer.echo(format_activity_line(placement))
    if gantt and results:
        typer.echo("")
        show_resource_timeline(results)


@app.command("matches")
def matches(
    input_file: Annotated[
        Path,
        typer.Argument(help="JSON file with a 'matches' list and optional 'config'", exists=True, readable=True),
    ],
    today: Annotated[
        Optional[str],
        typer.Option("--today", help="Reference date (YYYY-MM-DD); defaults to today"),
    ] = None,
    horizon: Annotated[
        Optional[int],
        typer.Option("--horizon", help="Days searched per match", min=0),
    ] = None,
    lead: Annotated[
        Optional[int],
        typer.Option("--lead", help="Days between today and the first candidate day", min=0),
    ] = None,
    gap: Annotated[
        Optional[int],
        typer.Option("--gap", help="Minimum days between events sharing an identity", min=0),
    ] = None,
    calendar: Annotated[
        bool,
        typer.Option("--calendar", help="Also print a day-by-day occupancy view"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Assign calendar dates to matches."""
    setup_logging(verbose)
    try:
        reference = datetime.strptime(today, "%Y-%m-%d").date() if today else date.today()
    except ValueError:
        typer.echo(f"Invalid --today value: {today!r} (expected YYYY-MM-DD)", err=True)
        raise typer.Exit(1)

    try:
        batch, config = load_matches_json(input_file)
        overrides = {
            name: value
            for name, value in (("horizon_days", horizon), ("lead_days", lead), ("min_gap_days", gap))
            if value is not None
        }
        config = dataclasses.replace(config, **overrides)
        results = schedule_matches(batch, config, today=reference)
    except ValidationError as e:
        _fail(e)
        return

    typer.echo("Scheduled Matches:")
    for result in results:
        typer.echo(format_match_line(result))

    if calendar:
        start = reference + timedelta(days=config.lead_days)
        typer.echo("")
        show_calendar(results, start, start + timedelta(days=config.horizon_days), config.capacity)


def main() -> None:
    app()


if __name__ == "__main__":
    main()

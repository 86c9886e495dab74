"""
Main CLI application using Typer.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import AppConfig, CalendarOptions, get_default_config_path
from ..domain.exceptions import SlotCalendarError
from ..domain.models import Calendar, TimeRange
from ..domain.slot_grid import build_slot_grid
from ..adapters.mock_timeslot_client import MockTimeslotClient
from ..adapters.timeslot_client import TimeslotClient
from ..services.calendar_builder import CalendarBuilderService

app = typer.Typer(
    name="slotcalendar",
    help="Build calendar-picker slot grids from provider timeslot data",
    add_completion=False
)

console = Console()


def _configure_logging(level: str) -> None:
    """Route log records through a Rich console on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration file.

    An explicit --config path must exist; without one, defaults are used
    when no config.yaml is found.
    """
    if config_file:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if config_path.exists():
        return AppConfig.load_from_yaml(config_path)

    return AppConfig()


def _render_table(calendar: Calendar) -> Table:
    """Render the calendar as a Rich table, one column per day."""
    table = Table(
        title="Available Timeslots",
        show_header=True,
        header_style="bold cyan"
    )

    for header in calendar.table_format.headers:
        table.add_column(header.format("ddd MMM D", locale="en"), justify="center")

    for row in calendar.table_format.body:
        table.add_row(*[
            f"[bold green]{slot.civilian_time} {slot.am_pm}[/bold green]"
            if slot.is_avail
            else f"[dim]{slot.civilian_time} {slot.am_pm}[/dim]"
            for slot in row
        ])

    return table


@app.command()
def build(
    make: str = typer.Option(..., "--make", help="Vehicle make"),
    model: str = typer.Option(..., "--model", help="Vehicle model"),
    year: int = typer.Option(..., "--year", help="Vehicle model year"),
    start: Optional[str] = typer.Option(
        None,
        "--start",
        help="First day to show (YYYY-MM-DD), defaults to today"
    ),
    days: Optional[int] = typer.Option(
        None,
        "--days",
        help="Number of days to return"
    ),
    delivery: Optional[str] = typer.Option(
        None,
        "--delivery",
        help="Booking cutoff as ISO 8601 date/time, defaults to now"
    ),
    transportation: Optional[str] = typer.Option(
        None,
        "--transportation",
        help="Transportation option code"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    ),
    mock: bool = typer.Option(
        False,
        "--mock",
        help="Use bundled mock data instead of the timeslots service"
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the calendar payload as JSON"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable debug logging"
    )
):
    """
    Build the slot calendar for a vehicle.

    Examples:

        slotcalendar build --make Honda --model Civic --year 2021

        slotcalendar build --make Honda --model Civic --year 2021 --start 2024-11-25 --days 5

        # Use mock data (for testing without the timeslots service)
        slotcalendar build --make Honda --model Civic --year 2021 --mock --json
    """
    try:
        config = _load_config(config_file)
        _configure_logging("DEBUG" if verbose else config.log_level)

        tz = config.defaults.timezone
        now = pendulum.now(tz)

        options = CalendarOptions.from_mapping({
            "days_to_return": days if days is not None else config.defaults.days_to_return,
            "transportation_option": (
                transportation
                if transportation is not None
                else config.defaults.transportation_option
            ),
            "start_date": start or now.to_date_string(),
            "delivery_date": pendulum.parse(delivery, tz=tz) if delivery else now,
            "make": make,
            "model": model,
            "year": year,
        })

        if mock:
            client = MockTimeslotClient()
            if not as_json:
                console.print("[yellow]⚠  Mock mode: using bundled timeslot data[/yellow]\n")
        else:
            client = TimeslotClient(config.data_source)

        service = CalendarBuilderService(timeslot_client=client)
        calendar = asyncio.run(service.build_calendar(options))

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    except (SlotCalendarError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(calendar.to_dict(), indent=2))
        return

    console.print()
    console.print(_render_table(calendar))

    available = calendar.available_slots()
    if not available:
        console.print("\n[yellow]⚠ No available timeslots in this range.[/yellow]\n")
    else:
        console.print(
            f"\n[bold green]✓ {len(available)} available timeslot(s)[/bold green] "
            f"(provider offset UTC{calendar.offset:+g})\n"
        )


@app.command()
def grid(
    earliest: str = typer.Option(..., "--earliest", help="Earliest slot time (HH:MM)"),
    latest: str = typer.Option(..., "--latest", help="Latest slot time (HH:MM)"),
    interval: int = typer.Option(..., "--interval", help="Slot interval in minutes")
):
    """
    Show the master and offset slot grid for a time window.
    """
    try:
        slot_grid = build_slot_grid(TimeRange.from_times(earliest, latest), interval)
    except (SlotCalendarError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim")
    table.add_column("Master", style="bold yellow")
    table.add_column("Offset")

    for index, (master, offset) in enumerate(
        zip(slot_grid.slot_master, slot_grid.slot_master_offset), 1
    ):
        table.add_row(str(index), master, offset)

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotcalendar[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

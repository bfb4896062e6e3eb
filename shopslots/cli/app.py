"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import NoReturn, Optional, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..adapters.schedule_file import FileScheduleProvider
from ..config import AppConfig, get_default_config_path
from ..domain.clock import convert_time
from ..domain.exceptions import ShopSlotsError
from ..domain.slot_calculator import summarize_slots
from ..domain.weekday import resolve_weekday
from ..services.booking_slots import BookingSlotService

app = typer.Typer(
    name="shopslots",
    help="Compute bookable appointment slots for a shop's staff",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
ScheduleOption = Annotated[
    Optional[Path],
    typer.Option("--schedule", "-s", help="Schedule file. Overrides schedule_file from the config."),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_service(config_file: Optional[Path], schedule_file: Optional[Path]) -> BookingSlotService:
    """
    Load configuration and wire the file-backed provider into the service.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ShopSlotsError: If no schedule file is configured or it cannot be read
    """
    config_path = config_file or get_default_config_path()
    config = AppConfig.load_from_yaml(config_path)

    schedule_path = schedule_file or config.schedule_file
    if schedule_path is None:
        raise ShopSlotsError("No schedule file given. Use --schedule or set schedule_file in the config.")

    return BookingSlotService(
        schedule_provider=FileScheduleProvider(schedule_path),
        business=config.business,
        timezone=config.timezone,
    )


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


@app.command()
def slots(
    staff: Annotated[str, typer.Argument(help="Staff member identifier from the schedule file")],
    date: Annotated[str, typer.Option("--date", "-d", help="Day to book (YYYY-MM-DD)")],
    service_duration: Annotated[Optional[int], typer.Option("--service-duration", help="Service length in minutes")] = None,
    available_only: Annotated[bool, typer.Option("--available-only", help="Hide unavailable slots.")] = False,
    config_file: ConfigOption = None,
    schedule_file: ScheduleOption = None,
    verbose: VerboseOption = False,
):
    """
    List the slot grid of a staff member's day.

    Examples:

        shopslots slots alex --date 2024-07-10
        shopslots slots alex --date 2024-07-10 --service-duration 60 --available-only
    """
    _configure_logging(verbose)
    try:
        service = _build_service(config_file, schedule_file)
        weekday = resolve_weekday(date, service.timezone)
        day_slots = asyncio.run(
            service.find_slots(
                staff_id=staff,
                on_date=date,
                service_duration=service_duration,
            )
        )
    except (ShopSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    summary = summarize_slots(day_slots)
    shown = [slot for slot in day_slots if slot.available] if available_only else day_slots

    console.print()
    if not shown:
        console.print(
            "[yellow]⚠ No bookable slots for this day.[/yellow]\n"
            "Try another date or a shorter service."
        )
        console.print()
        return

    table = Table(
        title=f"{staff} · {weekday.day_name.capitalize()} {date} ({service.timezone})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("")
    table.add_column("Slot")

    for slot in shown:
        if slot.available:
            table.add_row("[green]✓[/green]", slot.format_display())
        else:
            table.add_row("[red]✗[/red]", slot.format_display(), style="dim")

    console.print(table)
    console.print(f"\n[bold green]✓ {summary.available} of {summary.total} slot(s) available[/bold green]\n")


@app.command()
def check(
    staff: Annotated[str, typer.Argument(help="Staff member identifier from the schedule file")],
    time: Annotated[str, typer.Argument(help="Proposed start time (HH:MM)")],
    date: Annotated[str, typer.Option("--date", "-d", help="Day to book (YYYY-MM-DD)")],
    service_duration: Annotated[Optional[int], typer.Option("--service-duration", help="Service length in minutes")] = None,
    config_file: ConfigOption = None,
    schedule_file: ScheduleOption = None,
    verbose: VerboseOption = False,
):
    """
    Check whether a single start time can be booked (e.g. when rescheduling).

    Exits with code 2 when the slot is unavailable.
    """
    _configure_logging(verbose)
    try:
        service = _build_service(config_file, schedule_file)
        reason = asyncio.run(
            service.check_reschedule(
                staff_id=staff,
                on_date=date,
                start_time=time,
                service_duration=service_duration,
            )
        )
    except (ShopSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if reason is None:
        console.print(Panel.fit(
            f"[bold green]✓ {time} on {date} is available[/bold green]",
            title="Slot check"
        ))
        return

    console.print(Panel.fit(
        f"[bold red]✗ {time} on {date} is unavailable[/bold red]\n\n"
        f"[bold]Reason:[/bold] {reason}",
        title="Slot check"
    ))
    raise typer.Exit(2)


@app.command()
def weekday(
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    timezone: Annotated[Optional[str], typer.Option("--timezone", "-t", help="IANA time zone. Defaults to the configured one.")] = None,
    config_file: ConfigOption = None,
):
    """
    Show the weekday a date falls on in the business time zone.
    """
    try:
        if timezone is None:
            config_path = config_file or get_default_config_path()
            timezone = AppConfig.load_from_yaml(config_path).timezone if config_path.exists() else "UTC"
        day = resolve_weekday(date, timezone)
    except (ShopSlotsError, ValueError) as e:
        _fail(e)

    console.print(f"{date} ({timezone}): [bold]{day.day_name}[/bold] ({day.value})")


@app.command()
def convert(
    time: Annotated[str, typer.Argument(help="Wall-clock time (HH:MM[:SS])")],
    date: Annotated[str, typer.Option("--date", "-d", help="Date the time belongs to (YYYY-MM-DD)")],
    source: Annotated[str, typer.Option("--from", help="Source IANA time zone")],
    target: Annotated[str, typer.Option("--to", help="Target IANA time zone")],
):
    """
    Convert a wall-clock time between two time zones on a given date.
    """
    try:
        converted = convert_time(time, date, source, target)
    except ShopSlotsError as e:
        _fail(e)

    console.print(f"{time} {source} → [bold]{converted}[/bold] {target}")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]shopslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

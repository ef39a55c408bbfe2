"""Output formatters for CLI display."""

import json

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.feed import FeedEntry
from ..core.models import DayType, RouteComparison, Station, UpdateResult

console = Console()

DAY_TYPE_LABELS = {DayType.WEEKDAY: "平日", DayType.HOLIDAY: "土休日"}


def format_station_timetable(station: Station, day_type: DayType) -> None:
    """Display a station's timetables as one hour-by-minute table per direction."""
    timetables = station.timetables.for_day_type(day_type)
    if not timetables:
        console.print(
            f"[yellow]No {DAY_TYPE_LABELS[day_type]} timetable for {station.name}[/yellow]"
        )
        return

    for timetable in timetables:
        table = Table(
            title=f"{station.name} {timetable.direction} ({DAY_TYPE_LABELS[day_type]})",
            show_header=True,
            header_style="bold magenta",
            min_width=48,
        )
        table.add_column("時", style="cyan", justify="right", no_wrap=True)
        table.add_column("分", style="green")

        by_hour: dict[int, list[str]] = {}
        for departure in timetable.departures:
            by_hour.setdefault(departure.hour, []).append(f"{departure.minute:02d}")
        for hour, minutes in by_hour.items():
            table.add_row(str(hour), " ".join(minutes))

        console.print(table)


def format_feed_table(
    entries: list[FeedEntry], title: str, highlight: FeedEntry | None = None
) -> None:
    """Display a merged departure feed, marking the next train."""
    if not entries:
        console.print("データがありません")
        return

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Time", style="cyan", no_wrap=True)
    table.add_column("Station", style="green")
    table.add_column("Line", style="yellow")
    table.add_column("Direction", style="blue")

    for entry in entries:
        style = "bold reverse" if entry is highlight else None
        table.add_row(
            str(entry.departure),
            entry.station_name,
            entry.line_name,
            entry.direction,
            style=style,
        )

    console.print(table)


def format_feed_json(entries: list[FeedEntry]) -> str:
    """Format feed entries as JSON."""
    return json.dumps(
        [entry.model_dump(mode="json") for entry in entries],
        ensure_ascii=False,
        indent=2,
    )


def format_station_list(stations: list[Station]) -> None:
    """Display stored stations with their timetable counts."""
    table = Table(title="Stations", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Line", style="yellow")
    table.add_column("Weekdays", justify="right")
    table.add_column("Holidays", justify="right")

    for station in stations:
        weekdays = sum(len(t.departures) for t in station.timetables.weekdays)
        holidays = sum(len(t.departures) for t in station.timetables.holidays)
        table.add_row(
            station.id, station.name, station.line_name, str(weekdays), str(holidays)
        )

    console.print(table)


def format_update_result(result: UpdateResult) -> None:
    """Display the outcome of an update cycle."""
    style = "green" if result.success else "red"
    console.print(
        Panel(
            f"{result.message}\n[bold]Updated stations:[/bold] {result.updated_station_count}",
            title="Timetable Update",
            border_style=style,
        )
    )


def format_route_comparison(comparison: RouteComparison) -> None:
    """Display a route comparison with its legs."""
    summary_text = f"""[bold]From:[/bold] {comparison.from_station}
[bold]To:[/bold] {comparison.to_station}
[bold]Duration:[/bold] {comparison.total_time}分
[bold]Cost:[/bold] {comparison.total_cost}円
[bold]Transfers:[/bold] {comparison.transfer_count}"""
    if comparison.distance:
        summary_text += f"\n[bold]Distance:[/bold] {comparison.distance / 1000:.1f}km"

    console.print(Panel(summary_text, title="Route Summary", border_style="blue"))

    if comparison.steps:
        table = Table(title="Route Details", show_header=True, header_style="bold blue")
        table.add_column("Line", style="yellow")
        table.add_column("From", style="cyan")
        table.add_column("To", style="cyan")
        table.add_column("Time", style="magenta")
        for step in comparison.steps:
            table.add_row(
                step.line, step.from_station or "-", step.to_station or "-", f"{step.time}分"
            )
        console.print(table)

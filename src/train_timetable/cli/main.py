"""CLI main entry point for the train timetable scraper."""

import json
import logging
import sys
from datetime import datetime as dt_module
from pathlib import Path

import click
from rich.console import Console

from ..core import (
    ConfigurationError,
    DayType,
    JsonTimetableStore,
    NetworkError,
    RouteNotFoundError,
    ScrapingError,
    StorageError,
    TimetableUpdater,
    ValidationError,
    YahooRouteSearcher,
    YahooTimetableScraper,
)
from ..core.config import DEFAULT_STATION_CONFIGS, Settings, load_station_configs
from ..core.feed import (
    Bound,
    day_type_for,
    filter_bound,
    merged_feed,
    next_departure,
    route_search_url,
)
from .formatters import (
    format_feed_json,
    format_feed_table,
    format_route_comparison,
    format_station_list,
    format_station_timetable,
    format_update_result,
)

console = Console()
error_console = Console(stderr=True)

DAY_TYPE_CHOICES = {"weekdays": DayType.WEEKDAY, "holidays": DayType.HOLIDAY}


def _load_store(ctx: click.Context) -> JsonTimetableStore:
    return JsonTimetableStore(ctx.obj["settings"].data_path)


def _resolve_day_type(value: str | None) -> DayType:
    if value:
        return DAY_TYPE_CHOICES[value]
    return day_type_for(dt_module.now().date())


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--data",
    "-D",
    "data_path",
    type=click.Path(path_type=Path),
    help="Timetable store (default: data/stations.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, data_path: Path | None, verbose: bool) -> None:
    """Train Timetable - Scrape and browse station departure timetables."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        error_console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)
    if data_path is not None:
        settings = settings.model_copy(update={"data_path": data_path})
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@click.option(
    "--timeout", "-t", type=click.IntRange(min=1), help="Request timeout in seconds"
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Station configuration JSON (default: built-in stations)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def update(
    ctx: click.Context, timeout: int | None, config_path: Path | None, as_json: bool
) -> None:
    """Scrape all configured stations and rewrite the timetable store.

    Examples:
        train-timetable update
        train-timetable --data data/stations.json update --timeout 10
    """
    settings: Settings = ctx.obj["settings"]
    try:
        configs = (
            load_station_configs(config_path) if config_path else DEFAULT_STATION_CONFIGS
        )
        scraper = YahooTimetableScraper(
            timeout=timeout or settings.timeout, base_url=settings.base_url
        )
        updater = TimetableUpdater(_load_store(ctx), scraper, configs)

        with console.status("[bold green]Updating timetables..."):
            result = updater.update_timetables()

    except (ConfigurationError, StorageError) as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, ensure_ascii=False))
        else:
            error_console.print(f"[red]Update failed:[/red] {e}")
        sys.exit(1)

    if as_json:
        click.echo(result.model_dump_json(by_alias=True))
    else:
        format_update_result(result)


@cli.command()
@click.pass_context
def stations(ctx: click.Context) -> None:
    """List stored stations."""
    try:
        store = _load_store(ctx).load()
    except StorageError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    format_station_list(store.stations)


@cli.command()
@click.argument("station_id")
@click.option(
    "--day-type",
    "-d",
    type=click.Choice(list(DAY_TYPE_CHOICES)),
    help="Schedule to show (default: today's)",
)
@click.pass_context
def show(ctx: click.Context, station_id: str, day_type: str | None) -> None:
    """Show a station's timetable.

    Examples:
        train-timetable show nankai_suminoe
        train-timetable show jr_sugimotocho --day-type holidays
    """
    try:
        store = _load_store(ctx).load()
    except StorageError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    station = store.get_station(station_id)
    if station is None:
        error_console.print(f"[red]Unknown station:[/red] {station_id}")
        sys.exit(1)

    format_station_timetable(station, _resolve_day_type(day_type))


@cli.command()
@click.option(
    "--day-type",
    "-d",
    type=click.Choice(list(DAY_TYPE_CHOICES)),
    help="Schedule to show (default: today's)",
)
@click.option(
    "--bound",
    "-b",
    type=click.Choice([b.value for b in Bound]),
    help="Only northbound or southbound departures",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def feed(
    ctx: click.Context, day_type: str | None, bound: str | None, output_format: str
) -> None:
    """Show departures of all stations merged in time order."""
    try:
        store = _load_store(ctx).load()
    except StorageError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    selected = _resolve_day_type(day_type)
    entries = merged_feed(store.stations, selected)
    if bound:
        entries = filter_bound(entries, Bound(bound))

    if output_format == "json":
        click.echo(format_feed_json(entries))
    else:
        highlight = next_departure(entries, dt_module.now())
        format_feed_table(entries, title=f"All departures ({selected.value})", highlight=highlight)


@cli.command("next")
@click.option(
    "--bound",
    "-b",
    type=click.Choice([b.value for b in Bound]),
    help="Only northbound or southbound departures",
)
@click.option("--station", "-s", "station_id", help="Limit to one station")
@click.pass_context
def next_train(ctx: click.Context, bound: str | None, station_id: str | None) -> None:
    """Show the next departure from now."""
    try:
        store = _load_store(ctx).load()
    except StorageError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    now = dt_module.now()
    candidates = store.stations
    if station_id:
        candidates = [s for s in candidates if s.id == station_id]
    entries = merged_feed(candidates, day_type_for(now.date()))
    if bound:
        entries = filter_bound(entries, Bound(bound))

    entry = next_departure(entries, now)
    if entry is None:
        console.print("[yellow]No more departures today[/yellow]")
        return
    console.print(
        f"[bold]{entry.departure}[/bold] {entry.station_name} "
        f"({entry.line_name}) {entry.direction}"
    )


@cli.command()
@click.argument("from_station")
@click.argument("to_station")
@click.option(
    "--timeout",
    "-t",
    type=click.IntRange(min=1),
    help="Request timeout in seconds (default: settings)",
)
@click.option("--link", is_flag=True, help="Only print the Yahoo Transit search link")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["detailed", "json"]),
    default="detailed",
    help="Output format",
)
@click.pass_context
def route(
    ctx: click.Context,
    from_station: str,
    to_station: str,
    timeout: int | None,
    link: bool,
    output_format: str,
) -> None:
    """Compare the route from a station to a destination.

    Examples:
        train-timetable route "我孫子道" "天王寺"
        train-timetable route "住吉東" "なんば" --link
    """
    if link:
        click.echo(route_search_url(from_station, to_station))
        return

    try:
        with console.status(
            f"[bold green]Searching route from {from_station} to {to_station}..."
        ):
            settings: Settings = ctx.obj["settings"]
            searcher = YahooRouteSearcher(
                timeout=timeout or settings.timeout, base_url=settings.base_url
            )
            comparison = searcher.compare(from_station, to_station)
    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    except RouteNotFoundError as e:
        error_console.print(f"[yellow]No route found:[/yellow] {e}")
        sys.exit(1)
    except (NetworkError, ScrapingError) as e:
        error_console.print(f"[red]Route search failed:[/red] {e}")
        sys.exit(1)

    if output_format == "json":
        click.echo(comparison.model_dump_json(indent=2))
    else:
        format_route_comparison(comparison)


if __name__ == "__main__":
    cli()

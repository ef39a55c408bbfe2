"""MCP Server for station timetables.

This module implements a Model Context Protocol (MCP) server that exposes
the "update timetables" action together with read access to the stored
timetables and a route comparison lookup.
"""

import asyncio
import json
import logging
from datetime import datetime
from typing import Any

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import (
    TextContent,
    Tool,
)

from ..core.config import Settings
from ..core.exceptions import (
    NetworkError,
    RouteNotFoundError,
    ScrapingError,
    StorageError,
    ValidationError,
)
from ..core.feed import Bound, day_type_for, filter_bound, merged_feed, next_departure
from ..core.models import DayType
from ..core.route_search import YahooRouteSearcher
from ..core.scraper import YahooTimetableScraper
from ..core.storage import JsonTimetableStore
from ..core.updater import TimetableUpdater

logger = logging.getLogger(__name__)

DAY_TYPE_PROPERTY = {
    "type": "string",
    "description": "Schedule variant; defaults to today's (weekends use holidays)",
    "enum": [d.value for d in DayType],
}


class TimetableMCPServer:
    """MCP Server for station timetable functionality."""

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the Timetable MCP Server."""
        self.settings = settings or Settings.from_env()
        self.server = Server("train-timetable")
        self.store = JsonTimetableStore(self.settings.data_path)
        self.updater = TimetableUpdater(
            self.store,
            YahooTimetableScraper(
                timeout=self.settings.timeout, base_url=self.settings.base_url
            ),
        )
        self.route_searcher = YahooRouteSearcher(
            timeout=self.settings.timeout, base_url=self.settings.base_url
        )

        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List available tools."""
            return [
                Tool(
                    name="update_timetables",
                    description="Scrape Yahoo Transit for all configured stations and rewrite the timetable store",
                    inputSchema={"type": "object", "properties": {}},
                ),
                Tool(
                    name="get_station_timetable",
                    description="Get the stored timetables of one station",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "station_id": {
                                "type": "string",
                                "description": "Station identifier, e.g. 'nankai_suminoe'",
                            },
                            "day_type": DAY_TYPE_PROPERTY,
                        },
                        "required": ["station_id"],
                    },
                ),
                Tool(
                    name="get_departure_feed",
                    description="Get departures of all stations merged in time order",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "day_type": DAY_TYPE_PROPERTY,
                            "bound": {
                                "type": "string",
                                "description": "Only departures towards Osaka (northbound) or away from it (southbound)",
                                "enum": [b.value for b in Bound],
                            },
                            "limit": {
                                "type": "integer",
                                "description": "Maximum number of departures from the next train on",
                                "default": 20,
                                "minimum": 1,
                                "maximum": 500,
                            },
                        },
                    },
                ),
                Tool(
                    name="compare_routes",
                    description="Compare travel time, fare and transfers between two stations",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "from_station": {
                                "type": "string",
                                "description": "Departure station name (in Japanese)",
                            },
                            "to_station": {
                                "type": "string",
                                "description": "Destination station name (in Japanese)",
                            },
                        },
                        "required": ["from_station", "to_station"],
                    },
                ),
            ]

        @self.server.call_tool()
        async def handle_call_tool(
            name: str, arguments: dict[str, Any]
        ) -> list[TextContent]:
            """Handle tool calls."""
            try:
                if name == "update_timetables":
                    return await self._update_timetables(arguments)
                elif name == "get_station_timetable":
                    return await self._get_station_timetable(arguments)
                elif name == "get_departure_feed":
                    return await self._get_departure_feed(arguments)
                elif name == "compare_routes":
                    return await self._compare_routes(arguments)
                else:
                    return [TextContent(type="text", text=f"Unknown tool: {name}")]

            except Exception as e:
                logger.error(f"Error in tool {name}: {e}")
                return [TextContent(type="text", text=f"Error: {str(e)}")]

    def _day_type(self, arguments: dict[str, Any]) -> DayType:
        value = arguments.get("day_type")
        if value:
            return DayType(value)
        return day_type_for(datetime.now().date())

    async def _update_timetables(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Run one update cycle in a worker thread."""
        try:
            result = await asyncio.to_thread(self.updater.update_timetables)
        except StorageError as e:
            logger.error(f"Timetable update error: {e}")
            payload = {"error": f"時刻表データの更新中にエラーが発生しました: {e}"}
            return [TextContent(type="text", text=json.dumps(payload, ensure_ascii=False))]

        return [
            TextContent(
                type="text",
                text=json.dumps(result.model_dump(by_alias=True), ensure_ascii=False),
            )
        ]

    async def _get_station_timetable(
        self, arguments: dict[str, Any]
    ) -> list[TextContent]:
        """Return one station's timetables for a day type."""
        station_id = arguments["station_id"]
        day_type = self._day_type(arguments)

        try:
            store = self.store.load()
        except StorageError as e:
            return [TextContent(type="text", text=f"Failed to load timetables: {str(e)}")]

        station = store.get_station(station_id)
        if station is None:
            return [TextContent(type="text", text=f"Station not found: {station_id}")]

        timetables = station.timetables.for_day_type(day_type)
        if not timetables:
            return [
                TextContent(
                    type="text",
                    text=f"No {day_type.value} timetable stored for {station.name}",
                )
            ]

        result_text = f"**{station} ({day_type.value})**\n\n"
        for timetable in timetables:
            result_text += f"{timetable.direction}:\n"
            by_hour: dict[int, list[str]] = {}
            for departure in timetable.departures:
                by_hour.setdefault(departure.hour, []).append(f"{departure.minute:02d}")
            for hour, minutes in by_hour.items():
                result_text += f"   {hour:2d}: {' '.join(minutes)}\n"
            result_text += "\n"

        timetables_data = [t.model_dump(mode="json") for t in timetables]
        return [
            TextContent(type="text", text=result_text),
            TextContent(
                type="text",
                text=f"JSON Data:\n```json\n{json.dumps(timetables_data, indent=2, ensure_ascii=False)}\n```",
            ),
        ]

    async def _get_departure_feed(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Return upcoming departures across all stations."""
        day_type = self._day_type(arguments)
        limit = arguments.get("limit", 20)

        try:
            store = self.store.load()
        except StorageError as e:
            return [TextContent(type="text", text=f"Failed to load timetables: {str(e)}")]

        entries = merged_feed(store.stations, day_type)
        if arguments.get("bound"):
            entries = filter_bound(entries, Bound(arguments["bound"]))

        upcoming = next_departure(entries, datetime.now())
        if upcoming is not None:
            entries = entries[entries.index(upcoming) :]
        else:
            entries = []

        if not entries:
            return [TextContent(type="text", text="No more departures today")]

        result_text = f"**Next {min(limit, len(entries))} departures ({day_type.value}):**\n\n"
        for entry in entries[:limit]:
            result_text += f"• {entry.departure} {entry.station_name} ({entry.line_name}) {entry.direction}\n"

        return [TextContent(type="text", text=result_text)]

    async def _compare_routes(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Compare the route between two stations."""
        from_station = arguments["from_station"]
        to_station = arguments["to_station"]

        try:
            comparison = await asyncio.to_thread(
                self.route_searcher.compare, from_station, to_station
            )
        except (ValidationError, RouteNotFoundError, ScrapingError, NetworkError) as e:
            return [TextContent(type="text", text=f"Route search failed: {str(e)}")]

        result_text = f"**{comparison.from_station} → {comparison.to_station}**\n"
        result_text += f"   • Duration: {comparison.total_time}分\n"
        result_text += f"   • Cost: {comparison.total_cost}円\n"
        result_text += f"   • Transfers: {comparison.transfer_count}\n"
        if comparison.steps:
            result_text += "   Route Details:\n"
            for i, step in enumerate(comparison.steps, 1):
                result_text += f"     {i}. {step}\n"

        return [
            TextContent(type="text", text=result_text),
            TextContent(
                type="text",
                text=f"JSON Data:\n```json\n{comparison.model_dump_json(indent=2)}\n```",
            ),
        ]


async def main() -> None:
    """Main entry point for the MCP server."""
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting Train Timetable MCP Server")

    server_instance = TimetableMCPServer()

    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP Server running with stdio transport")
        await server_instance.server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="train-timetable",
                server_version="0.1.0",
                capabilities=server_instance.server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def main_sync() -> None:
    """Synchronous wrapper for the async main function - used as entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()

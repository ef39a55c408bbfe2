"""Train Timetable Package

Scrapes Yahoo Transit station timetables into a JSON store and exposes
them through a CLI and an MCP server.
"""

__version__ = "0.1.0"

from .core.models import Departure, Station, StationTimetables, Timetable
from .core.scraper import YahooTimetableScraper
from .core.updater import TimetableUpdater

__all__ = [
    "Departure",
    "Station",
    "StationTimetables",
    "Timetable",
    "TimetableUpdater",
    "YahooTimetableScraper",
]

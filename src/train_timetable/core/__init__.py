"""Core timetable scraping functionality."""

from .exceptions import (
    ConfigurationError,
    NetworkError,
    RouteNotFoundError,
    ScrapingError,
    StorageError,
    TimetableError,
    ValidationError,
)
from .models import (
    DayType,
    Departure,
    Direction,
    RouteComparison,
    RouteStep,
    Station,
    StationConfig,
    StationTimetables,
    Timetable,
    TimetableStore,
    UpdateResult,
)
from .route_search import YahooRouteSearcher
from .scraper import YahooTimetableScraper
from .storage import JsonTimetableStore
from .updater import TimetableUpdater

__all__ = [
    "DayType",
    "Departure",
    "Direction",
    "RouteComparison",
    "RouteStep",
    "Station",
    "StationConfig",
    "StationTimetables",
    "Timetable",
    "TimetableStore",
    "UpdateResult",
    "JsonTimetableStore",
    "TimetableUpdater",
    "YahooRouteSearcher",
    "YahooTimetableScraper",
    "TimetableError",
    "NetworkError",
    "ScrapingError",
    "StorageError",
    "ConfigurationError",
    "RouteNotFoundError",
    "ValidationError",
]

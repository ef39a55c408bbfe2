"""Merged departure feed across stations and next-train lookup."""

from datetime import date, datetime
from enum import Enum
from urllib.parse import urlencode

from pydantic import BaseModel

from .models import DayType, Departure, Station

ROUTE_SEARCH_URL = "https://transit.yahoo.co.jp/search/result"


class Bound(str, Enum):
    """Travel sense of a direction relative to central Osaka."""

    NORTHBOUND = "northbound"
    SOUTHBOUND = "southbound"

    @property
    def keywords(self) -> tuple[str, ...]:
        return BOUND_KEYWORDS[self]


BOUND_KEYWORDS: dict[Bound, tuple[str, ...]] = {
    Bound.NORTHBOUND: ("なんば", "天王寺"),
    Bound.SOUTHBOUND: ("和歌山", "高野山", "浜寺"),
}


class FeedEntry(BaseModel):
    """One departure in the merged feed."""

    station_id: str
    station_name: str
    line_name: str
    color: str
    direction: str
    departure: Departure

    @property
    def minutes_since_midnight(self) -> int:
        return self.departure.minutes_since_midnight


def day_type_for(day: date) -> DayType:
    """Saturdays and Sundays run the holiday schedule."""
    return DayType.HOLIDAY if day.weekday() >= 5 else DayType.WEEKDAY


def merged_feed(stations: list[Station], day_type: DayType) -> list[FeedEntry]:
    """Collect every departure of every station into one time-ordered list."""
    entries = [
        FeedEntry(
            station_id=station.id,
            station_name=station.name,
            line_name=station.line_name,
            color=station.color,
            direction=timetable.direction,
            departure=departure,
        )
        for station in stations
        for timetable in station.timetables.for_day_type(day_type)
        for departure in timetable.departures
    ]
    entries.sort(key=lambda entry: entry.minutes_since_midnight)
    return entries


def filter_bound(entries: list[FeedEntry], bound: Bound) -> list[FeedEntry]:
    """Keep entries whose direction label names one of the bound's termini."""
    return [
        entry
        for entry in entries
        if any(keyword in entry.direction for keyword in bound.keywords)
    ]


def next_departure(entries: list[FeedEntry], now: datetime) -> FeedEntry | None:
    """First entry departing at or after ``now``."""
    current = now.hour * 60 + now.minute
    for entry in entries:
        if entry.minutes_since_midnight >= current:
            return entry
    return None


def route_search_url(from_station: str, to_station: str) -> str:
    """Yahoo Transit route search link, earliest arrival with IC fares."""
    query = urlencode(
        {"from": from_station, "to": to_station, "type": "1", "ticket": "ic"}
    )
    return f"{ROUTE_SEARCH_URL}?{query}"

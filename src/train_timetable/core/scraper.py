"""Yahoo Transit timetable scraper."""

import logging

import requests

from .models import (
    DayType,
    Departure,
    Direction,
    StationConfig,
    StationTimetables,
    Timetable,
)
from .parsing import extract_departures

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://transit.yahoo.co.jp"

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "ja,en-US;q=0.7,en;q=0.3",
}


def timetable_url(
    external_station_id: str,
    external_direction_id: int,
    day_type: DayType,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    """Build the Yahoo Transit timetable page URL for one direction."""
    return (
        f"{base_url.rstrip('/')}/timetable/{external_station_id}/"
        f"{external_direction_id}?kind={day_type.kind}"
    )


class YahooTimetableScraper:
    """Scraper for Yahoo Transit station timetables.

    Pages are fetched one at a time. A failed fetch or parse yields an empty
    departure list instead of an exception so that one bad page never aborts
    a multi-station update.
    """

    def __init__(self, timeout: int = 30, base_url: str = DEFAULT_BASE_URL):
        """Initialize the scraper.

        Args:
            timeout: Request timeout in seconds
            base_url: Yahoo Transit origin, overridable for testing
        """
        self.timeout = timeout
        self.base_url = base_url
        self.session = requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    def fetch_departures(
        self, config: StationConfig, direction: Direction, day_type: DayType
    ) -> list[Departure]:
        """Fetch and parse the departures of one direction and day type.

        Args:
            config: Station configuration
            direction: Direction to fetch
            day_type: Weekday or holiday schedule

        Returns:
            Departures sorted by time, empty on any failure
        """
        url = timetable_url(
            config.external_station_id,
            direction.external_direction_id,
            day_type,
            self.base_url,
        )
        logger.info(f"Scraping {url} for {direction.label}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to fetch {url}: {e}")
            return []

        try:
            departures = extract_departures(response.text)
        except Exception as e:
            logger.error(f"Error scraping {url}: {e}")
            return []

        logger.debug(f"Extracted {len(departures)} departures from {url}")
        return departures

    def build_timetables(
        self, config: StationConfig, day_type: DayType
    ) -> list[Timetable]:
        """Build one timetable per direction that has departures."""
        timetables: list[Timetable] = []
        for direction in config.directions:
            departures = self.fetch_departures(config, direction, day_type)
            if departures:
                timetables.append(
                    Timetable(direction=direction.label, departures=departures)
                )
        return timetables

    def build_station_timetables(self, config: StationConfig) -> StationTimetables:
        """Scrape weekday and holiday timetables for a station."""
        return StationTimetables(
            weekdays=self.build_timetables(config, DayType.WEEKDAY),
            holidays=self.build_timetables(config, DayType.HOLIDAY),
        )

"""Route comparison against Yahoo Transit search results."""

import logging
import re

import requests
from bs4 import BeautifulSoup, Tag
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .exceptions import NetworkError, RouteNotFoundError, ScrapingError, ValidationError
from .models import RouteComparison, RouteStep
from .scraper import DEFAULT_BASE_URL, DEFAULT_HEADERS

logger = logging.getLogger(__name__)

# Search options: earliest arrival, IC fares, all transport types
SEARCH_PARAMS = {
    "flatlon": "",
    "tlatlon": "",
    "type": "1",
    "ticket": "ic",
    "expkind": "1",
    "userpass": "1",
    "ws": "3",
    "s": "0",
    "al": "1",
    "shin": "1",
    "ex": "1",
    "hb": "1",
    "lb": "1",
    "sr": "1",
}

ROUTE_SECTION_SELECTORS = (".route.detail", ".routeSummary", '[class*="route"]')
TIME_SELECTORS = (".time", '[class*="time"]')
FARE_SELECTORS = (".fare", '[class*="fare"]', '[class*="cost"]')
TRANSFER_SELECTORS = (".transfer", '[class*="transfer"]')

WALK_MARKER = "徒歩"
PLACEHOLDER_LINE = "経路詳細取得中"


def _first_match(section: Tag, selectors: tuple[str, ...]) -> Tag | None:
    for selector in selectors:
        element = section.select_one(selector)
        if element is not None:
            return element
    return None


def _text(element: Tag | None) -> str:
    return element.get_text().strip() if element is not None else ""


def parse_duration_minutes(text: str) -> int:
    """Parse "1時間8分" or "49分" into minutes, 0 if neither matches."""
    match = re.search(r"(\d+)\s*時間\s*(\d+)\s*分", text)
    if match:
        return int(match.group(1)) * 60 + int(match.group(2))
    match = re.search(r"(\d+)\s*分", text)
    return int(match.group(1)) if match else 0


def parse_fare_yen(text: str) -> int:
    """Parse the first amount like "1,230" in a fare string."""
    match = re.search(r"(\d{1,3}(?:,\d{3})*)", text)
    return int(match.group(1).replace(",", "")) if match else 0


def parse_transfer_count(text: str) -> int | None:
    """Parse "乗換：2回" or "2回"; None if no count is present."""
    match = re.search(r"乗換\s*[：:]?\s*(\d+)\s*回", text) or re.search(
        r"(\d+)\s*回", text
    )
    return int(match.group(1)) if match else None


def parse_distance_metres(text: str) -> int:
    match = re.search(r"(\d+(?:\.\d+)?)\s*km", text)
    return int(round(float(match.group(1)) * 1000)) if match else 0


class YahooRouteSearcher:
    """Compares routes to a destination using the Yahoo Transit result page."""

    def __init__(self, timeout: int = 30, base_url: str = DEFAULT_BASE_URL):
        """Initialize the searcher.

        Args:
            timeout: Request timeout in seconds
            base_url: Yahoo Transit origin, overridable for testing
        """
        self.timeout = timeout
        self.base_url = base_url
        self.session = requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    def compare(self, from_station: str, to_station: str) -> RouteComparison:
        """Look up the best route between two stations.

        Args:
            from_station: Departure station name
            to_station: Destination station name

        Returns:
            Route summary with step-by-step legs

        Raises:
            ValidationError: If station names are empty
            RouteNotFoundError: If the page has no route section
            NetworkError: If the page cannot be fetched
            ScrapingError: If parsing fails unexpectedly
        """
        if not from_station or not from_station.strip():
            raise ValidationError("Departure station name cannot be empty")
        if not to_station or not to_station.strip():
            raise ValidationError("Destination station name cannot be empty")

        html_content = self._fetch_result_page(from_station, to_station)
        return self.parse_result_page(html_content, from_station, to_station)

    @retry(
        retry=retry_if_exception_type(NetworkError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=4, max=10),
        reraise=True,
    )
    def _fetch_result_page(self, from_station: str, to_station: str) -> str:
        url = f"{self.base_url.rstrip('/')}/search/result"
        params = {"from": from_station, "to": to_station, **SEARCH_PARAMS}
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Failed to fetch route data: {str(e)}") from e

    def parse_result_page(
        self, html_content: str, from_station: str, to_station: str
    ) -> RouteComparison:
        """Parse a route search result page.

        Missing pieces fall back to zero values; only a page without any
        route section is an error.
        """
        try:
            soup = BeautifulSoup(html_content, "html.parser")
            section = _first_match(soup, ROUTE_SECTION_SELECTORS)
            if section is None:
                raise RouteNotFoundError(
                    f"No route found from {from_station} to {to_station}"
                )

            total_time = parse_duration_minutes(
                _text(_first_match(section, TIME_SELECTORS))
            )
            total_cost = parse_fare_yen(_text(_first_match(section, FARE_SELECTORS)))
            distance = parse_distance_metres(
                _text(section.select_one('[class*="distance"]'))
            )

            transfer_count = parse_transfer_count(
                _text(_first_match(section, TRANSFER_SELECTORS))
            )
            if transfer_count is None:
                transfer_count = self._count_transfers(section)

            steps = self._extract_steps(section)
            if not steps:
                logger.debug("No route steps found, using placeholder")
                steps = [
                    RouteStep(
                        line=PLACEHOLDER_LINE,
                        from_station=from_station,
                        to_station=to_station,
                        time=total_time,
                    )
                ]

            return RouteComparison(
                from_station=from_station,
                to_station=to_station,
                total_time=total_time,
                total_cost=total_cost,
                transfer_count=transfer_count,
                distance=distance,
                steps=steps,
            )

        except Exception as e:
            if isinstance(e, (RouteNotFoundError, ScrapingError)):
                raise
            raise ScrapingError(f"Failed to parse route data: {str(e)}") from e

    def _count_transfers(self, section: Tag) -> int:
        """Derive the transfer count from the riding legs."""
        legs = [
            item
            for item in section.select('[class*="route"] li')
            if item.get_text().strip() and WALK_MARKER not in item.get_text()
        ]
        return len(legs) - 1 if len(legs) > 1 else 0

    def _extract_steps(self, section: Tag) -> list[RouteStep]:
        steps: list[RouteStep] = []
        for item in section.find_all("li"):
            text = item.get_text().strip()
            if not text:
                continue

            time = parse_duration_minutes(text)
            if WALK_MARKER in text:
                steps.append(RouteStep(line=WALK_MARKER, time=time, kind="walk"))
                continue

            line_name = _text(item.select_one('[class*="line"]'))
            if not line_name:
                line_name = text.split()[0]

            stations = item.select('[class*="station"]')
            steps.append(
                RouteStep(
                    line=line_name,
                    from_station=_text(stations[0]) if stations else "",
                    to_station=_text(stations[-1]) if stations else "",
                    time=time,
                )
            )
        return steps

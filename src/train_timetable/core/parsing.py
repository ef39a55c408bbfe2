"""Extraction of departure times from Yahoo Transit timetable markup.

The timetable page is third-party HTML that drifts over time, so every
lookup goes through an ordered chain of strategies. Each strategy returns
``None`` (or an empty list) when it does not apply and the first success
wins.
"""

import logging
import re
from collections.abc import Callable, Sequence

from bs4 import BeautifulSoup, Tag

from .models import Departure

logger = logging.getLogger(__name__)

LEADING_INT_PATTERN = re.compile(r"^(\d+)")

MAX_HOUR = 29
MAX_MINUTE = 59

# Rows of the diagram table, then any table row at all
ROW_SELECTORS: tuple[str, ...] = (".tbl-dia tr", "table tr")

# Minute entries such as "05[天]" or "<span class='time'>05</span>"
MINUTE_SELECTORS: tuple[str, ...] = (".col-min li", "td li", "td span")

MINUTE_TEXT_SELECTOR = ".time"

HourStrategy = Callable[[Tag], int | None]


def parse_leading_int(text: str | None) -> int | None:
    """Parse the run of digits at the start of ``text``.

    Args:
        text: Raw element text, possibly with trailing garbage like "05[天]"

    Returns:
        The integer value, or None when the text does not start with a digit
    """
    if not text:
        return None
    match = LEADING_INT_PATTERN.match(text.strip())
    return int(match.group(1)) if match else None


def hour_from_hour_cell(row: Tag) -> int | None:
    """Read the hour from the dedicated ``.col-hour`` cell."""
    cell = row.select_one(".col-hour")
    if cell is None:
        return None
    return parse_leading_int(cell.get_text())


def hour_from_first_cell(row: Tag) -> int | None:
    """Read the hour from the first ``td`` or ``th`` of the row."""
    cell = row.find(["td", "th"])
    if not isinstance(cell, Tag):
        return None
    return parse_leading_int(cell.get_text())


HOUR_STRATEGIES: tuple[HourStrategy, ...] = (hour_from_hour_cell, hour_from_first_cell)


def select_first(
    root: Tag, selectors: Sequence[str]
) -> tuple[str | None, list[Tag]]:
    """Return the matches of the first selector that finds anything."""
    for selector in selectors:
        matches = root.select(selector)
        if matches:
            return selector, matches
    return None, []


def first_result(
    strategies: Sequence[HourStrategy], row: Tag
) -> int | None:
    """Run strategies in order and return the first non-None result."""
    for strategy in strategies:
        result = strategy(row)
        if result is not None:
            return result
    return None


def outermost(items: list[Tag]) -> list[Tag]:
    """Drop matches nested inside another match, e.g. a span within a span."""
    matched = {id(item) for item in items}
    return [
        item
        for item in items
        if not any(id(parent) in matched for parent in item.parents)
    ]


def minute_text(item: Tag) -> str:
    """Text of a minute entry, preferring its nested ``.time`` element."""
    time_element = item.select_one(MINUTE_TEXT_SELECTOR)
    if time_element is not None:
        text = time_element.get_text().strip()
        if text:
            return text
    return item.get_text().strip()


def extract_row_departures(
    row: Tag,
    hour_strategies: Sequence[HourStrategy] = HOUR_STRATEGIES,
    minute_selectors: Sequence[str] = MINUTE_SELECTORS,
) -> list[Departure]:
    """Extract the departures of a single hour row, in document order.

    Rows without a parsable hour (headers, notes) yield nothing.
    """
    hour = first_result(hour_strategies, row)
    if hour is None:
        return []
    if hour > MAX_HOUR:
        logger.debug(f"Skipping row with out-of-range hour {hour}")
        return []

    _, items = select_first(row, minute_selectors)
    departures: list[Departure] = []
    for item in outermost(items):
        minute = parse_leading_int(minute_text(item))
        if minute is None:
            continue
        if minute > MAX_MINUTE:
            logger.debug(f"Skipping out-of-range minute {minute} at hour {hour}")
            continue
        departures.append(Departure(hour=hour, minute=minute))
    return departures


def sort_departures(departures: list[Departure]) -> list[Departure]:
    """Stable sort by (hour, minute)."""
    return sorted(departures, key=lambda d: (d.hour, d.minute))


def extract_departures(
    html_content: str,
    row_selectors: Sequence[str] = ROW_SELECTORS,
    hour_strategies: Sequence[HourStrategy] = HOUR_STRATEGIES,
    minute_selectors: Sequence[str] = MINUTE_SELECTORS,
) -> list[Departure]:
    """Parse a Yahoo Transit timetable page into sorted departures.

    Args:
        html_content: Raw HTML of the timetable page
        row_selectors: Row container selectors, tried in order
        hour_strategies: Hour lookups, tried in order per row
        minute_selectors: Minute entry selectors, tried in order per row

    Returns:
        Departures sorted by time; empty when nothing could be extracted
    """
    soup = BeautifulSoup(html_content, "html.parser")

    selector, rows = select_first(soup, row_selectors)
    if selector is None:
        logger.debug("No timetable rows found")
        return []
    logger.debug(f"Found {len(rows)} rows with selector {selector!r}")

    departures: list[Departure] = []
    for row in rows:
        departures.extend(
            extract_row_departures(row, hour_strategies, minute_selectors)
        )

    logger.debug(f"Extracted {len(departures)} departures")
    return sort_departures(departures)

"""Custom exceptions for the train timetable scraper."""


class TimetableError(Exception):
    """Base exception for timetable errors."""

    pass


class NetworkError(TimetableError):
    """Raised when there's a network-related error."""

    pass


class ScrapingError(TimetableError):
    """Raised when there's an error scraping data from the website."""

    pass


class StorageError(TimetableError):
    """Raised when the timetable store cannot be read or written."""

    pass


class ConfigurationError(TimetableError):
    """Raised when station configuration is missing or malformed."""

    pass


class RouteNotFoundError(TimetableError):
    """Raised when no route can be found between stations."""

    pass


class ValidationError(TimetableError):
    """Raised when input validation fails."""

    pass

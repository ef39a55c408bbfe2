"""Data models for station timetables."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class DayType(str, Enum):
    """Schedule variant served by Yahoo Transit."""

    WEEKDAY = "weekdays"
    HOLIDAY = "holidays"

    @property
    def kind(self) -> int:
        """Yahoo Transit ``kind`` query value (1: weekday, 4: Sunday/holiday)."""
        return 1 if self is DayType.WEEKDAY else 4


class Direction(BaseModel):
    """One travel direction served from a station."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str = Field(..., description="Human-readable direction, e.g. 'なんば 方面'")
    external_direction_id: int = Field(
        ..., alias="externalDirectionId", description="Yahoo Transit direction gid"
    )


class StationConfig(BaseModel):
    """Static scraping configuration for one station."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Station identifier used in the store")
    external_station_id: str = Field(
        ..., alias="externalStationId", description="Yahoo Transit station ID"
    )
    directions: tuple[Direction, ...] = Field(default_factory=tuple)


class Departure(BaseModel):
    """A recurring daily departure.

    Hours run past 23 for services after midnight, which Yahoo Transit
    lists as 24 or 25 o'clock.
    """

    hour: int = Field(..., ge=0, le=29)
    minute: int = Field(..., ge=0, le=59)

    @property
    def minutes_since_midnight(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class Timetable(BaseModel):
    """Departures of one direction, sorted by time."""

    direction: str
    departures: list[Departure] = Field(default_factory=list)


class StationTimetables(BaseModel):
    """A station's full schedule keyed by day type."""

    weekdays: list[Timetable] = Field(default_factory=list)
    holidays: list[Timetable] = Field(default_factory=list)

    def for_day_type(self, day_type: DayType) -> list[Timetable]:
        """Get the timetables for a day type."""
        return self.weekdays if day_type is DayType.WEEKDAY else self.holidays

    def is_complete(self) -> bool:
        """True when both day types have at least one timetable."""
        return bool(self.weekdays) and bool(self.holidays)


class Station(BaseModel):
    """A station record as persisted in the JSON store."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    line_name: str = Field("", alias="lineName")
    color: str = Field("#1976d2", description="Line color as CSS hex")
    timetables: StationTimetables = Field(default_factory=StationTimetables)

    def __str__(self) -> str:
        return f"{self.name} ({self.line_name})" if self.line_name else self.name


class TimetableStore(BaseModel):
    """Whole contents of the JSON store."""

    stations: list[Station] = Field(default_factory=list)

    def get_station(self, station_id: str) -> Station | None:
        for station in self.stations:
            if station.id == station_id:
                return station
        return None


class UpdateResult(BaseModel):
    """Outcome of one update cycle, returned to the trigger caller."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    updated_station_count: int = Field(0, alias="updatedStationCount")


class RouteStep(BaseModel):
    """One leg of a compared route."""

    line: str
    from_station: str = ""
    to_station: str = ""
    time: int = Field(0, description="Leg duration in minutes")
    kind: Literal["train", "walk"] = "train"

    def __str__(self) -> str:
        if self.kind == "walk":
            return f"徒歩 {self.time}分"
        return f"{self.line} {self.from_station} → {self.to_station} ({self.time}分)"


class RouteComparison(BaseModel):
    """Summary of the best route found between two stations."""

    from_station: str
    to_station: str
    total_time: int = Field(0, description="Total travel time in minutes")
    total_cost: int = Field(0, description="Fare in yen")
    transfer_count: int = 0
    distance: int = Field(0, description="Distance in metres")
    steps: list[RouteStep] = Field(default_factory=list)

    def summary(self) -> str:
        """Get route summary."""
        transfer_text = (
            "乗換なし" if self.transfer_count == 0 else f"乗換{self.transfer_count}回"
        )
        return f"{self.from_station} → {self.to_station}\n所要時間: {self.total_time}分\n料金: {self.total_cost}円\n{transfer_text}"

"""Station configuration and runtime settings."""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError
from .models import Direction, StationConfig
from .scraper import DEFAULT_BASE_URL

DATA_PATH_ENV = "TRAIN_TIMETABLE_DATA_PATH"
TIMEOUT_ENV = "TRAIN_TIMETABLE_TIMEOUT"

# Yahoo Transit station IDs and direction gids
DEFAULT_STATION_CONFIGS: tuple[StationConfig, ...] = (
    StationConfig(
        id="hankai_abikomichi",
        external_station_id="25809",
        directions=(
            Direction(label="天王寺駅前 方面", external_direction_id=5690),
            Direction(label="浜寺駅前 方面", external_direction_id=5691),
        ),
    ),
    StationConfig(
        id="nankai_suminoe",
        external_station_id="25989",
        directions=(
            Direction(label="なんば 方面", external_direction_id=3950),
            Direction(label="和歌山市 方面", external_direction_id=3951),
        ),
    ),
    StationConfig(
        id="nankai_abikomae",
        external_station_id="25808",
        directions=(
            Direction(label="なんば 方面", external_direction_id=4010),
            Direction(label="高野山 方面", external_direction_id=4011),
        ),
    ),
    StationConfig(
        id="jr_sugimotocho",
        external_station_id="25988",
        directions=(
            Direction(label="天王寺 方面", external_direction_id=1720),
            Direction(label="和歌山 方面", external_direction_id=1721),
        ),
    ),
)


class Settings(BaseModel):
    """Runtime settings shared by the CLI and the MCP server."""

    data_path: Path = Field(
        Path("data/stations.json"), description="Path of the JSON timetable store"
    )
    timeout: int = Field(30, gt=0, description="Request timeout in seconds")
    base_url: str = Field(DEFAULT_BASE_URL, description="Yahoo Transit origin")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings, letting environment variables override defaults."""
        values: dict[str, object] = {}
        if os.environ.get(DATA_PATH_ENV):
            values["data_path"] = Path(os.environ[DATA_PATH_ENV])
        if os.environ.get(TIMEOUT_ENV):
            values["timeout"] = os.environ[TIMEOUT_ENV]
        try:
            return cls.model_validate(values)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e


def load_station_configs(path: str | Path) -> tuple[StationConfig, ...]:
    """Load station configurations from a JSON file.

    The file holds a list of
    ``{"id", "externalStationId", "directions": [{"label", "externalDirectionId"}]}``
    objects.

    Raises:
        ConfigurationError: If the file is unreadable or malformed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ConfigurationError(f"{path}: expected a list of stations")
        return tuple(StationConfig.model_validate(item) for item in data)
    except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
        raise ConfigurationError(f"Failed to load station config {path}: {e}") from e


def configs_by_id(
    configs: tuple[StationConfig, ...] | list[StationConfig],
) -> dict[str, StationConfig]:
    """Index station configurations by station id."""
    return {config.id: config for config in configs}

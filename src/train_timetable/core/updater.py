"""Update cycle: scrape every configured station and rewrite the store."""

import logging
from collections.abc import Sequence

from .config import DEFAULT_STATION_CONFIGS, configs_by_id
from .models import Station, StationConfig, UpdateResult
from .scraper import YahooTimetableScraper
from .storage import JsonTimetableStore

logger = logging.getLogger(__name__)


class TimetableUpdater:
    """Runs the "update timetables" action.

    Stations are processed strictly one after another. A station's record is
    replaced only when both its weekday and holiday timetables were scraped;
    otherwise the previously stored data is kept for this cycle.
    """

    def __init__(
        self,
        store: JsonTimetableStore,
        scraper: YahooTimetableScraper | None = None,
        station_configs: Sequence[StationConfig] = DEFAULT_STATION_CONFIGS,
    ):
        self.store = store
        self.scraper = scraper or YahooTimetableScraper()
        self.station_configs = configs_by_id(list(station_configs))

    def update_station(self, station: Station) -> bool:
        """Scrape one station and replace its timetables if complete.

        Returns:
            True if the station record was replaced
        """
        config = self.station_configs.get(station.id)
        if config is None:
            logger.info(f"No configuration found for {station.id}, skipping.")
            return False

        timetables = self.scraper.build_station_timetables(config)
        if not timetables.is_complete():
            logger.warning(
                f"Incomplete timetables for {station.name} "
                f"(weekdays: {len(timetables.weekdays)}, "
                f"holidays: {len(timetables.holidays)}), keeping stored data"
            )
            return False

        station.timetables = timetables
        return True

    def update_timetables(self) -> UpdateResult:
        """Scrape all stations and persist the result.

        Raises:
            StorageError: If the store cannot be read or written
        """
        logger.info("Starting timetable data update...")
        data = self.store.load()

        updated_count = 0
        for station in data.stations:
            logger.info(f"Updating {station.name}...")
            try:
                if self.update_station(station):
                    updated_count += 1
                    logger.info(f"Successfully updated {station.name}")
            except Exception as e:
                logger.error(f"Error updating {station.name}: {e}")

        self.store.save(data)

        logger.info(f"Update completed. {updated_count} stations updated.")
        return UpdateResult(
            success=True,
            message=f"時刻表データを更新しました（{updated_count}駅）",
            updated_station_count=updated_count,
        )

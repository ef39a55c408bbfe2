"""JSON file storage for station timetables."""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from .exceptions import StorageError
from .models import TimetableStore

logger = logging.getLogger(__name__)


class JsonTimetableStore:
    """Reads and overwrites the ``stations.json`` store as a whole."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> TimetableStore:
        """Load all station records.

        Raises:
            StorageError: If the file is missing, unreadable or malformed
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            store = TimetableStore.model_validate(data)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            raise StorageError(f"Failed to load {self.path}: {e}") from e

        logger.info(f"Loaded {len(store.stations)} stations from {self.path}")
        return store

    def save(self, store: TimetableStore) -> None:
        """Overwrite the store atomically.

        The data is written to a temporary file next to the target and then
        renamed over it, so readers never see a half-written file.

        Raises:
            StorageError: If the file cannot be written
        """
        payload = json.dumps(
            store.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False
        )
        tmp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.write("\n")
            os.chmod(tmp_path, self._target_mode())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"Failed to write {self.path}: {e}") from e

        logger.info(f"Saved {len(store.stations)} stations to {self.path}")

    def _target_mode(self) -> int:
        """Permission bits for the new file: the existing store's, else 0666 & ~umask."""
        if self.path.exists():
            return stat.S_IMODE(os.stat(self.path).st_mode)
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

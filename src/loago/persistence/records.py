"""The record file.

A single JSON object mapping task names to ISO-8601 timestamps:

    {
      "dust": "2023-12-20T00:00:00+00:00",
      "vacuum": "2023-12-18T09:30:00+00:00"
    }

Read once when the CLI starts, written once when a command changed the
store. There is no locking: two processes racing on the same file is
not handled.
"""

import json
from pathlib import Path
from typing import TYPE_CHECKING

from loago.logging import Loggers
from loago.persistence._utils import atomic_write_json
from loago.tasks.store import Clock, TaskStore

if TYPE_CHECKING:
    from loago.config import LoagoSettings

logger = Loggers.persistence()


class RecordFileError(Exception):
    """Raised when the record file can't be used."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class RecordLoadError(RecordFileError):
    """The record file is unreadable or corrupt."""


class RecordSaveError(RecordFileError):
    """The record file couldn't be written."""


class RecordFile:
    """Loads and saves a :class:`TaskStore` from one JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def from_settings(cls, settings: "LoagoSettings") -> "RecordFile":
        """Record file at the location configured in settings."""
        return cls(settings.record_path)

    def load(self, clock: Clock | None = None) -> TaskStore:
        """Read the store from disk.

        A missing file is a first run and yields an empty store.

        Raises:
            RecordLoadError: If the file can't be read or parsed.
        """
        if not self.path.exists():
            logger.debug("record_file_missing", path=str(self.path))
            return TaskStore(clock=clock)

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise RecordLoadError(self.path, f"not valid JSON ({e})") from e
        except (OSError, UnicodeDecodeError) as e:
            raise RecordLoadError(self.path, f"can't be read ({e})") from e

        try:
            store = TaskStore.from_dict(data, clock=clock)
        except (TypeError, ValueError) as e:
            raise RecordLoadError(self.path, f"invalid task record ({e})") from e

        logger.debug("record_file_loaded", path=str(self.path), tasks=len(store))
        return store

    def save(self, store: TaskStore) -> None:
        """Write the store to disk atomically.

        Raises:
            RecordSaveError: If the file can't be written.
        """
        try:
            atomic_write_json(self.path, store.to_dict())
        except (OSError, UnicodeError) as e:
            raise RecordSaveError(self.path, f"can't be written ({e})") from e

        logger.debug("record_file_saved", path=str(self.path), tasks=len(store))

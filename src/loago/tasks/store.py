"""In-memory task store.

Maps task names to the last time each task was done. The store knows
nothing about files or presentation: load and save it with
:mod:`loago.persistence`, display it with :mod:`loago.tasks.view`.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from loago.logging import Loggers

logger = Loggers.store()

Clock = Callable[[], datetime]


def now() -> datetime:
    """Current time, timezone-aware UTC.

    When the package says "now", this is what it means.
    """
    return datetime.now(timezone.utc)


_FRACTION = re.compile(r"\.(\d+)")


def _microseconds(match: re.Match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO-8601 timestamp, reading naive values as UTC.

    Fractional seconds of any length are accepted. Digits past
    microseconds are dropped (nanosecond timestamps are common).
    """
    timestamp = datetime.fromisoformat(_FRACTION.sub(_microseconds, raw, count=1))
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def _check_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"Task name must be non-empty text, got {name!r}")
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        raise ValueError(f"Task name must be valid UTF-8, got {name!r}") from None
    return name


@dataclass(frozen=True)
class TaskRecord:
    """A task and the last time it was done."""

    name: str
    last_done: datetime


class TaskStore:
    """Mapping of task name to last-done timestamp.

    Example:
        >>> store = TaskStore()
        >>> when = store.update(["dust", "vacuum"])
        >>> sorted(r.name for r in store.get_all())
        ['dust', 'vacuum']
    """

    def __init__(
        self,
        tasks: dict[str, datetime] | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._clock = clock or now
        self._tasks: dict[str, datetime] = {}
        for name, last_done in (tasks or {}).items():
            self._tasks[_check_name(name)] = last_done

    def update(self, names: Iterable[str]) -> datetime | None:
        """Mark tasks as done right now.

        Missing tasks are created. Every task in one call gets the same
        timestamp.

        Args:
            names: Task names to touch.

        Returns:
            The timestamp that was applied, or None if ``names`` was empty.
        """
        names = [_check_name(name) for name in names]
        if not names:
            return None
        timestamp = self._clock()
        for name in names:
            self._tasks[name] = timestamp
        logger.debug("tasks_updated", tasks=sorted(set(names)), at=timestamp.isoformat())
        return timestamp

    def remove(self, names: Iterable[str]) -> list[str]:
        """Remove tasks. Names that aren't stored are ignored.

        Returns:
            Names that were actually removed.
        """
        removed = []
        for name in names:
            if self._tasks.pop(name, None) is not None:
                removed.append(name)
        if removed:
            logger.debug("tasks_removed", tasks=sorted(removed))
        return removed

    def keep(self, names: Iterable[str]) -> None:
        """Only keep the given tasks, dropping all other ones."""
        wanted = set(names)
        self._tasks = {
            name: last_done
            for name, last_done in self._tasks.items()
            if name in wanted
        }

    def get_all(self) -> list[TaskRecord]:
        """Every stored record, in no particular order."""
        return [TaskRecord(name, last_done) for name, last_done in self._tasks.items()]

    def get(self, names: Iterable[str]) -> list[TaskRecord]:
        """Records for the requested names. Unknown names are left out."""
        return [
            TaskRecord(name, self._tasks[name])
            for name in dict.fromkeys(names)
            if name in self._tasks
        ]

    def missing(self, names: Iterable[str]) -> set[str]:
        """Requested names that aren't stored."""
        return {name for name in names if name not in self._tasks}

    def to_dict(self) -> dict[str, str]:
        """Serializable form: task name to ISO-8601 timestamp."""
        return {name: last_done.isoformat() for name, last_done in self._tasks.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any], clock: Clock | None = None) -> "TaskStore":
        """Build a store from its serialized form.

        Raises:
            TypeError: If ``data`` isn't a mapping of strings.
            ValueError: If a name is empty or a timestamp can't be parsed.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object of tasks, got {type(data).__name__}")
        tasks = {}
        for name, raw in data.items():
            if not isinstance(raw, str):
                raise TypeError(f"Timestamp for {name!r} must be a string")
            tasks[name] = parse_timestamp(raw)
        return cls(tasks, clock=clock)

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskStore):
            return NotImplemented
        return self._tasks == other._tasks

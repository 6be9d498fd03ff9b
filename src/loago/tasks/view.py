"""Elapsed-time report over task records.

Turns records into a sorted, column-aligned report. How a duration is
shown is decided by an injected formatter, so the report logic never
changes when the display policy does.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from rich.cells import cell_len

from loago.tasks.store import TaskRecord, now as current_time

SEPARATOR = " — "


class Unit(Enum):
    """Display units, with their length."""

    DAYS = timedelta(days=1)
    HOURS = timedelta(hours=1)
    MINUTES = timedelta(minutes=1)


UNIT_SUFFIXES = {
    Unit.DAYS: "",
    Unit.HOURS: "h",
    Unit.MINUTES: "m",
}


@dataclass(frozen=True)
class Elapsed:
    """An elapsed duration as it is displayed."""

    value: int
    unit: Unit

    @property
    def text(self) -> str:
        if self.value == 0:
            return "0"
        return f"{self.value}{UNIT_SUFFIXES[self.unit]}"

    @property
    def shown(self) -> timedelta:
        """The truncated duration that the text stands for."""
        return self.value * self.unit.value


ElapsedFormatter = Callable[[timedelta], Elapsed]


def _whole(duration: timedelta, unit: Unit) -> int:
    return max(duration, timedelta(0)) // unit.value


def format_days(duration: timedelta) -> Elapsed:
    """Whole days, always."""
    return Elapsed(_whole(duration, Unit.DAYS), Unit.DAYS)


def format_auto(duration: timedelta) -> Elapsed:
    """Coarsest unit that isn't zero: days, then hours, then minutes.

    Anything under a minute shows as 0.
    """
    for unit in Unit:
        value = _whole(duration, unit)
        if value:
            return Elapsed(value, unit)
    return Elapsed(0, Unit.MINUTES)


FORMATTERS: dict[str, ElapsedFormatter] = {
    "auto": format_auto,
    "days": format_days,
}


def get_formatter(name: str) -> ElapsedFormatter:
    """Look up a formatter by its settings name.

    Raises:
        ValueError: If there is no formatter with that name.
    """
    try:
        return FORMATTERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown elapsed format '{name}'. "
            f"Available: {', '.join(sorted(FORMATTERS))}"
        ) from None


class OutputTasks:
    """Sorted (name, elapsed text) pairs, ready to print."""

    def __init__(self, rows: Iterable[tuple[str, str]] = ()) -> None:
        self._rows = list(rows)

    @property
    def rows(self) -> list[tuple[str, str]]:
        return list(self._rows)

    def to_string(self) -> str:
        """One ``name — value`` line per task, names padded to equal width.

        Width is measured in terminal cells, so wide characters line up.
        """
        if not self._rows:
            return ""
        width = max(cell_len(name) for name, _ in self._rows)
        return "".join(
            f"{name}{' ' * (width - cell_len(name))}{SEPARATOR}{text}\n"
            for name, text in self._rows
        )

    def __str__(self) -> str:
        return self.to_string()

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self):
        return iter(self._rows)


def output(
    records: Iterable[TaskRecord],
    formatter: ElapsedFormatter | None = None,
    now: datetime | None = None,
) -> OutputTasks:
    """Build the report for ``records``.

    Args:
        records: Records to show.
        formatter: Maps an elapsed duration to its display form.
            Defaults to :func:`format_auto`.
        now: The moment elapsed time is measured against. Defaults to
            the current time.

    Returns:
        OutputTasks sorted by the displayed elapsed time, then by name.
    """
    formatter = formatter or format_auto
    now = now or current_time()

    shown = [(record.name, formatter(now - record.last_done)) for record in records]
    shown.sort(key=lambda row: (row[1].shown, row[0]))
    return OutputTasks((name, elapsed.text) for name, elapsed in shown)

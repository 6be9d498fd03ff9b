"""loago: last time you did it was how long ago?

Tracks when named tasks were last done and reports the time elapsed
since. The core is a small in-memory API:

- TaskStore holds task name to last-done timestamp
- output() turns records into a sorted, aligned report
- RecordFile loads and saves a store as JSON

Example:
    >>> from loago import TaskStore, output
    >>> store = TaskStore()
    >>> when = store.update(["dust", "vacuum"])
    >>> print(output(store.get_all()), end="")
    dust   — 0
    vacuum — 0
"""

__version__ = "0.1.0"

from loago.config import LoagoSettings, get_settings, reload_settings, set_settings
from loago.persistence import RecordFile, RecordFileError, RecordLoadError, RecordSaveError
from loago.tasks import (
    Elapsed,
    OutputTasks,
    TaskRecord,
    TaskStore,
    format_auto,
    format_days,
    get_formatter,
    output,
)

__all__ = [
    # Tasks
    "TaskRecord",
    "TaskStore",
    "Elapsed",
    "OutputTasks",
    "format_auto",
    "format_days",
    "get_formatter",
    "output",
    # Persistence
    "RecordFile",
    "RecordFileError",
    "RecordLoadError",
    "RecordSaveError",
    # Settings
    "LoagoSettings",
    "get_settings",
    "set_settings",
    "reload_settings",
]

"""Task records and elapsed-time reports.

Example:
    >>> store = TaskStore()
    >>> when = store.update(["dust", "vacuum"])
    >>> print(output(store.get_all()), end="")
    dust   — 0
    vacuum — 0
"""

from loago.tasks.store import TaskRecord, TaskStore, now
from loago.tasks.view import (
    Elapsed,
    ElapsedFormatter,
    OutputTasks,
    Unit,
    format_auto,
    format_days,
    get_formatter,
    output,
)

__all__ = [
    "TaskRecord",
    "TaskStore",
    "now",
    "Elapsed",
    "ElapsedFormatter",
    "OutputTasks",
    "Unit",
    "format_auto",
    "format_days",
    "get_formatter",
    "output",
]

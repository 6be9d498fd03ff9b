"""Record file persistence for loago."""

from loago.persistence.records import (
    RecordFile,
    RecordFileError,
    RecordLoadError,
    RecordSaveError,
)

__all__ = [
    "RecordFile",
    "RecordFileError",
    "RecordLoadError",
    "RecordSaveError",
]

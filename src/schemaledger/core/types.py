"""Core data types for schemaledger."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class MigrationFile:
    """A discovered migration file.

    Attributes:
        version: Filename with the migration suffix removed; the ledger key.
        filename: Base name of the file, used for ordering and reporting.
        path: Full path to the file.
    """

    version: str
    filename: str
    path: Path


@dataclass(frozen=True)
class MigrationState:
    """Applied state of one migration file.

    Attributes:
        applied: Whether the ledger holds a row for this version.
        applied_at: Timestamp recorded with that row, when there is one.
    """

    version: str
    filename: str
    applied: bool = False
    applied_at: datetime | None = None


@dataclass
class RunSummary:
    """Counts produced by a migration run."""

    applied: int = 0
    skipped: int = 0

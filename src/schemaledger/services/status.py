"""Status reporting: which migration files have been applied."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from ..core.exceptions import StorageError
from ..core.types import MigrationFile, MigrationState
from ..sources import MigrationSource
from ..store.database import Database
from ..store.ledger import LEDGER_TABLE, MigrationLedger


class MigrationStatusReporter:
    """Reports applied/pending state of migration files without side effects.

    The reporter never executes migration content and never creates the
    ledger table; a database without one is a StorageError. Any failure
    aborts the whole report.

    Example:
        reporter = MigrationStatusReporter(db, "db/migrations")
        for filename, applied in reporter.status().items():
            print(filename, "applied" if applied else "pending")
    """

    def __init__(
        self,
        db: Database,
        directory: Path | str,
        table: str = LEDGER_TABLE,
    ):
        """Initialize reporter.

        Args:
            db: Connected database handle.
            directory: Directory holding the migration files.
            table: Name of the ledger table.
        """
        self.ledger = MigrationLedger(db, table)
        self.source = MigrationSource(directory)

    def status(self) -> dict[str, bool]:
        """Map each migration filename to whether it has been applied.

        Returns:
            Filename -> applied, in ascending filename order.
        """
        status: dict[str, bool] = {}
        for migration in self.source.list_versions():
            status[migration.filename] = self._lookup(
                migration, self.ledger.is_applied
            )

        logger.debug(
            f"Migration status: {sum(status.values())}/{len(status)} applied"
        )
        return status

    def describe(self) -> list[MigrationState]:
        """Get per-file state including when each file was applied."""
        states = []
        for migration in self.source.list_versions():
            entry = self._lookup(migration, self.ledger.get_entry)
            states.append(
                MigrationState(
                    version=migration.version,
                    filename=migration.filename,
                    applied=entry is not None,
                    applied_at=entry.applied_at if entry is not None else None,
                )
            )
        return states

    def pending(self) -> list[MigrationFile]:
        """Get migration files not yet recorded in the ledger."""
        return [
            migration
            for migration in self.source.list_versions()
            if not self._lookup(migration, self.ledger.is_applied)
        ]

    def _lookup(self, migration: MigrationFile, query):
        try:
            return query(migration.version)
        except StorageError as e:
            raise StorageError(e.reason, filename=migration.filename) from e


def get_migration_status(
    db: Database, directory: Path | str, table: str = LEDGER_TABLE
) -> dict[str, bool]:
    """Map each migration filename in ``directory`` to its applied state."""
    return MigrationStatusReporter(db, directory, table).status()


def describe_migrations(
    db: Database, directory: Path | str, table: str = LEDGER_TABLE
) -> list[MigrationState]:
    """List each migration in ``directory`` with its applied timestamp."""
    return MigrationStatusReporter(db, directory, table).describe()


def get_pending_migrations(
    db: Database, directory: Path | str, table: str = LEDGER_TABLE
) -> list[MigrationFile]:
    """List migrations in ``directory`` that have not been applied."""
    return MigrationStatusReporter(db, directory, table).pending()

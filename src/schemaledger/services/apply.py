"""Apply engine: executes pending migrations in order.

Each pending file is executed verbatim, outside any transaction of the
engine's own, and then recorded in the ledger in a separate, narrowly
scoped transaction. Runs are not transactional across migrations: a
failure stops the run and leaves earlier migrations applied and recorded.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import (
    ExecutionError,
    LedgerWriteError,
    StorageError,
)
from ..core.types import MigrationFile, RunSummary
from ..sources import MigrationSource
from ..store.database import Database
from ..store.ledger import LEDGER_TABLE, MigrationLedger


class MigrationApplier:
    """Brings a database up to the latest migration in a directory.

    Example:
        applier = MigrationApplier(db, "db/migrations")
        summary = applier.run()
        print(f"{summary.applied} applied, {summary.skipped} skipped")
    """

    def __init__(
        self,
        db: Database,
        directory: Path | str,
        table: str = LEDGER_TABLE,
    ):
        """Initialize applier.

        Args:
            db: Connected database handle.
            directory: Directory holding the migration files.
            table: Name of the ledger table.
        """
        self.db = db
        self.ledger = MigrationLedger(db, table)
        self.source = MigrationSource(directory)

    def run(self) -> RunSummary:
        """Apply every pending migration, in filename order.

        Returns:
            Counts of applied and skipped migrations.

        Raises:
            StorageError: Ledger table creation or lookup failed.
            DiscoveryError: Directory or file could not be read.
            ExecutionError: A migration's SQL failed; later files are not tried.
            LedgerWriteError: A migration ran but could not be recorded.
        """
        self.ledger.ensure_table()

        summary = RunSummary()
        for migration in self.source.list_versions():
            if self._is_applied(migration):
                summary.skipped += 1
                logger.debug(f"Skipping {migration.filename} (already applied)")
                continue

            self.apply(migration)
            summary.applied += 1

        if summary.applied > 0:
            logger.info(
                f"Applied {summary.applied} migration(s), "
                f"skipped {summary.skipped} already applied"
            )
        return summary

    def apply(self, migration: MigrationFile) -> None:
        """Execute one migration and record it in the ledger.

        Does not consult the ledger first; callers decide what is pending.
        """
        content = self.source.read_content(migration.filename)

        try:
            sql = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ExecutionError(migration.filename, f"content is not UTF-8: {e}") from e

        logger.info(f"Applying migration {migration.filename}")

        try:
            self.db.execute_script(sql)
        except SQLAlchemyError as e:
            logger.error(f"Migration {migration.filename} failed: {e}")
            raise ExecutionError(migration.filename, str(e)) from e

        try:
            self.ledger.record_applied(migration.version)
        except StorageError as e:
            logger.error(
                f"Migration {migration.filename} executed but was not recorded: {e.reason}"
            )
            raise LedgerWriteError(migration.filename, e.reason) from e

    def _is_applied(self, migration: MigrationFile) -> bool:
        try:
            return self.ledger.is_applied(migration.version)
        except StorageError as e:
            raise StorageError(e.reason, filename=migration.filename) from e


def run_migrations(
    db: Database, directory: Path | str, table: str = LEDGER_TABLE
) -> RunSummary:
    """Apply all pending migrations found in ``directory``.

    Convenience wrapper around :class:`MigrationApplier`.
    """
    return MigrationApplier(db, directory, table).run()

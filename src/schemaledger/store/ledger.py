"""Migration ledger: the persisted record of applied migration versions."""

from __future__ import annotations

from datetime import datetime

from loguru import logger
from sqlalchemy import (
    Column,
    Connection,
    DateTime,
    MetaData,
    Row,
    String,
    Table,
    func,
    insert,
    select,
)
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import StorageError
from .database import Database

LEDGER_TABLE = "schema_migrations"


def ledger_table(name: str = LEDGER_TABLE, metadata: MetaData | None = None) -> Table:
    """Build the SQLAlchemy table definition for the ledger."""
    return Table(
        name,
        metadata if metadata is not None else MetaData(),
        Column("version", String(255), primary_key=True),
        Column("applied_at", DateTime, server_default=func.current_timestamp()),
    )


class MigrationLedger:
    """Reads and writes the table of applied migration versions.

    The ledger holds no state of its own beyond the database handle; every
    call goes to the database.

    Example:
        ledger = MigrationLedger(db)
        ledger.ensure_table()
        if not ledger.is_applied("0001_init"):
            ...
            ledger.record_applied("0001_init")
    """

    def __init__(self, db: Database, table: str = LEDGER_TABLE):
        """Initialize ledger.

        Args:
            db: Connected database handle.
            table: Name of the ledger table.
        """
        self.db = db
        self.table = ledger_table(table)

    def ensure_table(self) -> None:
        """Create the ledger table if it does not exist.

        Raises:
            StorageError: If the database rejects the statement.
        """
        try:
            self.table.create(self.db.engine, checkfirst=True)
        except SQLAlchemyError as e:
            raise StorageError(
                f"failed to create migrations table {self.table.name}: {e}"
            ) from e

    def is_applied(self, version: str) -> bool:
        """Check whether a version has been recorded.

        Raises:
            StorageError: If the lookup fails.
        """
        stmt = (
            select(func.count())
            .select_from(self.table)
            .where(self.table.c.version == version)
        )
        try:
            count = self.db.scalar(stmt)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to look up version {version}: {e}") from e
        return bool(count)

    def get_entry(self, version: str) -> Row | None:
        """Get the ledger row for a version, or None if it is not recorded.

        Raises:
            StorageError: If the lookup fails.
        """
        stmt = select(self.table).where(self.table.c.version == version)
        try:
            return self.db.first(stmt)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to look up version {version}: {e}") from e

    def applied_at(self, version: str) -> datetime | None:
        """Get when a version was applied, or None if unknown.

        Raises:
            StorageError: If the lookup fails.
        """
        row = self.get_entry(version)
        return row.applied_at if row is not None else None

    def applied_versions(self) -> list[str]:
        """Get all recorded versions in ascending order.

        Raises:
            StorageError: If the query fails.
        """
        stmt = select(self.table.c.version).order_by(self.table.c.version)
        try:
            with self.db.engine.connect() as conn:
                return list(conn.execute(stmt).scalars())
        except SQLAlchemyError as e:
            raise StorageError(f"failed to list applied versions: {e}") from e

    def record_applied(self, version: str) -> None:
        """Record a version as applied in a transaction of its own.

        A version that is already recorded is left untouched.

        Raises:
            StorageError: If the insert or its commit fails; the
                transaction is rolled back.
        """
        try:
            with self.db.transaction() as conn:
                self._insert_ignoring_duplicate(conn, version)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to record version {version}: {e}") from e

        logger.debug(f"Recorded migration version {version}")

    def _insert_ignoring_duplicate(self, conn: Connection, version: str) -> None:
        dialect = conn.dialect.name

        if dialect == "postgresql":
            stmt = postgresql.insert(self.table).values(version=version)
            conn.execute(stmt.on_conflict_do_nothing(index_elements=["version"]))
        elif dialect == "sqlite":
            stmt = sqlite.insert(self.table).values(version=version)
            conn.execute(stmt.on_conflict_do_nothing(index_elements=["version"]))
        else:
            exists = conn.execute(
                select(self.table.c.version).where(self.table.c.version == version)
            ).first()
            if exists is None:
                conn.execute(insert(self.table).values(version=version))

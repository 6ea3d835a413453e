"""schemaledger: versioned, file-based SQL schema migrations.

Example:
    from schemaledger import Database, run_migrations, get_migration_status

    with Database("sqlite:///app.db") as db:
        run_migrations(db, "db/migrations")
        print(get_migration_status(db, "db/migrations"))
"""

from .core.exceptions import (
    ConfigError,
    DatabaseError,
    DiscoveryError,
    ExecutionError,
    LedgerWriteError,
    MigrationError,
    SchemaLedgerError,
    StorageError,
)
from .core.types import MigrationFile, MigrationState, RunSummary
from .services import (
    describe_migrations,
    get_migration_status,
    get_pending_migrations,
    run_migrations,
)
from .store import Database, MigrationLedger

__version__ = "1.0.0"

__all__ = [
    "Database",
    "MigrationLedger",
    "run_migrations",
    "get_migration_status",
    "describe_migrations",
    "get_pending_migrations",
    "MigrationFile",
    "MigrationState",
    "RunSummary",
    "SchemaLedgerError",
    "ConfigError",
    "DatabaseError",
    "MigrationError",
    "StorageError",
    "DiscoveryError",
    "ExecutionError",
    "LedgerWriteError",
]

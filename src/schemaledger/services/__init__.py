"""Migration services: applying and status reporting.

Example:
    from schemaledger.services import run_migrations, get_migration_status

    summary = run_migrations(db, "db/migrations")
    status = get_migration_status(db, "db/migrations")
"""

from .apply import MigrationApplier, run_migrations
from .status import (
    MigrationStatusReporter,
    describe_migrations,
    get_migration_status,
    get_pending_migrations,
)

__all__ = [
    "MigrationApplier",
    "MigrationStatusReporter",
    "run_migrations",
    "get_migration_status",
    "describe_migrations",
    "get_pending_migrations",
]

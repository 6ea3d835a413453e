"""Application wiring: open the configured database and migrate on startup.

Example:
    from schemaledger.app import migrate_on_startup
    from schemaledger.core.config import Config

    summary = migrate_on_startup(Config.from_env())
"""

from __future__ import annotations

from loguru import logger

from ..core.config import Config
from ..core.types import RunSummary
from ..services.apply import run_migrations
from ..store.database import Database


def open_database(config: Config) -> Database:
    """Create and connect the database described by ``config``.

    Raises:
        DatabaseError: If the database cannot be reached.
    """
    return Database(config.database.sqlalchemy_url()).connect()


def migrate_on_startup(config: Config, db: Database | None = None) -> RunSummary | None:
    """Run pending migrations when ``config.auto_migrate`` is enabled.

    Args:
        config: Application configuration.
        db: Connected database to use; when omitted one is opened from
            the configuration and closed afterwards.

    Returns:
        The run summary, or None when auto-migration is disabled.
    """
    if not config.auto_migrate:
        logger.debug("Automatic migrations are disabled")
        return None

    owned = db is None
    if db is None:
        db = open_database(config)

    try:
        logger.info("Running database migrations...")
        summary = run_migrations(db, config.migrations_dir, config.ledger_table)
        logger.info("Database migrations completed")
        return summary
    finally:
        if owned:
            db.close()

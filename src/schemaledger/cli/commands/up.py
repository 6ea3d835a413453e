"""Up command for the schemaledger CLI."""

from ...app import open_database
from ...core.config import Config
from ...services import run_migrations


def handle_up(args, config: Config) -> None:
    """Handle up command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    with open_database(config) as db:
        summary = run_migrations(db, config.migrations_dir, config.ledger_table)

    if summary.applied:
        print(
            f"Applied {summary.applied} migration(s), "
            f"skipped {summary.skipped} already applied"
        )
    else:
        print("Database is up to date")

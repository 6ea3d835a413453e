"""Status commands for the schemaledger CLI."""

from ...app import open_database
from ...core.config import Config
from ...core.types import MigrationState
from ...services import describe_migrations, get_pending_migrations


def handle_status(args, config: Config) -> None:
    """Handle status command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    with open_database(config) as db:
        states = describe_migrations(db, config.migrations_dir, config.ledger_table)
    _print_status(states)


def handle_pending(args, config: Config) -> None:
    """Handle pending command."""
    with open_database(config) as db:
        pending = get_pending_migrations(db, config.migrations_dir, config.ledger_table)

    if not pending:
        print("No pending migrations.")
        return
    for migration in pending:
        print(migration.filename)


def _print_status(states: list[MigrationState]) -> None:
    """Print one line per migration file.

    Args:
        states: Migration states to display.
    """
    print("Migration Status:")
    print("=" * 50)

    if not states:
        print("No migration files found.")
        return

    for state in states:
        if state.applied and state.applied_at is not None:
            print(f"  [x] {state.filename} (applied at {state.applied_at:%Y-%m-%d %H:%M:%S})")
        elif state.applied:
            print(f"  [x] {state.filename} (applied)")
        else:
            print(f"  [ ] {state.filename} (not applied)")

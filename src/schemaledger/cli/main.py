"""CLI entry point for schemaledger."""

import argparse
import sys
from typing import NoReturn

from .. import __version__
from ..core.config import Config
from ..core.exceptions import SchemaLedgerError
from ..core.logging import configure_logging
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="schemaledger",
        description="Apply versioned SQL migration files and report their status",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-c", "--config", help="Path to a TOML config file (default: $SCHEMALEDGER_CONFIG)"
    )
    parser.add_argument(
        "--database-url", help="SQLAlchemy database URL (overrides configuration)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    up_parser = subparsers.add_parser("up", help="Apply pending migrations")
    commands.add_directory_argument(up_parser)

    status_parser = subparsers.add_parser("status", help="Show migration status")
    commands.add_directory_argument(status_parser)

    pending_parser = subparsers.add_parser("pending", help="List pending migrations")
    commands.add_directory_argument(pending_parser)

    return parser


def load_config(args) -> Config:
    """Build configuration from file/env, then apply command-line overrides."""
    config = Config.from_env_or_file(args.config)
    if args.database_url:
        config.database.url = args.database_url
    if getattr(args, "dir", None):
        config.migrations_dir = args.dir
    return config


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
        configure_logging("DEBUG" if args.verbose else config.log_level)

        if args.command == "up":
            commands.handle_up(args, config)
        elif args.command == "status":
            commands.handle_status(args, config)
        elif args.command == "pending":
            commands.handle_pending(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except SchemaLedgerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

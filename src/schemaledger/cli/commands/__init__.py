"""Command implementations for the schemaledger CLI."""

from pathlib import Path

from .status import handle_pending, handle_status
from .up import handle_up


def add_directory_argument(parser) -> None:
    """Add the shared migrations directory option to a subcommand parser."""
    parser.add_argument(
        "-d",
        "--dir",
        type=Path,
        help="Migrations directory (default: configured migrations_dir)",
    )


__all__ = [
    "add_directory_argument",
    "handle_up",
    "handle_status",
    "handle_pending",
]

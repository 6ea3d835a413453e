"""Startup wiring for applications that embed schemaledger."""

from .factory import migrate_on_startup, open_database

__all__ = [
    "migrate_on_startup",
    "open_database",
]

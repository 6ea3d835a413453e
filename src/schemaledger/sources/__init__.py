"""Migration file discovery."""

from .filesystem import MIGRATION_SUFFIX, MigrationSource

__all__ = [
    "MigrationSource",
    "MIGRATION_SUFFIX",
]

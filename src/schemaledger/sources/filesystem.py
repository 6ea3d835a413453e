"""Filesystem migration source.

Discovers migration files in a single directory and reads their content.
Files are ordered by plain string comparison of their names, so naming
(zero-padded numbers, timestamps) is the only ordering mechanism.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from ..core.exceptions import DiscoveryError
from ..core.types import MigrationFile

MIGRATION_SUFFIX = ".sql"


class MigrationSource:
    """Lists and reads migration files from a directory.

    Example:
        source = MigrationSource("db/migrations")
        for migration in source.list_versions():
            sql = source.read_content(migration.filename)
    """

    def __init__(self, directory: Path | str, suffix: str = MIGRATION_SUFFIX) -> None:
        """Initialize migration source.

        Args:
            directory: Directory holding the migration files.
            suffix: Filename suffix that marks a migration file.
        """
        self.directory = Path(directory)
        self.suffix = suffix

    def version_of(self, filename: str) -> str:
        """Derive a version from a filename by removing the migration suffix."""
        if filename.endswith(self.suffix):
            return filename[: -len(self.suffix)]
        return filename

    def list_versions(self) -> list[MigrationFile]:
        """List migration files sorted ascending by filename.

        Returns:
            One MigrationFile per matching file; empty if there are none.

        Raises:
            DiscoveryError: If the directory is missing or unreadable.
        """
        if not self.directory.is_dir():
            reason = (
                "not a directory" if self.directory.exists() else "directory does not exist"
            )
            raise DiscoveryError(str(self.directory), reason)

        try:
            entries = list(self.directory.iterdir())
        except OSError as e:
            raise DiscoveryError(str(self.directory), str(e)) from e

        filenames = sorted(
            entry.name
            for entry in entries
            if entry.name.endswith(self.suffix) and entry.is_file()
        )

        logger.debug(f"Found {len(filenames)} migration file(s) in {self.directory}")

        return [
            MigrationFile(
                version=self.version_of(name),
                filename=name,
                path=self.directory / name,
            )
            for name in filenames
        ]

    def read_content(self, filename: str) -> bytes:
        """Read the full content of one migration file.

        Raises:
            DiscoveryError: If the file is missing or unreadable.
        """
        path = self.directory / filename
        try:
            return path.read_bytes()
        except OSError as e:
            raise DiscoveryError(str(path), e.strerror or str(e), filename=filename) from e

"""Custom exceptions for schemaledger."""


class SchemaLedgerError(Exception):
    """Base exception for all schemaledger errors."""

    pass


class ConfigError(SchemaLedgerError):
    """Configuration could not be loaded or is invalid."""

    pass


class DatabaseError(SchemaLedgerError):
    """Connecting to or disposing of the database failed."""

    pass


class MigrationError(SchemaLedgerError):
    """Base exception for migration ledger, discovery and apply failures.

    Attributes:
        reason: Underlying failure description.
        filename: Migration file the failure is attributed to, if any.
    """

    def __init__(self, message: str, reason: str, filename: str | None = None):
        self.reason = reason
        self.filename = filename
        super().__init__(message)


class StorageError(MigrationError):
    """Ledger table creation or query failed."""

    def __init__(self, reason: str, filename: str | None = None):
        if filename:
            message = f"Ledger query failed for {filename}: {reason}"
        else:
            message = f"Ledger operation failed: {reason}"
        super().__init__(message, reason, filename)


class DiscoveryError(MigrationError):
    """Migrations directory or migration file could not be read."""

    def __init__(self, path: str, reason: str, filename: str | None = None):
        self.path = path
        super().__init__(f"Failed to read {path}: {reason}", reason, filename)


class ExecutionError(MigrationError):
    """Migration SQL failed to execute."""

    def __init__(self, filename: str, reason: str):
        super().__init__(
            f"Failed to execute migration {filename}: {reason}", reason, filename
        )


class LedgerWriteError(MigrationError):
    """Migration executed but its ledger record could not be committed.

    The schema change is in place while the ledger does not know about it.
    """

    def __init__(self, filename: str, reason: str):
        super().__init__(
            f"Migration {filename} executed but recording it failed: {reason}",
            reason,
            filename,
        )

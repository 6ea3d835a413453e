"""Core configuration, types and exceptions for schemaledger."""

from .config import Config, DatabaseConfig
from .exceptions import (
    ConfigError,
    DatabaseError,
    DiscoveryError,
    ExecutionError,
    LedgerWriteError,
    MigrationError,
    SchemaLedgerError,
    StorageError,
)
from .types import MigrationFile, MigrationState, RunSummary

__all__ = [
    "Config",
    "DatabaseConfig",
    "SchemaLedgerError",
    "ConfigError",
    "DatabaseError",
    "MigrationError",
    "StorageError",
    "DiscoveryError",
    "ExecutionError",
    "LedgerWriteError",
    "MigrationFile",
    "MigrationState",
    "RunSummary",
]

"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest
from loguru import logger
from sqlalchemy import inspect

from schemaledger.store.database import Database
from schemaledger.store.ledger import MigrationLedger


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    """Provide a SQLite URL for a temporary database file."""
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def db(db_url: str) -> Database:
    """Provide a connected database instance."""
    database = Database(db_url)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def ledger(db: Database) -> MigrationLedger:
    """Provide a MigrationLedger with its table created."""
    ledger = MigrationLedger(db)
    ledger.ensure_table()
    return ledger


@pytest.fixture
def migrations_dir(tmp_path: Path) -> Path:
    """Provide an empty migrations directory."""
    path = tmp_path / "migrations"
    path.mkdir()
    return path


@pytest.fixture
def write_migration(migrations_dir: Path) -> Callable[[str, str], Path]:
    """Provide a helper that writes a migration file into migrations_dir."""

    def _write(filename: str, sql: str) -> Path:
        path = migrations_dir / filename
        path.write_text(sql, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def log_messages() -> list[str]:
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def table_names(db: Database) -> Callable[[], set[str]]:
    """Provide a helper returning the names of all tables in the database."""

    def _names() -> set[str]:
        return set(inspect(db.engine).get_table_names())

    return _names

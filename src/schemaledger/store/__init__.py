"""Persistence layer for schemaledger.

- Database: SQLAlchemy engine handle with script execution and transactions
- MigrationLedger: the table of applied migration versions

Example:
    from schemaledger.store import Database, MigrationLedger

    db = Database("postgresql+psycopg2://app@localhost/app").connect()
    ledger = MigrationLedger(db)
    ledger.ensure_table()
"""

from .database import Database
from .ledger import LEDGER_TABLE, MigrationLedger, ledger_table

__all__ = [
    "Database",
    "MigrationLedger",
    "LEDGER_TABLE",
    "ledger_table",
]

"""SQLAlchemy database handle for schemaledger."""

import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import Connection, Engine, create_engine, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.sql.expression import Executable

from ..core.exceptions import DatabaseError


class Database:
    """Database handle wrapping a SQLAlchemy engine.

    Either build one from a URL and call :meth:`connect`, or wrap an
    engine the caller already owns with :meth:`from_engine`.
    """

    def __init__(self, url: str, **engine_options: Any):
        """Initialize database with a URL.

        Args:
            url: SQLAlchemy database URL.
            **engine_options: Extra keyword arguments for ``create_engine``.
        """
        self.url = url
        self._engine_options = engine_options
        self._engine: Engine | None = None
        self._owns_engine = True

    @classmethod
    def from_engine(cls, engine: Engine) -> "Database":
        """Wrap an existing engine. :meth:`close` will not dispose of it."""
        db = cls(engine.url.render_as_string(hide_password=False))
        db._engine = engine
        db._owns_engine = False
        return db

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise DatabaseError("Database not connected")
        return self._engine

    @property
    def dialect(self) -> str:
        """Dialect name, e.g. ``postgresql`` or ``sqlite``."""
        return self.engine.dialect.name

    def connect(self) -> "Database":
        """Create the engine and verify the database answers."""
        try:
            self._engine = create_engine(self.url, **self._engine_options)
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            self._engine = None
            raise DatabaseError(f"Failed to connect to database: {e}") from e
        return self

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        if self._engine is None:
            return
        try:
            if self._owns_engine:
                self._engine.dispose()
        except Exception as e:
            raise DatabaseError(f"Failed to close database: {e}") from e
        finally:
            self._engine = None

    def __enter__(self) -> "Database":
        if self._engine is None:
            self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Context manager for a single database transaction.

        Commits when the block exits normally; rolls back and re-raises
        otherwise.

        Yields:
            A connection bound to the open transaction.
        """
        with self.engine.begin() as conn:
            yield conn

    def scalar(self, statement: Executable) -> Any:
        """Execute a statement and return the first column of the first row."""
        with self.engine.connect() as conn:
            return conn.execute(statement).scalar()

    def first(self, statement: Executable) -> Any:
        """Execute a statement and return its first row, or None."""
        with self.engine.connect() as conn:
            return conn.execute(statement).first()

    def execute_script(self, sql: str) -> None:
        """Execute SQL text containing one or more statements, verbatim.

        Runs on an AUTOCOMMIT connection so that any BEGIN/COMMIT inside
        the script are the only transaction boundaries.

        Args:
            sql: SQL script with one or more statements.

        Raises:
            SQLAlchemyError: If the driver rejects the script.
        """
        with self.engine.connect() as conn:
            conn = conn.execution_options(isolation_level="AUTOCOMMIT")
            try:
                if conn.dialect.name == "sqlite":
                    # exec_driver_sql only accepts a single statement on sqlite3
                    conn.connection.driver_connection.executescript(sql)
                else:
                    conn.exec_driver_sql(sql, execution_options={"no_parameters": True})
            except (sqlite3.Error, sqlite3.Warning, ValueError) as e:
                # drivers reject NUL bytes with ValueError before reaching the server
                raise DBAPIError(sql, None, e) from e


"""Configuration management for schemaledger."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sqlalchemy.engine import URL

from .exceptions import ConfigError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _parse_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


@dataclass
class DatabaseConfig:
    """Database connection configuration.

    When ``url`` is set it is used as-is; otherwise a URL is assembled
    from the individual connection fields.
    """

    url: str | None = None
    driver: str = "postgresql+psycopg2"
    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = ""
    name: str = "postgres"
    sslmode: str = "disable"

    def sqlalchemy_url(self) -> str:
        """Render the SQLAlchemy URL for this configuration."""
        if self.url:
            return self.url

        url = URL.create(
            self.driver,
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.name,
            query={"sslmode": self.sslmode} if self.sslmode else {},
        )
        return url.render_as_string(hide_password=False)


@dataclass
class Config:
    """Main application configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    migrations_dir: Path = Path("db/migrations")
    auto_migrate: bool = True
    ledger_table: str = "schema_migrations"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML file.

        Raises:
            ConfigError: If the file cannot be read or parsed.
        """
        path = Path(path)
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

        config = cls()
        config._apply_mapping(data)
        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | str | None = None) -> "Config":
        """Load from ``path``, else ``SCHEMALEDGER_CONFIG``, else env only."""
        if path is None:
            path = os.environ.get("SCHEMALEDGER_CONFIG")
        if path:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_mapping(self, data: dict[str, Any]) -> None:
        if "migrations_dir" in data:
            self.migrations_dir = Path(data["migrations_dir"])
        if "auto_migrate" in data:
            self.auto_migrate = _parse_bool("auto_migrate", data["auto_migrate"])
        if "ledger_table" in data:
            self.ledger_table = str(data["ledger_table"])
        if "log_level" in data:
            self.log_level = str(data["log_level"])

        db = data.get("database", {})
        if not isinstance(db, dict):
            raise ConfigError("[database] must be a table")
        for key in ("url", "driver", "host", "user", "password", "name", "sslmode"):
            if key in db:
                setattr(self.database, key, str(db[key]))
        if "port" in db:
            self.database.port = _parse_int("database.port", db["port"])

    def _apply_env(self) -> None:
        env = os.environ
        db = self.database

        if (url := env.get("DATABASE_URL")) is not None:
            db.url = url
        if (host := env.get("DB_HOST")) is not None:
            db.host = host
        if port := env.get("DB_PORT"):
            db.port = _parse_int("DB_PORT", port)
        if (user := env.get("DB_USER")) is not None:
            db.user = user
        if (password := env.get("DB_PASSWORD")) is not None:
            db.password = password
        if (name := env.get("DB_NAME")) is not None:
            db.name = name
        if (sslmode := env.get("DB_SSLMODE")) is not None:
            db.sslmode = sslmode

        if auto := env.get("DB_AUTO_MIGRATE"):
            self.auto_migrate = _parse_bool("DB_AUTO_MIGRATE", auto)
        if migrations_dir := env.get("DB_MIGRATIONS_DIR"):
            self.migrations_dir = Path(migrations_dir)
        if table := env.get("DB_LEDGER_TABLE"):
            self.ledger_table = table
        if level := env.get("LOG_LEVEL"):
            self.log_level = level

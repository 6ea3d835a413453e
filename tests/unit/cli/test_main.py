"""Tests for the schemaledger CLI."""

from pathlib import Path

import pytest
from loguru import logger

from schemaledger.cli.main import create_parser, main
from schemaledger.store.database import Database


@pytest.fixture(autouse=True)
def restore_logger(monkeypatch):
    for name in ("DATABASE_URL", "SCHEMALEDGER_CONFIG", "DB_MIGRATIONS_DIR"):
        monkeypatch.delenv(name, raising=False)
    yield
    logger.remove()


def run_cli(*argv: str) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    return exc_info.value.code


class TestParser:
    """Tests for argument parsing."""

    def test_subcommands(self):
        """up, status and pending accept a --dir option."""
        parser = create_parser()

        for command in ("up", "status", "pending"):
            args = parser.parse_args([command, "--dir", "db/migrations"])
            assert args.command == command
            assert args.dir == Path("db/migrations")

    def test_no_down_command(self):
        """Rollback is not offered."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["down"])


class TestCommands:
    """End-to-end tests for CLI commands against SQLite."""

    def test_up_applies_and_reports(self, db_url, migrations_dir, write_migration, capsys):
        """up applies pending migrations and prints the counts."""
        write_migration("0001_a.sql", "CREATE TABLE a (x INTEGER);")
        write_migration("0002_b.sql", "CREATE TABLE b (x INTEGER);")

        code = run_cli("--database-url", db_url, "up", "--dir", str(migrations_dir))

        assert code == 0
        assert "Applied 2 migration(s), skipped 0 already applied" in capsys.readouterr().out

    def test_up_when_current(self, db_url, migrations_dir, write_migration, capsys):
        """A second up reports the database is current."""
        write_migration("0001_a.sql", "CREATE TABLE a (x INTEGER);")
        run_cli("--database-url", db_url, "up", "--dir", str(migrations_dir))
        capsys.readouterr()

        code = run_cli("--database-url", db_url, "up", "--dir", str(migrations_dir))

        assert code == 0
        assert "Database is up to date" in capsys.readouterr().out

    def test_status_lists_files(self, db_url, migrations_dir, write_migration, capsys):
        """status marks applied and pending files."""
        write_migration("0001_a.sql", "CREATE TABLE a (x INTEGER);")
        run_cli("--database-url", db_url, "up", "--dir", str(migrations_dir))
        write_migration("0002_b.sql", "CREATE TABLE b (x INTEGER);")
        capsys.readouterr()

        code = run_cli("--database-url", db_url, "status", "--dir", str(migrations_dir))

        out = capsys.readouterr().out
        assert code == 0
        assert "Migration Status:" in out
        assert "[x] 0001_a.sql (applied at " in out
        assert "[ ] 0002_b.sql (not applied)" in out

    def test_status_row_without_timestamp(self, db_url, migrations_dir, write_migration, capsys):
        """A recorded version with no timestamp is still shown as applied."""
        write_migration("0001_a.sql", "CREATE TABLE a (x INTEGER);")
        run_cli("--database-url", db_url, "up", "--dir", str(migrations_dir))
        with Database(db_url) as db:
            db.execute_script("UPDATE schema_migrations SET applied_at = NULL;")
        capsys.readouterr()

        code = run_cli("--database-url", db_url, "status", "--dir", str(migrations_dir))

        assert code == 0
        assert "[x] 0001_a.sql (applied)" in capsys.readouterr().out

    def test_pending_lists_filenames(self, db_url, migrations_dir, write_migration, capsys):
        """pending prints unapplied filenames."""
        write_migration("0001_a.sql", "CREATE TABLE a (x INTEGER);")
        run_cli("--database-url", db_url, "up", "--dir", str(migrations_dir))
        write_migration("0002_b.sql", "CREATE TABLE b (x INTEGER);")
        capsys.readouterr()

        code = run_cli("--database-url", db_url, "pending", "--dir", str(migrations_dir))

        assert code == 0
        assert capsys.readouterr().out.strip() == "0002_b.sql"

    def test_execution_error_exits_nonzero(
        self, db_url, migrations_dir, write_migration, capsys
    ):
        """A failing migration exits 1 with the file named on stderr."""
        write_migration("0001_broken.sql", "CREATE TABLE broken (;")

        code = run_cli("--database-url", db_url, "up", "--dir", str(migrations_dir))

        assert code == 1
        assert "Error: Failed to execute migration 0001_broken.sql" in capsys.readouterr().err

    def test_nul_byte_exits_nonzero(self, db_url, migrations_dir: Path, capsys):
        """A script the driver rejects is reported, not a traceback."""
        (migrations_dir / "0001_nul.sql").write_bytes(b"CREATE TABLE a (x INTEGER);\x00")

        code = run_cli("--database-url", db_url, "up", "--dir", str(migrations_dir))

        assert code == 1
        assert "Error: Failed to execute migration 0001_nul.sql" in capsys.readouterr().err

    def test_missing_directory_exits_nonzero(self, db_url, tmp_path: Path, capsys):
        """A missing migrations directory exits 1."""
        code = run_cli("--database-url", db_url, "up", "--dir", str(tmp_path / "nope"))

        assert code == 1
        assert "directory does not exist" in capsys.readouterr().err

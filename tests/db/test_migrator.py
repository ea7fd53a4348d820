import pytest

from db.manager import DatabaseManager, StorageError
from db.migrator import Migrator


@pytest.fixture
def migrator(test_config):
    return Migrator(DatabaseManager(test_config))


class TestMigrator:
    """Tests for Migrator."""

    def test_fresh_database_has_everything_pending(self, migrator):
        """All shipped migrations are pending on an empty database."""
        assert migrator.applied() == set()
        assert migrator.pending() == migrator.available()
        assert migrator.available()[0] == "001_initial_schema.sql"

    def test_apply_pending_is_idempotent(self, migrator):
        applied = migrator.apply_pending()

        assert applied == migrator.available()
        assert migrator.pending() == []
        assert migrator.apply_pending() == []

    def test_tables_exist_after_apply(self, migrator):
        migrator.apply_pending()

        with migrator.db_manager.connect() as conn:
            tables = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            }
        assert {"accounts", "debts", "goals", "transactions", "chat_history"} <= tables

    def test_failed_migration_is_not_recorded(self, migrator, tmp_path, monkeypatch):
        migrations_dir = tmp_path / "migrations"
        migrations_dir.mkdir()
        (migrations_dir / "001_ok.sql").write_text("CREATE TABLE ok (id INTEGER);")
        (migrations_dir / "002_broken.sql").write_text("CREATE TABLE nope (;")
        monkeypatch.setattr(migrator.db_manager, "get_migrations_dir", lambda: migrations_dir)

        with pytest.raises(StorageError):
            migrator.apply_pending()

        assert migrator.applied() == {"001_ok.sql"}
        assert migrator.pending() == ["002_broken.sql"]

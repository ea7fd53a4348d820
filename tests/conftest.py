"""Shared pytest fixtures for all tests."""

import sqlite3
import pytest

from config import Config, get_migrations_dir
from db.manager import DatabaseManager
from services.base import Services
from tests.helpers import run_migrations


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary database.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "spendwise",
        db_data_dir=tmp_path / "spendwise" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "spendwise" / "logs",
        archive_enabled=False,
        archive_dir=tmp_path / "spendwise" / "archives",
        llm_enabled=False,
        llm_provider="openai",
        llm_openai_api_key="",
        llm_openai_model="gpt-4o-mini",
        chat_history_limit=20,
        snapshot_workers=4,
    )


@pytest.fixture
def db_manager_with_schema(test_config):
    """Create a DatabaseManager with schema already set up.

    The database is a file under tmp_path rather than :memory:, because the
    snapshot reads run on worker threads and each opens its own connection.

    Args:
        test_config: Test configuration fixture.

    Returns:
        DatabaseManager: Database manager with schema ready.
    """
    test_config.db_data_dir.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(test_config.db_path)
    try:
        run_migrations(conn, get_migrations_dir())
    finally:
        conn.close()

    return DatabaseManager(test_config)


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Create a Services container with test database.

    Args:
        test_config: Test configuration fixture.
        db_manager_with_schema: Database manager with schema set up.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, db_manager=db_manager_with_schema)

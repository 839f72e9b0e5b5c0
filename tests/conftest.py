"""Pytest configuration and shared fixtures.

This module provides fixtures for testing readtrack, including temporary
databases, a streak manager and a CLI runner.
"""

import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Generator

import pytest

from readtrack.config import Config, reset_config
from readtrack.db.sqlite import Database, reset_db
from readtrack.streaks.manager import StreakManager


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture(scope="function")
def db(temp_db_path: Path) -> Generator[Database, None, None]:
    """Create a test database instance."""
    # Reset any global state
    reset_db()
    reset_config()

    os.environ["READTRACK_DB_PATH"] = str(temp_db_path)

    database = Database(str(temp_db_path))
    database.create_tables()
    yield database

    # Cleanup
    database.engine.dispose()
    reset_db()
    reset_config()
    if "READTRACK_DB_PATH" in os.environ:
        del os.environ["READTRACK_DB_PATH"]


@pytest.fixture
def memory_db() -> Database:
    """Create an in-memory database."""
    database = Database(":memory:")
    database.create_tables()
    return database


# ============================================================================
# Streak Fixtures
# ============================================================================


@pytest.fixture
def config(temp_db_path: Path) -> Config:
    """Configuration using the system local day."""
    return Config(
        db_path=temp_db_path,
        user_id="reader-1",
        timezone=None,
        log_level="WARNING",
    )


@pytest.fixture
def manager(memory_db: Database, config: Config) -> StreakManager:
    """Create a StreakManager backed by an in-memory database."""
    return StreakManager(memory_db, config)


@pytest.fixture
def today() -> date:
    """Fixed reference day for engine tests."""
    return date(2025, 3, 15)


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()

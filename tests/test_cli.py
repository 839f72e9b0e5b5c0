"""Tests for the CLI interface."""

import os
import tempfile
from datetime import date, timedelta
from pathlib import Path

import pytest
from typer.testing import CliRunner

from readtrack.cli import app
from readtrack.config import reset_config
from readtrack.db.sqlite import get_db, reset_db
from readtrack.streaks.models import CheckIn


@pytest.fixture(autouse=True)
def setup_test_db():
    """Set up a test database for each test."""
    reset_db()
    reset_config()

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    os.environ["READTRACK_DB_PATH"] = db_path
    os.environ["READTRACK_USER_ID"] = "cli-user"

    yield

    # Cleanup
    get_db().engine.dispose()
    reset_db()
    reset_config()
    for name in ("READTRACK_DB_PATH", "READTRACK_USER_ID"):
        if name in os.environ:
            del os.environ[name]
    if Path(db_path).exists():
        Path(db_path).unlink()


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_help(self, runner: CliRunner):
        """Test that help command works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "check-ins and streaks" in result.stdout

    def test_version(self, runner: CliRunner):
        """Test version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout


class TestCheckinCommand:
    """Tests for streak checkin command."""

    def test_checkin_today(self, runner: CliRunner):
        result = runner.invoke(app, ["streak", "checkin"])

        assert result.exit_code == 0
        assert "Reading activity recorded" in result.stdout
        assert "Current Streak: 1 day" in result.stdout

    def test_checkin_twice(self, runner: CliRunner):
        runner.invoke(app, ["streak", "checkin"])
        result = runner.invoke(app, ["streak", "checkin"])

        assert result.exit_code == 0
        assert "Already checked in" in result.stdout

    def test_checkin_with_date(self, runner: CliRunner):
        result = runner.invoke(app, ["streak", "checkin", "--date", "2025-01-15"])

        assert result.exit_code == 0
        assert "2025-01-15" in result.stdout

    def test_checkin_invalid_date(self, runner: CliRunner):
        result = runner.invoke(app, ["streak", "checkin", "--date", "15/01/2025"])

        assert result.exit_code == 1
        assert "Invalid date format" in result.stdout

    def test_checkin_future_date(self, runner: CliRunner):
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        result = runner.invoke(app, ["streak", "checkin", "--date", tomorrow])

        assert result.exit_code == 1
        assert "future day" in result.stdout

        status = runner.invoke(app, ["streak", "status"])
        assert "No reading activity yet" in status.stdout

    def test_checkin_blank_type(self, runner: CliRunner):
        result = runner.invoke(app, ["streak", "checkin", "--type", " "])

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_checkin_other_user(self, runner: CliRunner):
        runner.invoke(app, ["streak", "checkin", "--user", "someone"])
        result = runner.invoke(app, ["streak", "status"])

        assert "No reading activity yet" in result.stdout


class TestStatusCommand:
    """Tests for streak status command."""

    def test_status_empty(self, runner: CliRunner):
        result = runner.invoke(app, ["streak", "status"])

        assert result.exit_code == 0
        assert "No reading activity yet" in result.stdout

    def test_status_after_checkins(self, runner: CliRunner):
        today = date.today()
        for i in range(3):
            day = (today - timedelta(days=i)).isoformat()
            runner.invoke(app, ["streak", "checkin", "--date", day])

        result = runner.invoke(app, ["streak", "status"])

        assert result.exit_code == 0
        assert "3 Days" in result.stdout
        assert "Checked in today" in result.stdout
        assert "Progress to 7 days" in result.stdout

    def test_status_at_risk(self, runner: CliRunner):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        runner.invoke(app, ["streak", "checkin", "--date", yesterday])

        result = runner.invoke(app, ["streak", "status"])

        assert "1 Day" in result.stdout
        assert "Keep it going" in result.stdout

    def test_status_shows_badge(self, runner: CliRunner):
        today = date.today()
        for i in range(7):
            day = (today - timedelta(days=i)).isoformat()
            runner.invoke(app, ["streak", "checkin", "--date", day])

        result = runner.invoke(app, ["streak", "status"])

        assert "7 Day Streak" in result.stdout
        assert "Progress to 30 days" in result.stdout


class TestHistoryCommand:
    """Tests for streak history command."""

    def test_history_empty(self, runner: CliRunner):
        result = runner.invoke(app, ["streak", "history"])

        assert result.exit_code == 0
        assert "No reading history" in result.stdout

    def test_history_lists_check_ins(self, runner: CliRunner):
        runner.invoke(app, ["streak", "checkin", "--date", "2025-01-15"])
        runner.invoke(app, ["streak", "checkin", "--date", "2025-01-16"])

        result = runner.invoke(app, ["streak", "history"])

        assert result.exit_code == 0
        assert "2025-01-15" in result.stdout
        assert "2025-01-16" in result.stdout
        assert "Wednesday" in result.stdout


    def test_history_with_malformed_row(self, runner: CliRunner):
        """Test a stored row with a bad date still lists without a weekday."""
        runner.invoke(app, ["streak", "checkin", "--date", "2025-01-15"])
        with get_db().get_session() as session:
            session.add(CheckIn(user_id="cli-user", activity_date="garbage"))

        result = runner.invoke(app, ["streak", "history"])

        assert result.exit_code == 0
        assert "garbage" in result.stdout
        assert "Wednesday" in result.stdout

    def test_history_rejects_zero_limit(self, runner: CliRunner):
        result = runner.invoke(app, ["streak", "history", "--limit", "0"])

        assert result.exit_code == 2


class TestMilestonesCommand:
    """Tests for streak milestones command."""

    def test_milestones(self, runner: CliRunner):
        result = runner.invoke(app, ["streak", "milestones"])

        assert result.exit_code == 0
        assert "365" in result.stdout
        assert "Next" in result.stdout

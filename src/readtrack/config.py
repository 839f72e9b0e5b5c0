"""Configuration management for readtrack.

Loads configuration from environment variables and provides defaults.
"""

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Default user for the CLI
    user_id: str

    # IANA zone name used to decide the local calendar day, None for system local
    timezone: Optional[str]

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "READTRACK_DB_PATH",
            str(Path.home() / ".readtrack" / "readtrack.db"),
        )
        db_path = Path(db_path_str).expanduser()

        return cls(
            db_path=db_path,
            user_id=os.environ.get("READTRACK_USER_ID", "local") or "local",
            timezone=os.environ.get("READTRACK_TIMEZONE") or None,
            log_level=os.environ.get("READTRACK_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        # Check database directory is writable
        if not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        if self.timezone:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError):
                errors.append(f"Unknown time zone: {self.timezone}")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    @property
    def log_level_value(self) -> int:
        """Numeric logging level, WARNING when the name is unknown."""
        return getattr(logging, self.log_level, logging.WARNING)

    def local_today(self) -> date:
        """Today's calendar day in the configured time zone."""
        if self.timezone:
            return datetime.now(ZoneInfo(self.timezone)).date()
        return date.today()


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None

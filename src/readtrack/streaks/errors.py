"""Exceptions raised by the streaks module."""


class StreakError(Exception):
    """Base exception for streak operations."""

    pass


class InvalidCheckInError(StreakError):
    """Raised when a check-in is rejected before it is written."""

    pass

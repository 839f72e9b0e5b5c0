"""readtrack - daily reading check-ins and streaks."""

__version__ = "0.1.0"

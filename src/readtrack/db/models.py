"""Shared SQLAlchemy declarative base.

Feature modules define their tables against ``Base`` and register them in
``Database.create_tables``.
"""

from uuid import uuid4

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string for primary keys."""
    return str(uuid4())

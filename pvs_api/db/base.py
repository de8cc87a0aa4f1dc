"""SQLAlchemy Declarative Bases — one per datastore.

Invariants:
    - Primary models inherit from Base; Domani models inherit from DomaniBase
    - The two metadata sets never share tables (Domani lives in a separate database)
    - to_dict() returns every column keyed by its column name (select('*') equivalent)

Design Decisions:
    - Separate file for the bases: avoids circular imports between models (ADR: SQLAlchemy best practice)
    - to_dict walks mapper column attributes, so attribute names that differ from
      column names (e.g. metadata_ -> "metadata") still serialize under the column name
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import DeclarativeBase


class RowMixin:
    """Row-to-dict serialization shared by both bases."""

    def to_dict(self) -> dict[str, Any]:
        mapper = inspect(type(self))
        return {
            attr.columns[0].name: getattr(self, attr.key)
            for attr in mapper.column_attrs
        }


class Base(RowMixin, DeclarativeBase):
    """Base class for all primary-datastore ORM models."""
    pass


class DomaniBase(RowMixin, DeclarativeBase):
    """Base class for the isolated Domani datastore."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)

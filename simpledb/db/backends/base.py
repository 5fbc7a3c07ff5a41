"""
SimpleDB DB Backend — Base Adapter Interface.

All database backends implement this interface. The ``Database`` engine
delegates to the appropriate adapter based on the connection URL.

This interface abstracts differences between SQLite and MySQL:
- Parameter placeholder style (``?`` / ``:name`` vs ``%s`` / ``%(name)s``)
- Introspection queries
- Driver error shapes
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union

logger = logging.getLogger("simpledb.db.backends")

__all__ = [
    "DatabaseAdapter",
    "AdapterCapabilities",
    "ColumnInfo",
    "Params",
]

Params = Optional[Union[Sequence[Any], Mapping[str, Any]]]


@dataclass
class AdapterCapabilities:
    """Describes what a specific backend supports."""

    supports_upsert: bool = False  # ON DUPLICATE KEY UPDATE
    supports_describe: bool = False  # DESCRIBE / SHOW TABLES
    param_style: str = "qmark"  # qmark (?) | format (%s)
    name: str = "base"


@dataclass
class ColumnInfo:
    """Introspection result for a single column."""

    name: str
    data_type: str
    nullable: bool = True
    default: Optional[str] = None
    primary_key: bool = False


class DatabaseAdapter(ABC):
    """
    Abstract database adapter interface.

    Statements arrive with ``?`` positional and ``:name`` named
    placeholders; adapters translate them in ``adapt_sql`` when their driver
    expects something else.
    """

    capabilities: AdapterCapabilities = AdapterCapabilities()

    #: Exception classes raised by the driver for failed statements.
    error_types: Tuple[Type[BaseException], ...] = (Exception,)

    @abstractmethod
    def connect(self, url: str, **options) -> None:
        """Open a connection to the database."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Close the database connection."""
        ...

    @abstractmethod
    def execute(self, sql: str, params: Params = None) -> Any:
        """Execute a SQL statement. Returns a cursor-like object."""
        ...

    @abstractmethod
    def fetch_all(self, sql: str, params: Params = None) -> List[Dict[str, Any]]:
        """Execute and return all rows as dicts."""
        ...

    def fetch_one(self, sql: str, params: Params = None) -> Optional[Dict[str, Any]]:
        """Execute and return one row as dict, or None."""
        rows = self.fetch_all(sql, params)
        return rows[0] if rows else None

    @abstractmethod
    def fetch_val(self, sql: str, params: Params = None) -> Tuple[bool, Any]:
        """
        Execute and return ``(found, value)`` for the first column of the
        first row. ``found`` is False when the result set is empty.
        """
        ...

    # ── Introspection ────────────────────────────────────────────────

    @abstractmethod
    def get_tables(self) -> List[str]:
        """List all table names."""
        ...

    @abstractmethod
    def get_columns(self, table_name: str) -> List[ColumnInfo]:
        """Get column info for a table."""
        ...

    # ── SQL adaptation ───────────────────────────────────────────────

    def adapt_sql(self, sql: str) -> str:
        """
        Adapt SQL placeholders to the backend's param style.

        Override this in backends that use a different param style.
        """
        return sql

    def describe_error(self, exc: BaseException) -> Tuple[Any, str]:
        """Return the driver's ``(error code, message)`` for a failure."""
        return type(exc).__name__, str(exc)

    def last_insert_id(self, cursor: Any) -> Optional[int]:
        """Extract last inserted ID from cursor."""
        if hasattr(cursor, "lastrowid"):
            return cursor.lastrowid
        return None

    @property
    def is_connected(self) -> bool:
        """Check if the adapter is connected."""
        return False

    @property
    def dialect(self) -> str:
        """Return the SQL dialect name."""
        return self.capabilities.name

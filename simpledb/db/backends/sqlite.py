"""
SimpleDB DB Backend — SQLite adapter via the standard ``sqlite3`` driver.

This is the default backend. SQLite accepts both ``?`` and ``:name``
placeholders natively, so statements pass through unchanged.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional, Tuple

from .base import (
    AdapterCapabilities,
    ColumnInfo,
    DatabaseAdapter,
    Params,
)

logger = logging.getLogger("simpledb.db.backends.sqlite")

__all__ = ["SQLiteAdapter"]


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite adapter.

    Features:
    - Foreign key enforcement
    - Autocommit mode (``isolation_level=None``) unless the caller overrides it
    - Introspection via ``sqlite_master`` and ``PRAGMA table_info``
    """

    capabilities = AdapterCapabilities(
        supports_upsert=False,
        supports_describe=False,
        param_style="qmark",
        name="sqlite",
    )

    error_types = (sqlite3.Error,)

    def __init__(self):
        self._connection: Optional[sqlite3.Connection] = None
        self._connected = False

    def connect(self, url: str, **options) -> None:
        if self._connected:
            return
        db_path = self._parse_url(url)
        options.setdefault("isolation_level", None)
        self._connection = sqlite3.connect(db_path, **options)
        self._connection.row_factory = sqlite3.Row
        self._connection.execute("PRAGMA foreign_keys=ON")
        self._connected = True
        logger.info(f"SQLite connected: {db_path}")

    def disconnect(self) -> None:
        if not self._connected:
            return
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        self._connected = False
        logger.info("SQLite disconnected")

    def _cursor(self, sql: str, params: Params) -> sqlite3.Cursor:
        if not self._connected:
            raise RuntimeError("Not connected")
        return self._connection.execute(sql, params if params is not None else [])

    def _commit_pending(self) -> None:
        # Implicit transactions exist only when autocommit was overridden
        if self._connection.isolation_level is not None and self._connection.in_transaction:
            self._connection.commit()

    def execute(self, sql: str, params: Params = None) -> Any:
        cursor = self._cursor(sql, params)
        self._commit_pending()
        return cursor

    def fetch_all(self, sql: str, params: Params = None) -> List[Dict[str, Any]]:
        cursor = self._cursor(sql, params)
        rows = [dict(row) for row in cursor.fetchall()]
        self._commit_pending()
        return rows

    def fetch_val(self, sql: str, params: Params = None) -> Tuple[bool, Any]:
        row = self._cursor(sql, params).fetchone()
        self._commit_pending()
        if row is None:
            return False, None
        return True, row[0]

    def describe_error(self, exc: BaseException) -> Tuple[Any, str]:
        code = getattr(exc, "sqlite_errorname", None) or type(exc).__name__
        return code, str(exc)

    # ── Introspection ────────────────────────────────────────────────

    def get_tables(self) -> List[str]:
        rows = self.fetch_all(
            "SELECT name FROM sqlite_master WHERE type='table' "
            "AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [r["name"] for r in rows]

    def get_columns(self, table_name: str) -> List[ColumnInfo]:
        rows = self.fetch_all(f'PRAGMA table_info("{table_name}")')
        return [
            ColumnInfo(
                name=row["name"],
                data_type=row["type"],
                nullable=not row["notnull"],
                default=row["dflt_value"],
                primary_key=bool(row["pk"]),
            )
            for row in rows
        ]

    @property
    def is_connected(self) -> bool:
        return self._connected

    @staticmethod
    def _parse_url(url: str) -> str:
        """Extract file path from sqlite URL."""
        for prefix in ("sqlite:///", "sqlite://"):
            if url.startswith(prefix):
                path = url[len(prefix):]
                return path or ":memory:"
        return url.replace("sqlite:", "").lstrip("/") or ":memory:"

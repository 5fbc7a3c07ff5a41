"""
SimpleDB DB Backends Package — pluggable database adapters.

Provides a common adapter interface and implementations for:
- SQLite (default, via the standard sqlite3 driver)
- MySQL (via pymysql)
"""

from .base import DatabaseAdapter, AdapterCapabilities, ColumnInfo
from .sqlite import SQLiteAdapter
from .mysql import MySQLAdapter

__all__ = [
    "DatabaseAdapter",
    "AdapterCapabilities",
    "ColumnInfo",
    "SQLiteAdapter",
    "MySQLAdapter",
]

"""
SimpleDB Database — synchronous database layer.

Provides:
- Database: connection manager over a backend adapter
- Row / Rows: populators for query results
- Table: per-table fetch helpers
- SQLite driver (default) and MySQL adapter
- Structured faults (DatabaseConnectionFault, QueryFault, SchemaFault)
"""

from .engine import (
    Database,
    DatabaseError,
)
from .data import Row, Rows, Table

# Backend adapters
from .backends import (
    DatabaseAdapter,
    AdapterCapabilities,
    ColumnInfo,
    SQLiteAdapter,
    MySQLAdapter,
)

# Re-export fault types for convenience
from ..faults.domains import (
    DatabaseConnectionFault,
    QueryFault,
    SchemaFault,
)

__all__ = [
    "Database",
    "DatabaseError",
    "Row",
    "Rows",
    "Table",
    "DatabaseConnectionFault",
    "QueryFault",
    "SchemaFault",
    # Backends
    "DatabaseAdapter",
    "AdapterCapabilities",
    "ColumnInfo",
    "SQLiteAdapter",
    "MySQLAdapter",
]

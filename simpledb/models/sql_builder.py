"""
SimpleDB SQL Builder — incremental statement composition.

A ``Query`` is seeded with one base statement and grows by appending
fragments to four ordered groups (operation, where, order, limit). Compiling
joins the groups in that fixed order and normalizes whitespace.

Usage:
    from simpledb.models.sql_builder import Query

    sql = Query.select("users").where(["id"]).limit(1).compile()
    # 'SELECT * FROM users WHERE id = ? LIMIT 1'

    sql = Query.insert("users", ["id", "name"], ["name"]).compile()
    # 'INSERT INTO users (id, name) VALUES(:id, :name) ON DUPLICATE KEY UPDATE name = :name'

``where`` predicates use positional ``?`` placeholders; ``insert`` uses named
``:column`` placeholders. Bind parameters with the matching convention.
"""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional, Sequence, Union

__all__ = ["Query"]

_WHITESPACE_RE = re.compile(r"\s+")

_GROUPS = ("operation", "where", "order", "limit", "literal")


def _as_list(value: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(value, str):
        return [value]
    return list(value)


class Query:
    """
    Mutable statement builder.

    Fragments are only ever appended; a builder can be compiled any number
    of times.
    """

    # ── Constructors ─────────────────────────────────────────────────

    @classmethod
    def select(cls, table: str, fields: Union[str, Sequence[str]] = "*") -> Query:
        """Create a new SELECT query."""
        return cls(f"SELECT {', '.join(_as_list(fields))} FROM {table}")

    @classmethod
    def delete(cls, table: str) -> Query:
        """Create a new DELETE query."""
        return cls(f"DELETE FROM {table}")

    @classmethod
    def insert(
        cls,
        table: str,
        columns: Sequence[str],
        update: Sequence[str] = (),
    ) -> Query:
        """
        Create a new INSERT query.

        Args:
            table: The table name.
            columns: The columns to insert data for.
            update: If non-empty, add ON DUPLICATE KEY UPDATE for these columns.
        """
        columns = _as_list(columns)
        values = ", ".join(f":{column}" for column in columns)
        base = f"INSERT INTO {table} ({', '.join(columns)}) VALUES({values})"

        update = _as_list(update)
        if update:
            updates = ", ".join(f"{column} = :{column}" for column in update)
            base += f" ON DUPLICATE KEY UPDATE {updates}"

        return cls(base)

    @classmethod
    def describe(cls, table: str) -> Query:
        """Create a new DESCRIBE query."""
        return cls(f"DESCRIBE {table}")

    @classmethod
    def show_tables(cls) -> Query:
        """Create a SHOW TABLES query."""
        return cls("SHOW TABLES")

    def __init__(self, operation: str = ""):
        self._query: Dict[str, List[str]] = {group: [] for group in _GROUPS}
        self._query["operation"].append(operation)

    def __str__(self) -> str:
        return self.compile()

    def __repr__(self) -> str:
        return f"Query({self.compile()!r})"

    # ── Fragments ────────────────────────────────────────────────────

    def literal(self, sql: str) -> Query:
        """Append literal SQL after every other fragment group."""
        self._query["literal"].append(sql)
        return self

    def where(self, columns: Union[str, Sequence[str]]) -> Query:
        """Append one ``column = ?`` predicate per column, joined with AND."""
        where = self._query["where"]
        for column in _as_list(columns):
            where.append(f"{'WHERE' if not where else 'AND'} {column} = ?")
        return self

    def order(
        self,
        column_or_mapping: Union[str, Mapping[str, Optional[str]]],
        mode: Optional[str] = None,
    ) -> Query:
        """
        Append an ORDER BY clause.

        ``order("name", "asc")`` or ``order({"name": "asc", "id": "desc"})``;
        the mapping's order is preserved and modes are upper-cased.
        """
        if isinstance(column_or_mapping, Mapping):
            terms = [
                f"{column} {(m or '').upper()}"
                for column, m in column_or_mapping.items()
            ]
        else:
            terms = [f"{column_or_mapping} {(mode or '').upper()}"]

        self._query["order"].append("ORDER BY " + ", ".join(t.strip() for t in terms))
        return self

    def limit(self, start_or_count: int, count: Optional[int] = None) -> Query:
        """
        Append a LIMIT clause.

        With one argument it is the row count; with two, the offset and count.
        """
        clause = f"LIMIT {int(start_or_count)}"
        if count is not None:
            clause += f", {int(count)}"
        self._query["limit"].append(clause)
        return self

    # ── Output ───────────────────────────────────────────────────────

    def compile(self) -> str:
        """Get the compiled statement text."""
        blocks = [" ".join(block) for block in self._query.values() if block]
        return _WHITESPACE_RE.sub(" ", " ".join(blocks)).strip()

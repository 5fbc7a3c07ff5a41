"""
SimpleDB Data — row wrappers and table handles.

``Row`` and ``Rows`` are the two populators: a ``Row`` builds one model, a
``Rows`` builds a list of models, both bound to the engine the data came
from. ``Table`` is a thin handle for fetching rows of one table.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    overload,
)

from ..models.populator import Populator
from ..models.sql_builder import Query

if TYPE_CHECKING:
    from ..models.base import Model
    from .backends.base import ColumnInfo
    from .engine import Database

__all__ = ["Row", "Rows", "Table"]


class Row(Populator, Mapping):
    """
    A single result row.

    Values are readable by key (``row["name"]``) or attribute
    (``row.name``). ``data=None`` stands for "no row".
    """

    def __init__(self, data: Optional[Mapping[str, Any]], db: Optional[Database] = None):
        super().__init__(db)
        self._data: Optional[Dict[str, Any]] = dict(data) if data is not None else None

    def __getitem__(self, key: str) -> Any:
        if self._data is None:
            raise KeyError(key)
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data or {})

    def __len__(self) -> int:
        return len(self._data or {})

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"Row({self._data!r})"

    def populate(self, model_cls: Type[Model]) -> Optional[Model]:
        if self._data is None:
            return None
        return model_cls(self._data, db=self._db)


class Rows(Populator, Sequence):
    """An ordered set of result rows."""

    def __init__(self, rows: Sequence[Mapping[str, Any]] = (), db: Optional[Database] = None):
        super().__init__(db)
        self._rows: List[Row] = [
            row if isinstance(row, Row) else Row(row, db=db) for row in rows
        ]

    @overload
    def __getitem__(self, index: int) -> Row: ...

    @overload
    def __getitem__(self, index: slice) -> List[Row]: ...

    def __getitem__(self, index):
        return self._rows[index]

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"Rows({len(self._rows)} rows)"

    def populate(self, model_cls: Type[Model]) -> List[Model]:
        return [row.populate(model_cls) for row in self._rows]


class Table:
    """Handle for one table of a ``Database``."""

    def __init__(self, db: Database, name: str):
        self._db = db
        self.name = name
        self._columns: Optional[List[ColumnInfo]] = None

    def __repr__(self) -> str:
        return f"Table({self.name!r})"

    def columns(self) -> List[ColumnInfo]:
        """Column metadata (cached after the first call)."""
        if self._columns is None:
            self._columns = self._db.get_columns(self.name)
        return self._columns

    @property
    def primary_key(self) -> str:
        for column in self.columns():
            if column.primary_key:
                return column.name
        return "id"

    def one(self, value: Any) -> Optional[Row]:
        """Fetch the row whose primary key equals ``value``."""
        query = Query.select(self.name).where([self.primary_key]).limit(1)
        return self._db.one(query, [value])

    def all(self) -> Rows:
        return self._db.all(Query.select(self.name))

    def find(self, criteria: Mapping[str, Any]) -> Rows:
        """Fetch rows matching every ``column = value`` pair in ``criteria``."""
        query = Query.select(self.name).where(list(criteria))
        return self._db.all(query, list(criteria.values()))

    def count(self) -> int:
        return int(self._db.execute_scalar(Query.select(self.name, "COUNT(*)"), fallback=0))

    def insert(self, data: Mapping[str, Any], update: Sequence[str] = ()) -> int:
        """
        Insert ``data`` (column → primitive value); with ``update``, upsert.

        Returns the last inserted id.
        """
        self._db.query(Query.insert(self.name, list(data), update), dict(data))
        return self._db.last_insert_id

    def delete(self, criteria: Mapping[str, Any]) -> None:
        """
        Delete rows matching every ``column = value`` pair in ``criteria``.

        Raises:
            ValueError: If ``criteria`` is empty; an unqualified DELETE is never issued.
        """
        if not criteria:
            raise ValueError(f"Refusing to delete from '{self.name}' without criteria")
        query = Query.delete(self.name).where(list(criteria))
        self._db.query(query, list(criteria.values()))

"""
SimpleDB Model Base — typed field storage over raw rows.

Usage:
    from simpledb.models import Model, Field, HasOne, HasMany

    class User(Model):
        table = "users"
        fields = {
            "id": Field.INT,
            "created": Field.DATETIME,
            "name": Field.STRING,
            "parent_id": Field.INT,
        }
        relations = {
            "parent": HasOne("User", "parent_id"),
            "children": HasMany("id", "users", "parent_id", "User"),
        }

    user = User.populate(db.table("users").one(7))
    user.name          # refined field value
    user.parent        # related User or None, queried on access

Declared fields are stored in primitive form and refined on read. Anything
else handed to the model is kept verbatim as an unknown attribute.
"""

from __future__ import annotations

import json
import logging
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Dict,
    List,
    Mapping,
    Optional,
    Union,
)

from ..faults.domains import (
    DatabaseConnectionFault,
    ModelConfigFault,
    UnknownRelationFault,
)
from .fields import DATETIME_FORMAT, Field, to_primitive, to_refined
from .populator import Populator
from .registry import ModelRegistry
from .relations import RELATION_TYPES, Relation, fetch_related

if TYPE_CHECKING:
    from ..db.engine import Database

logger = logging.getLogger("simpledb.models")

__all__ = ["Model"]


def _json_default(value: Any) -> Any:
    if hasattr(value, "strftime"):
        return value.strftime(DATETIME_FORMAT)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class Model:
    """
    Base class for all models.

    Subclasses declare, at class level:
        table: Table the model is stored in.
        fields: Mapping of field name → ``Field`` kind.
        relations: Mapping of relation name → ``HasOne``/``HasMany``.
        primary_key: Primary key column (used by ``HasOne``), ``"id"`` by default.

    Field and relation names must not collide with each other or with members
    of the class itself (``table``, ``get``, ``database``, ...).
    """

    table: ClassVar[str] = ""
    fields: ClassVar[Mapping[str, Field]] = {}
    relations: ClassVar[Mapping[str, Relation]] = {}
    primary_key: ClassVar[str] = "id"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        ModelRegistry.register(cls)

    @classmethod
    def populate(
        cls, populator: Optional[Populator]
    ) -> Union[Optional[Model], List[Model]]:
        """
        Build instance(s) from a populator (usually a ``Row`` or ``Rows``).

        Returns ``None`` when there is nothing to populate from.
        """
        if populator is None:
            return None
        return populator.populate(cls)

    def __init__(self, data: Optional[Mapping[str, Any]] = None, *, db: Optional[Database] = None):
        self._fields: Dict[str, Field] = dict(self.fields)
        self._relations: Dict[str, Relation] = dict(self.relations)
        self._unknown: Dict[str, Any] = {}
        self._db = db

        name = type(self).__name__
        for relation_name, relation in self._relations.items():
            if not isinstance(relation, RELATION_TYPES):
                raise ModelConfigFault(
                    name,
                    f'Relation "{relation_name}" must be a HasOne or HasMany relation.',
                )
            if relation_name in self._fields:
                raise ModelConfigFault(
                    name,
                    f'Cannot declare relation "{relation_name}" - a field with the same name already exists.',
                )

        # Class members win over __getattr__, so they would hide these names
        for declared in (*self._fields, *self._relations):
            if hasattr(type(self), declared):
                raise ModelConfigFault(
                    name,
                    f'Cannot declare "{declared}" - it shadows the {name}.{declared} attribute.',
                )

        self._data: Dict[str, Optional[str]] = {field: None for field in self._fields}

        if data:
            self.fill(data)

    # ── Attribute view ───────────────────────────────────────────────

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._relations:
            return self.get_related(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __contains__(self, name: str) -> bool:
        return name in self._data or name in self._unknown or name in self._relations

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    # ── Data access ──────────────────────────────────────────────────

    def fill(self, data: Mapping[str, Any]) -> None:
        """Set every entry of ``data`` on this model."""
        for field, value in data.items():
            self.set(field, value)

    def get(self, field: str) -> Any:
        """
        Get a value from this model.

        Declared fields are refined first; unknown attributes are returned
        verbatim; anything else is ``None``.
        """
        if field in self._fields:
            return to_refined(self._data.get(field), self._fields[field])
        return self._unknown.get(field)

    def set(self, field: str, value: Any) -> None:
        """
        Set the value of a field on this model.

        Declared fields are made primitive so they can be bound into a
        statement; other names are kept as unknown attributes.
        """
        if field in self._fields:
            self._data[field] = to_primitive(value, self._fields[field])
        else:
            self._unknown[field] = value

    def has_field(self, field: str) -> bool:
        return field in self._fields

    def has_relation(self, name: str) -> bool:
        return name in self._relations

    def get_primitive_data(self) -> Dict[str, Optional[str]]:
        return dict(self._data)

    def get_refined_data(self) -> Dict[str, Any]:
        return {field: self.get(field) for field in self._fields}

    def to_dict(self) -> Dict[str, Any]:
        return self.get_refined_data()

    def to_json(self, **kwargs: Any) -> str:
        """Serialize the refined data; date/times use the primitive format."""
        return json.dumps(self.get_refined_data(), default=_json_default, **kwargs)

    # ── Relations ────────────────────────────────────────────────────

    @property
    def database(self) -> Database:
        """
        Connection manager this model was loaded through.

        Raises:
            DatabaseConnectionFault: If the model is not bound to one.
        """
        if self._db is None:
            raise DatabaseConnectionFault(
                url="<unbound>",
                reason=f"{type(self).__name__} instance is not bound to a database",
            )
        return self._db

    def get_related(self, name: str) -> Union[Optional[Model], List[Model]]:
        """
        Fetch a related model (``HasOne``) or list of models (``HasMany``).

        Raises:
            UnknownRelationFault: If the relation name is not declared.
        """
        relation = self._relations.get(name)
        if relation is None:
            raise UnknownRelationFault(type(self).__name__, name)
        return fetch_related(relation, self)

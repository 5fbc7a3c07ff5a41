"""
SimpleDB Relations — has-one and has-many resolvers.

Relations are stateless descriptors declared once per model type:

    class User(Model):
        table = "users"
        fields = {"id": Field.INT, "parent_id": Field.INT}
        relations = {
            "parent": HasOne("User", "parent_id"),
            "children": HasMany("id", "users", "parent_id", "User"),
        }

``HasOne`` takes the related model first and the owner's foreign key second;
``HasMany`` takes the owner's local key first. Both are dispatched through
``fetch_related``. Nothing is cached: each access issues a fresh query.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, List, Optional, Type, Union

from .fields import Field, is_empty
from .registry import ModelRegistry
from .sql_builder import Query

if TYPE_CHECKING:
    from .base import Model

logger = logging.getLogger("simpledb.models")

__all__ = [
    "HasOne",
    "HasMany",
    "Relation",
    "RELATION_TYPES",
    "fetch_related",
]

ModelRef = Union[str, "Type[Model]"]


@dataclass(frozen=True)
class HasOne:
    """
    The owner holds a foreign key pointing at the related model's primary key.

    Attributes:
        model: Related model class, or its registered name.
        foreign_key: Field on the *owning* model holding the related key.
    """

    model: ModelRef
    foreign_key: str

    kind: ClassVar[str] = "has_one"

    def fetch(self, owner: Model) -> Optional[Model]:
        return fetch_related(self, owner)


@dataclass(frozen=True)
class HasMany:
    """
    Rows of ``table`` whose ``foreign_key`` column equals the owner's
    ``local_key`` value.

    Attributes:
        local_key: Field on the owning model.
        table: Related table to query.
        foreign_key: Column on the related table.
        model: Related model class, or its registered name.
    """

    local_key: str
    table: str
    foreign_key: str
    model: ModelRef

    kind: ClassVar[str] = "has_many"

    def fetch(self, owner: Model) -> List[Model]:
        return fetch_related(self, owner)


Relation = Union[HasOne, HasMany]
RELATION_TYPES = (HasOne, HasMany)


def _fetch_one(relation: HasOne, owner: Model) -> Optional[Model]:
    value = owner.get(relation.foreign_key)
    if is_empty(value, Field.INT):
        return None

    model_cls = ModelRegistry.resolve(relation.model)
    query = Query.select(model_cls.table).where([model_cls.primary_key]).limit(1)
    row = owner.database.one(query, [value])
    return model_cls.populate(row)


def _fetch_many(relation: HasMany, owner: Model) -> List[Model]:
    value = owner.get(relation.local_key)
    if is_empty(value, Field.INT):
        return []

    model_cls = ModelRegistry.resolve(relation.model)
    query = Query.select(relation.table).where([relation.foreign_key])
    return model_cls.populate(owner.database.all(query, [value]))


def fetch_related(relation: Relation, owner: Model) -> Union[Optional[Model], List[Model]]:
    """
    Traverse ``relation`` from ``owner``.

    Returns the related model (or ``None``) for ``HasOne`` and a list of
    related models (possibly empty) for ``HasMany``.
    """
    if not isinstance(relation, RELATION_TYPES):
        raise TypeError(f"Not a relation: {relation!r}")

    logger.debug(f"Fetching {relation.kind} relation from {type(owner).__name__}")
    if isinstance(relation, HasOne):
        return _fetch_one(relation, owner)
    return _fetch_many(relation, owner)

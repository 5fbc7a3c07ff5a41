"""
SimpleDB Models — typed models, field coercion, relations.

Exports:
- Model: base class for table-backed models
- Field: field kinds (INT, STRING, DATETIME, JSON)
- is_empty / to_primitive / to_refined: field coercion functions
- HasOne / HasMany / fetch_related: relation resolvers
- Populator: row → model capability
- ModelRegistry: model-name lookup for string relation targets
- Query: SQL statement builder
"""

from .fields import (
    DATETIME_FORMAT,
    Field,
    is_empty,
    to_primitive,
    to_refined,
)
from .sql_builder import Query
from .registry import ModelRegistry
from .populator import Populator
from .relations import (
    HasMany,
    HasOne,
    Relation,
    fetch_related,
)
from .base import Model

__all__ = [
    "DATETIME_FORMAT",
    "Field",
    "is_empty",
    "to_primitive",
    "to_refined",
    "Query",
    "ModelRegistry",
    "Populator",
    "HasOne",
    "HasMany",
    "Relation",
    "fetch_related",
    "Model",
]

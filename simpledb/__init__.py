"""
SimpleDB - a thin, introspectable model layer over a relational database.

Models declare typed fields and relations; rows are coerced between their
primitive (storage) and refined (application) forms, and relations are
resolved lazily on access.

    from simpledb import Database, Model, Field, HasOne

    class User(Model):
        table = "users"
        fields = {"id": Field.INT, "name": Field.STRING, "parent_id": Field.INT}
        relations = {"parent": HasOne("User", "parent_id")}

    with Database("sqlite:///app.db") as db:
        user = User.populate(db.table("users").one(7))
        print(user.name, user.parent)
"""

__version__ = "0.1.0"

from .faults import (
    Fault,
    FaultDomain,
    Severity,
    ConfigurationError,
    UnknownRelationError,
    QueryError,
    DatabaseError,
    ModelConfigFault,
    UnknownRelationFault,
    ModelNotFoundFault,
    QueryFault,
    DatabaseConnectionFault,
    SchemaFault,
)
from .models import (
    Field,
    HasMany,
    HasOne,
    Model,
    ModelRegistry,
    Populator,
    Query,
    fetch_related,
    is_empty,
    to_primitive,
    to_refined,
)
from .db import Database, Row, Rows, Table
from .config import (
    ConfigError,
    ConfigLoader,
    DatabaseConfig,
    configure_database,
    parse_connection_string,
)

__all__ = [
    "__version__",
    # Faults
    "Fault",
    "FaultDomain",
    "Severity",
    "ConfigurationError",
    "UnknownRelationError",
    "QueryError",
    "DatabaseError",
    "ModelConfigFault",
    "UnknownRelationFault",
    "ModelNotFoundFault",
    "QueryFault",
    "DatabaseConnectionFault",
    "SchemaFault",
    # Models
    "Field",
    "HasMany",
    "HasOne",
    "Model",
    "ModelRegistry",
    "Populator",
    "Query",
    "fetch_related",
    "is_empty",
    "to_primitive",
    "to_refined",
    # Database
    "Database",
    "Row",
    "Rows",
    "Table",
    # Config
    "ConfigError",
    "ConfigLoader",
    "DatabaseConfig",
    "configure_database",
    "parse_connection_string",
]

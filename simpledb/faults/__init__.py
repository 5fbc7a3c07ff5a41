"""
SimpleDB Faults - typed fault signals.

Every failure the library raises is a ``Fault``: an exception that also
carries a stable code, a domain, a severity and structured metadata.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain enumeration
- Severity: Severity levels
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
)

from .domains import (
    ModelFault,
    ModelConfigFault,
    UnknownRelationFault,
    ModelNotFoundFault,
    DatabaseFault,
    QueryFault,
    DatabaseConnectionFault,
    SchemaFault,
    ConfigurationError,
    UnknownRelationError,
    QueryError,
    DatabaseError,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",

    # Model faults
    "ModelFault",
    "ModelConfigFault",
    "UnknownRelationFault",
    "ModelNotFoundFault",

    # Database faults
    "DatabaseFault",
    "QueryFault",
    "DatabaseConnectionFault",
    "SchemaFault",

    # Aliases
    "ConfigurationError",
    "UnknownRelationError",
    "QueryError",
    "DatabaseError",
]

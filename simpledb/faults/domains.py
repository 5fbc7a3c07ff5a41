"""
SimpleDB Faults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- MODEL faults (declaration, relation access, registry lookups)
- DATABASE faults (connection, query execution, schema lookups)
"""

from typing import Any, Optional
from .core import Fault, FaultDomain, Severity


# ============================================================================
# MODEL Faults
# ============================================================================

class ModelFault(Fault):
    """Base class for model faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.MODEL,
            severity=severity,
            retryable=False,
            metadata=metadata,
        )


class ModelConfigFault(ModelFault):
    """A model type declares an invalid relation."""

    def __init__(self, model: str, reason: str, **kwargs):
        super().__init__(
            code="MODEL_CONFIG_INVALID",
            message=f"Invalid declaration on model '{model}': {reason}",
            severity=Severity.FATAL,
            metadata={"model": model, "reason": reason, **kwargs.get("metadata", {})},
        )


class UnknownRelationFault(ModelFault):
    """Access of a relation the model type does not declare."""

    def __init__(self, model: str, relation: str, **kwargs):
        super().__init__(
            code="UNKNOWN_RELATION",
            message=f"Unknown relation '{relation}' on model '{model}'",
            metadata={"model": model, "relation": relation, **kwargs.get("metadata", {})},
        )


class ModelNotFoundFault(ModelFault):
    """Model not found in registry."""

    def __init__(self, model_name: str, **kwargs):
        super().__init__(
            code="MODEL_NOT_FOUND",
            message=f"Model '{model_name}' not found in ModelRegistry",
            metadata={"model": model_name, **kwargs.get("metadata", {})},
        )


# ============================================================================
# DATABASE Faults
# ============================================================================

class DatabaseFault(Fault):
    """Base class for connection manager faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        retryable: bool = False,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.DATABASE,
            severity=severity,
            retryable=retryable,
            metadata=metadata,
        )


class QueryFault(DatabaseFault):
    """
    Query execution failed.

    ``backend_code`` and ``backend_message`` carry the driver's error
    verbatim; the core never retries a failed statement.
    """

    def __init__(
        self,
        operation: str,
        reason: str,
        *,
        backend_code: Any = None,
        sql: Optional[str] = None,
        **kwargs,
    ):
        self.backend_code = backend_code
        self.backend_message = reason
        self.sql = sql
        prefix = f"{backend_code}: " if backend_code is not None else ""
        super().__init__(
            code="QUERY_FAILED",
            message=f"Query ({operation}) failed: {prefix}{reason}",
            metadata={
                "operation": operation,
                "backend_code": backend_code,
                "reason": reason,
                "sql": sql[:200] if sql else None,
                **kwargs.get("metadata", {}),
            },
        )


class DatabaseConnectionFault(DatabaseFault):
    """Database connection failed or is unavailable."""

    def __init__(self, url: str, reason: str, **kwargs):
        super().__init__(
            code="DB_CONNECTION_FAILED",
            message=f"Database connection failed ({url}): {reason}",
            severity=Severity.FATAL,
            retryable=True,
            metadata={"url": url, "reason": reason, **kwargs.get("metadata", {})},
        )


class SchemaFault(DatabaseFault):
    """A table lookup or schema introspection failed."""

    def __init__(self, table: str, reason: str, **kwargs):
        super().__init__(
            code="SCHEMA_FAULT",
            message=f"Schema error for table '{table}': {reason}",
            metadata={"table": table, "reason": reason, **kwargs.get("metadata", {})},
        )


# ── Plain-name aliases ───────────────────────────────────────────────────────
ConfigurationError = ModelConfigFault
UnknownRelationError = UnknownRelationFault
QueryError = QueryFault
DatabaseError = DatabaseConnectionFault

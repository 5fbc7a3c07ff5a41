"""
SimpleDB fault base types.

A fault is an exception that a caller can inspect without parsing its
message: ``code`` is stable across releases, ``domain`` says which layer
raised it, and ``metadata`` holds the values that went into the message.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class Severity(str, Enum):
    """How serious a fault is; maps onto a logging level."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class FaultDomain:
    """
    Named layer a fault belongs to.

    Compares equal to its name, so ``fault.domain == "database"`` works.
    """

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.value = name
        self.description = description

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FaultDomain({self.name!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FaultDomain):
            return self.name == other.name
        return self.name == str(other)

    def __hash__(self) -> int:
        return hash(self.name)


FaultDomain.CONFIG = FaultDomain("config", "Invalid settings or declarations")
FaultDomain.MODEL = FaultDomain("model", "Model declaration and field/relation access")
FaultDomain.DATABASE = FaultDomain("database", "Connecting, executing statements, schema lookups")

# Severity and retry flag used when a fault does not pass its own
DOMAIN_DEFAULTS = {
    FaultDomain.CONFIG: {"severity": Severity.FATAL, "retryable": False},
    FaultDomain.MODEL: {"severity": Severity.ERROR, "retryable": False},
    FaultDomain.DATABASE: {"severity": Severity.ERROR, "retryable": False},
}


class Fault(Exception):
    """
    Base class of every exception SimpleDB raises on purpose.

    Subclasses usually fix ``code`` and ``domain`` and build the message from
    their own arguments, e.g. ``SchemaFault("users", "table does not exist")``.
    ``code``, ``message`` and ``domain`` may also be set as class attributes.
    """

    def __init__(
        self,
        code: str | None = None,
        message: str | None = None,
        *,
        domain: FaultDomain | None = None,
        severity: Optional[Severity] = None,
        retryable: Optional[bool] = None,
        metadata: Optional[dict[str, Any]] = None,
    ):
        self.code = code if code is not None else getattr(self, "code", None)
        self.message = message if message is not None else getattr(self, "message", None)
        self.domain = domain if domain is not None else getattr(self, "domain", None)

        if self.code is None or self.message is None or self.domain is None:
            raise TypeError(f"{type(self).__name__} needs a code, a message and a domain")

        super().__init__(self.message)

        defaults = DOMAIN_DEFAULTS.get(self.domain, {"severity": Severity.ERROR, "retryable": False})
        self.severity = severity or defaults["severity"]
        self.retryable = retryable if retryable is not None else defaults["retryable"]
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, domain={self.domain.value}, severity={self.severity.value})"

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for structured logs."""
        return {
            "code": self.code,
            "message": self.message,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "metadata": self.metadata,
        }

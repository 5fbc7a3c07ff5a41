"""
SimpleDB Model Registry — name → model class lookup.

Every ``Model`` subclass registers itself on declaration, so relations can
name their target by string (needed for self-references such as a user's
``parent`` user, and for models declared later in a module).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Optional, Type, Union

from ..faults.domains import ModelNotFoundFault

if TYPE_CHECKING:
    from .base import Model

logger = logging.getLogger("simpledb.models")

__all__ = ["ModelRegistry"]


class ModelRegistry:
    """Global registry for all Model subclasses."""

    _models: Dict[str, Type[Model]] = {}

    @classmethod
    def register(cls, model_cls: Type[Model]) -> None:
        """Register a model class under its class name."""
        name = model_cls.__name__
        if name in cls._models and cls._models[name] is not model_cls:
            logger.debug(f"Model '{name}' re-registered by {model_cls.__module__}")
        cls._models[name] = model_cls

    @classmethod
    def get(cls, name: str) -> Optional[Type[Model]]:
        """Get model class by name."""
        return cls._models.get(name)

    @classmethod
    def resolve(cls, model: Union[str, Type[Model]]) -> Type[Model]:
        """
        Resolve a model reference (class or registered name) to a class.

        Raises:
            ModelNotFoundFault: If a name is not registered.
        """
        if not isinstance(model, str):
            return model
        model_cls = cls._models.get(model)
        if model_cls is None:
            raise ModelNotFoundFault(model)
        return model_cls

    @classmethod
    def all_models(cls) -> Dict[str, Type[Model]]:
        """Get all registered models."""
        return dict(cls._models)

    @classmethod
    def reset(cls) -> None:
        """Clear registry (for testing)."""
        cls._models.clear()

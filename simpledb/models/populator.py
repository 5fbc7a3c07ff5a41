"""
SimpleDB Populator — the capability of turning raw rows into models.

``Row`` and ``Rows`` (see ``simpledb.db.data``) are the two realizations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Type, Union

if TYPE_CHECKING:
    from ..db.engine import Database
    from .base import Model

__all__ = ["Populator"]


class Populator(ABC):
    """
    Something that can construct one or many model instances.

    Models built by a populator are bound to the same connection manager the
    row data came from, so their relations can be fetched later.
    """

    def __init__(self, db: Optional[Database] = None):
        self._db = db

    @property
    def db(self) -> Optional[Database]:
        return self._db

    @abstractmethod
    def populate(self, model_cls: Type[Model]) -> Union[Optional[Model], List[Model]]:
        """Build model instance(s) of ``model_cls`` from the held row data."""
        ...

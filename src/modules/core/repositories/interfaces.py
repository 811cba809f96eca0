"""Generic repository contract shared by every module.

Services receive repositories through their constructors and only see
these abstractions.  Look-ups follow the Null Object convention: a missing
row is ``None`` (or ``False``), never an exception, and the service decides
which domain error to raise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Read side common to all aggregates, keyed by integer id."""

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Return the entity or ``None``."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Any:
        """Entities matching plain ORM look-ups (``{"route_id": 3}``)."""

    def exists(self, id: int) -> bool:
        return self.get_by_id(id) is not None

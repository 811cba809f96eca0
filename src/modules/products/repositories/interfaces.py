"""Product repository interface.

Extends ``IRepository[Product]`` with the batched existence check used
when an order's lines are validated.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, Optional, Set

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product catalog."""

    @abstractmethod
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""

    @abstractmethod
    def existing_ids(self, ids: Iterable[int]) -> Set[int]:
        """Return the subset of ``ids`` that exist, in a single query."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE)."""

"""Exchange repository interface.

The order repository depends on ``detach_for_order`` when it replaces an
order's lines; the exchange service depends on the rest.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.exchanges.models import Exchange


class IExchangeRepository(IRepository["Exchange"]):
    """Repository contract for exchanges."""

    @abstractmethod
    def insert(self, data: Dict[str, Any]) -> Exchange:
        """Insert one exchange.

        ``data`` keys: ``order_id``, ``order_item_id`` (optional),
        ``product_id``, ``quantity``, ``exchange_value``, ``reason``,
        ``user_id``.
        """

    @abstractmethod
    def list_for_order(self, order_id: int) -> List[Exchange]:
        """Exchanges of one order, newest first, with product data."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Delete by id; ``False`` when nothing was deleted."""

    @abstractmethod
    def detach_for_order(self, order_id: int) -> int:
        """Null the line reference of every exchange of the order."""

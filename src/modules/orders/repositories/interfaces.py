"""Order repository interface.

Extends ``IRepository[Order]`` with the operations required by the Order
aggregate: creation with lines, all-or-nothing line replacement, partial
column updates and the remaneio sequence queries.

The Service Layer and the remaneio sequencer depend exclusively on this
contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.orders.dtos import OrderItemDTO
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Every method that
    writes more than one row must be atomic.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its lines atomically.

        ``data`` must include ``order_key``, ``customer_id``, ``order_date``,
        ``status``, ``items`` (list of ``OrderItemDTO``) and optionally
        ``route_id``, ``remaneio_position`` and ``user_id``.  Line totals and
        the order total are computed here.
        """

    @abstractmethod
    def insert_items(self, order_id: int, items: Sequence[OrderItemDTO]) -> Decimal:
        """Bulk-insert lines and return the sum of their totals."""

    @abstractmethod
    def replace_items(self, order_id: int, items: Sequence[OrderItemDTO]) -> Decimal:
        """Detach exchanges, delete current lines, insert ``items``.

        Returns the new order total.
        """

    @abstractmethod
    def update_fields(
        self, order_id: int, fields: Dict[str, Any], user_id: Optional[int] = None
    ) -> int:
        """Update the given columns and stamp the update audit columns."""

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with customer, route, lines and exchange summary."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional[Order]:
        """Retrieve an order row with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Order]:
        """Orders in remaneio display order, with lines and exchange summary."""

    @abstractmethod
    def key_exists(self, order_key: str) -> bool:
        """Return ``True`` when ``chave_pedido`` is already taken."""

    @abstractmethod
    def item_exists(self, order_id: int, item_id: int) -> bool:
        """Return ``True`` when ``item_id`` is a current line of the order."""

    @abstractmethod
    def next_remaneio_position(self) -> int:
        """``max(ordem_remaneio)`` over CONFERIR orders plus one (1 if none).

        Locks the CONFERIR rows until the surrounding transaction ends.
        """

    @abstractmethod
    def awaiting_review_sequence(self) -> List[int]:
        """Locked ids of CONFERIR orders in current remaneio order."""

    @abstractmethod
    def assign_remaneio_positions(
        self, sequence: Sequence[int], user_id: Optional[int] = None
    ) -> int:
        """Set ``ordem_remaneio`` to the 1-based index in ``sequence``.

        Single statement, restricted to rows still in CONFERIR.
        """

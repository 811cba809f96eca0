"""Exchange service layer (Use Cases).

Business rules enforced:
- The order and the product must exist; both rows are locked while the
  exchange is inserted.
- A line reference, when given, must be a current line of that order.
- Exchanges are listed newest first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction

from modules.exchanges.exceptions import ExchangeNotFound
from modules.orders.exceptions import OrderItemNotFound, OrderNotFound
from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.exchanges.dtos import CreateExchangeDTO
    from modules.exchanges.models import Exchange
    from modules.exchanges.repositories.interfaces import IExchangeRepository
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ExchangeService:
    """Application service for exchanges (trocas)."""

    def __init__(
        self,
        exchange_repository: IExchangeRepository,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._exchange_repo = exchange_repository
        self._order_repo = order_repository
        self._product_repo = product_repository

    @transaction.atomic
    def create_exchange(
        self, dto: CreateExchangeDTO, user_id: Optional[int] = None
    ) -> Exchange:
        """Record a returned product against an order.

        Raises:
            OrderNotFound: order does not exist.
            ProductNotFound: product does not exist.
            OrderItemNotFound: line id given but not a line of the order.
        """
        log = logger.bind(order_id=dto.order_id, product_id=dto.product_id)

        order = self._order_repo.get_for_update(dto.order_id)
        if not order:
            raise OrderNotFound(dto.order_id)
        product = self._product_repo.get_for_update(dto.product_id)
        if not product:
            raise ProductNotFound(dto.product_id)
        if dto.order_item_id is not None and not self._order_repo.item_exists(
            order.id, dto.order_item_id
        ):
            raise OrderItemNotFound(dto.order_item_id)

        exchange = self._exchange_repo.insert(
            {
                "order_id": order.id,
                "order_item_id": dto.order_item_id,
                "product_id": product.id,
                "quantity": dto.quantity,
                "exchange_value": dto.exchange_value,
                "reason": dto.reason,
                "user_id": user_id,
            }
        )
        log.info("exchange.created", exchange_id=exchange.id)
        return self._exchange_repo.get_by_id(exchange.id) or exchange

    def delete_exchange(self, exchange_id: int) -> None:
        """Raises ``ExchangeNotFound`` when nothing was deleted."""
        if not self._exchange_repo.delete(exchange_id):
            raise ExchangeNotFound(exchange_id)

    def get_exchange(self, exchange_id: int) -> Exchange:
        exchange = self._exchange_repo.get_by_id(exchange_id)
        if not exchange:
            raise ExchangeNotFound(exchange_id)
        return exchange

    def list_for_order(self, order_id: int) -> List[Exchange]:
        return self._exchange_repo.list_for_order(order_id)

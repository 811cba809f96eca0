"""Order service layer (Use Cases).

Orchestrates order creation, full replacement and status transitions.
All write operations are atomic: the service defines the unit-of-work
boundary and any raised exception rolls the whole request back.

Business rules enforced:
- Customer must exist; route, when given, must exist.
- Every product referenced by a line must exist (checked in one query).
- ``chave_pedido`` is unique; when omitted it is generated from the
  customer code plus a base-36 millisecond timestamp.
- ``valor_total`` is the sum of the line totals, recomputed whenever the
  lines are replaced.
- Entering CONFERIR keeps an existing remaneio position or appends the order
  at ``max + 1``; leaving CONFERIR clears the position.
- Any status may move to any other status.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

import structlog
from django.db import transaction

from modules.customers.exceptions import CustomerNotFound
from modules.orders.constants import OrderStatus
from modules.orders.exceptions import OrderKeyConflict, OrderNotFound
from modules.products.exceptions import ProductNotFound
from modules.routes.exceptions import RouteNotFound

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import (
        CreateOrderDTO,
        OrderItemDTO,
        ReplaceOrderDTO,
        StatusTransitionDTO,
    )
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository
    from modules.routes.repositories.interfaces import IRouteRepository

logger = structlog.get_logger(__name__)

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        product_repository: IProductRepository,
        route_repository: IRouteRepository,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._product_repo = product_repository
        self._route_repo = route_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO, user_id: Optional[int] = None) -> Order:
        """Create a new order with its lines.

        Steps:
        1. Validate customer, route and products.
        2. Resolve the order key (given or generated) and check uniqueness.
        3. Assign a remaneio position when the initial status is CONFERIR.
        4. Persist order + lines atomically.

        Raises:
            CustomerNotFound: customer does not exist.
            RouteNotFound: route given but missing.
            ProductNotFound: a product does not exist.
            OrderKeyConflict: ``chave_pedido`` already used.
        """
        log = logger.bind(customer_id=dto.customer_id, user_id=user_id)
        log.info("order.creation_started", item_count=len(dto.items))

        customer = self._customer_repo.get_by_id(dto.customer_id)
        if not customer:
            raise CustomerNotFound("Cliente não encontrado", attr="cliente_id")
        if dto.route_id is not None:
            self._ensure_route_exists(dto.route_id)
        self._ensure_products_exist(dto.items)

        order_key = dto.order_key or self._generate_order_key(customer.code)
        if dto.order_key and self._order_repo.key_exists(order_key):
            log.warning("order.key_conflict", order_key=order_key)
            raise OrderKeyConflict(order_key)

        position = None
        if dto.status == OrderStatus.AWAITING_REVIEW:
            position = self._order_repo.next_remaneio_position()

        order = self._order_repo.create(
            {
                "order_key": order_key,
                "customer_id": dto.customer_id,
                "route_id": dto.route_id,
                "order_date": dto.order_date,
                "status": dto.status,
                "remaneio_position": position,
                "items": dto.items,
                "user_id": user_id,
            }
        )

        log.info(
            "order.created",
            order_id=order.id,
            order_key=order.order_key,
            status=order.status,
            remaneio_position=position,
        )
        return self._order_repo.get_by_id(order.id) or order

    @transaction.atomic
    def replace_order(
        self, order_id: int, dto: ReplaceOrderDTO, user_id: Optional[int] = None
    ) -> Order:
        """Apply a full update (``PUT``) to an existing order.

        Only fields present in the request change.  Supplying ``items``
        detaches the order's exchanges from the old lines, replaces the
        lines and recomputes the total.

        Raises:
            OrderNotFound: order does not exist.
            RouteNotFound: a non-null route was given but is missing.
            ProductNotFound: a product does not exist.
        """
        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound(order_id)

        log = logger.bind(order_id=order_id, user_id=user_id)
        fields: Dict[str, Any] = {}

        if dto.provided("route_id"):
            if dto.route_id is not None:
                self._ensure_route_exists(dto.route_id)
            fields["route_id"] = dto.route_id
        if dto.provided("order_date"):
            fields["order_date"] = dto.order_date
        if dto.provided("status"):
            fields["status"] = dto.status
            fields["remaneio_position"] = self._position_for(
                dto.status, order.remaneio_position
            )
        if dto.provided("items"):
            self._ensure_products_exist(dto.items)
            fields["total_value"] = self._order_repo.replace_items(order.id, dto.items)

        if fields:
            self._order_repo.update_fields(order.id, fields, user_id)

        log.info("order.replaced", fields=sorted(fields))
        return self._order_repo.get_by_id(order.id) or order

    @transaction.atomic
    def transition_status(
        self, order_id: int, dto: StatusTransitionDTO, user_id: Optional[int] = None
    ) -> Order:
        """Move an order to ``dto.status``.

        Acquires a row-level lock (``SELECT FOR UPDATE``) on the order
        before computing the remaneio side effect.  ``valor_efetivado`` and
        ``data`` are applied when present in the request.

        Raises:
            OrderNotFound: order does not exist.
        """
        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound(order_id)

        log = logger.bind(
            order_id=order_id,
            current_status=order.status,
            new_status=dto.status,
            user_id=user_id,
        )

        fields: Dict[str, Any] = {
            "status": dto.status,
            "remaneio_position": self._position_for(dto.status, order.remaneio_position),
        }
        if dto.provided("effective_value"):
            fields["effective_value"] = dto.effective_value
        if dto.provided("order_date"):
            fields["order_date"] = dto.order_date

        self._order_repo.update_fields(order.id, fields, user_id)
        order.refresh_from_db()

        log.info("order.status_updated", remaneio_position=order.remaneio_position)
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: int) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(order_id)
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Order]:
        """Return orders in remaneio display order, optionally filtered."""
        return self._order_repo.list(filters)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _position_for(
        self, status: OrderStatus, current_position: Optional[int]
    ) -> Optional[int]:
        if status != OrderStatus.AWAITING_REVIEW:
            return None
        if current_position is not None:
            return current_position
        return self._order_repo.next_remaneio_position()

    def _ensure_route_exists(self, route_id: int) -> None:
        if not self._route_repo.exists(route_id):
            raise RouteNotFound("Rota não encontrada", attr="rota_id")

    def _ensure_products_exist(self, items: Iterable[OrderItemDTO]) -> None:
        """One query for the whole line set; reports the first missing id."""
        wanted = [item.product_id for item in items]
        found = self._product_repo.existing_ids(wanted)
        for product_id in wanted:
            if product_id not in found:
                raise ProductNotFound(product_id)

    def _generate_order_key(self, customer_code: str) -> str:
        """Customer code plus base-36 epoch millis, bumped past taken keys."""
        stamp = int(time.time() * 1000)
        order_key = f"{customer_code}{to_base36(stamp)}"
        while self._order_repo.key_exists(order_key):
            stamp += 1
            order_key = f"{customer_code}{to_base36(stamp)}"
        return order_key

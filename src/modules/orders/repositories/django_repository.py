"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations that touch more than one row are wrapped in
``transaction.atomic()`` so the Order aggregate (Order + OrderItems) is
persisted atomically.

Concurrency control on the remaneio position uses ``select_for_update()``
over the CONFERIR rows, which serializes position assignment and batch
reordering.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

import structlog
from django.db import IntegrityError, transaction
from django.db.models import (
    Case,
    Count,
    Exists,
    F,
    IntegerField,
    OuterRef,
    Prefetch,
    PositiveIntegerField,
    QuerySet,
    Value,
    When,
)
from django.utils import timezone

from modules.exchanges.models import Exchange
from modules.exchanges.repositories.django_repository import ExchangeDjangoRepository
from modules.exchanges.repositories.interfaces import IExchangeRepository
from modules.orders.constants import FIRST_REMANEIO_POSITION, OrderStatus
from modules.orders.dtos import OrderItemDTO
from modules.orders.exceptions import OrderKeyConflict
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository
from modules.orders.totals import line_total, order_total

logger = structlog.get_logger(__name__)

REMANEIO_ORDERING = (F("remaneio_position").asc(nulls_last=True), "-order_date", "-id")


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def __init__(self, exchange_repository: Optional[IExchangeRepository] = None) -> None:
        self._exchange_repo = exchange_repository or ExchangeDjangoRepository()

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its lines atomically.

        ``data`` keys:
        - ``order_key``, ``customer_id``, ``order_date``, ``status`` (required)
        - ``items`` (required): list of ``OrderItemDTO``
        - ``route_id``, ``remaneio_position``, ``user_id`` (optional)
        """
        lines = self._build_lines(data["items"])
        order = Order(
            order_key=data["order_key"],
            customer_id=data["customer_id"],
            route_id=data.get("route_id"),
            order_date=data["order_date"],
            status=data["status"],
            remaneio_position=data.get("remaneio_position"),
            total_value=order_total(line.line_total for line in lines),
            created_by_id=data.get("user_id"),
            updated_by_id=data.get("user_id"),
        )
        try:
            with transaction.atomic():
                order.save()
        except IntegrityError:
            if self.key_exists(order.order_key):
                raise OrderKeyConflict(order.order_key)
            raise

        for line in lines:
            line.order = order
        OrderItem.objects.bulk_create(lines)

        log = logger.bind(order_id=order.id, item_count=len(lines))
        log.info("order.inserted", total_value=str(order.total_value))
        return order

    def insert_items(self, order_id: int, items: Sequence[OrderItemDTO]) -> Decimal:
        lines = self._build_lines(items)
        for line in lines:
            line.order_id = order_id
        OrderItem.objects.bulk_create(lines)
        return order_total(line.line_total for line in lines)

    @transaction.atomic
    def replace_items(self, order_id: int, items: Sequence[OrderItemDTO]) -> Decimal:
        self._exchange_repo.detach_for_order(order_id)
        deleted, _ = OrderItem.objects.filter(order_id=order_id).delete()
        total = self.insert_items(order_id, items)
        logger.info(
            "order.items_replaced",
            order_id=order_id,
            removed=deleted,
            inserted=len(items),
            total_value=str(total),
        )
        return total

    @staticmethod
    def _build_lines(items: Sequence[OrderItemDTO]) -> List[OrderItem]:
        return [
            OrderItem(
                product_id=item.product_id,
                quantity=item.quantity,
                packaging=item.packaging,
                unit_price=item.unit_price,
                line_total=line_total(item.quantity, item.unit_price),
                commission=item.commission,
            )
            for item in items
        ]

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update_fields(
        self, order_id: int, fields: Dict[str, Any], user_id: Optional[int] = None
    ) -> int:
        """Single UPDATE of ``fields`` plus ``atualizado_por/atualizado_em``."""
        updated = Order.objects.filter(id=order_id).update(
            **fields,
            updated_by_id=user_id,
            updated_at=timezone.now(),
        )
        logger.info("order.updated", order_id=order_id, fields=sorted(fields))
        return updated

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _with_details(self) -> QuerySet[Order]:
        """Orders with customer, route, lines and exchange summary.

        ``select_related`` covers customer and route in the main query;
        lines and exchanges (with their products) are two batched
        prefetches, so the query count does not grow with the result size.
        """
        return (
            Order.objects.select_related("customer", "route")
            .annotate(
                has_exchanges=Exists(Exchange.objects.filter(order=OuterRef("pk"))),
                exchange_count=Count("exchanges", distinct=True),
            )
            .prefetch_related(
                Prefetch(
                    "items",
                    queryset=OrderItem.objects.select_related("product").order_by("id"),
                ),
                Prefetch(
                    "exchanges",
                    queryset=Exchange.objects.select_related("product"),
                ),
            )
        )

    def get_by_id(self, id: int) -> Optional[Order]:
        return self._with_details().filter(id=id).first()

    def get_for_update(self, id: int) -> Optional[Order]:
        return Order.objects.select_for_update().filter(id=id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Order]:
        """Orders in remaneio display order.

        CONFERIR orders with a position come first, ascending; then every
        other order by ``data DESC, id DESC``.

        Supported filter keys are plain ORM look-ups, e.g.::

            {"status": OrderStatus.AWAITING_REVIEW}
            {"order_date": date(2024, 5, 1), "route_id": 3}
        """
        queryset = self._with_details().annotate(
            remaneio_group=Case(
                When(
                    status=OrderStatus.AWAITING_REVIEW,
                    remaneio_position__isnull=False,
                    then=Value(0),
                ),
                default=Value(1),
                output_field=IntegerField(),
            )
        )
        if filters:
            queryset = queryset.filter(**filters)
        return queryset.order_by("remaneio_group", *REMANEIO_ORDERING)

    def key_exists(self, order_key: str) -> bool:
        return Order.objects.filter(order_key=order_key).exists()

    def item_exists(self, order_id: int, item_id: int) -> bool:
        return OrderItem.objects.filter(order_id=order_id, id=item_id).exists()

    # ------------------------------------------------------------------
    # Remaneio
    # ------------------------------------------------------------------

    def next_remaneio_position(self) -> int:
        positions = (
            Order.objects.select_for_update()
            .filter(status=OrderStatus.AWAITING_REVIEW)
            .values_list("remaneio_position", flat=True)
        )
        current = [position for position in positions if position is not None]
        return max(current, default=FIRST_REMANEIO_POSITION - 1) + 1

    def awaiting_review_sequence(self) -> List[int]:
        return list(
            Order.objects.select_for_update()
            .filter(status=OrderStatus.AWAITING_REVIEW)
            .order_by(*REMANEIO_ORDERING)
            .values_list("id", flat=True)
        )

    def assign_remaneio_positions(
        self, sequence: Sequence[int], user_id: Optional[int] = None
    ) -> int:
        if not sequence:
            return 0
        positions = Case(
            *[
                When(id=order_id, then=Value(position))
                for position, order_id in enumerate(sequence, start=FIRST_REMANEIO_POSITION)
            ],
            output_field=PositiveIntegerField(),
        )
        return Order.objects.filter(
            id__in=sequence, status=OrderStatus.AWAITING_REVIEW
        ).update(
            remaneio_position=positions,
            updated_by_id=user_id,
            updated_at=timezone.now(),
        )

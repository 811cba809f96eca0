"""Django ORM implementation of the Exchange repository."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.exchanges.models import Exchange
from modules.exchanges.repositories.interfaces import IExchangeRepository

logger = structlog.get_logger(__name__)


class ExchangeDjangoRepository(IExchangeRepository):
    """Concrete Exchange repository backed by Django ORM."""

    def insert(self, data: Dict[str, Any]) -> Exchange:
        exchange = Exchange.objects.create(
            order_id=data["order_id"],
            order_item_id=data.get("order_item_id"),
            product_id=data["product_id"],
            quantity=data["quantity"],
            exchange_value=data.get("exchange_value") or Decimal("0.00"),
            reason=data.get("reason"),
            created_by_id=data.get("user_id"),
        )
        logger.info(
            "exchange.inserted",
            exchange_id=exchange.id,
            order_id=exchange.order_id,
            product_id=exchange.product_id,
        )
        return exchange

    def get_by_id(self, id: int) -> Optional[Exchange]:
        return Exchange.objects.select_related("product").filter(id=id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Exchange]:
        queryset = Exchange.objects.select_related("product")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_for_order(self, order_id: int) -> List[Exchange]:
        return self.list({"order_id": order_id})

    @transaction.atomic
    def delete(self, id: int) -> bool:
        deleted, _ = Exchange.objects.filter(id=id).delete()
        if deleted:
            logger.info("exchange.deleted", exchange_id=id)
        return bool(deleted)

    def detach_for_order(self, order_id: int) -> int:
        detached = Exchange.objects.filter(
            order_id=order_id, order_item__isnull=False
        ).update(order_item=None)
        if detached:
            logger.info("exchange.detached", order_id=order_id, count=detached)
        return detached

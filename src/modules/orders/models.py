"""Order and OrderItem models.

Business rules implemented:
- ``chave_pedido`` is unique across all orders.
- Customer FK uses PROTECT: orders are never removed with their customer.
- ``valor_total`` always equals the sum of the current lines'
  ``valor_total_item`` (maintained by the service layer).
- ``ordem_remaneio`` is only set while the order is ``CONFERIR``
  (enforced by a check constraint as well as by the service layer).
- OrderItem ``valor_total_item`` is ``quantidade * valor_unitario``
  rounded half-up to cents.
- Orders are never hard-deleted; there is no delete path in the API.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.db import models

from modules.core.models import AuditedModel
from modules.orders.constants import OrderStatus
from modules.orders.totals import line_total


class Order(AuditedModel):
    """Order aggregate root.

    ``order_key`` is the business identifier shown to users; ``id`` is the
    integer key used by every API path and by the remaneio batch.
    """

    order_key: models.CharField = models.CharField(
        max_length=64, unique=True, db_column="chave_pedido"
    )
    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
        db_column="cliente_id",
    )
    route: models.ForeignKey = models.ForeignKey(
        "routes.Route",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
        db_column="rota_id",
    )
    order_date: models.DateField = models.DateField(db_column="data")
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.WAITING,
    )
    remaneio_position: models.PositiveIntegerField = models.PositiveIntegerField(
        null=True, blank=True, db_column="ordem_remaneio"
    )
    total_value: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        db_column="valor_total",
    )
    effective_value: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        db_column="valor_efetivado",
    )

    class Meta:
        db_table = "pedidos"
        indexes = [
            models.Index(
                fields=["status", "remaneio_position"],
                name="pedidos_status_ordem_idx",
            ),
            models.Index(fields=["-order_date", "-id"], name="pedidos_data_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                check=models.Q(remaneio_position__isnull=True)
                | models.Q(status=OrderStatus.AWAITING_REVIEW),
                name="pedidos_ordem_remaneio_only_conferir",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_key} ({self.status})"


class OrderItem(models.Model):
    """Line item linking an Order to a Product.

    ``unit_price`` is the price agreed for this order and does not follow
    later catalog changes.  ``line_total`` is recalculated on every save;
    bulk inserts compute it through ``modules.orders.totals`` beforehand.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
        db_column="pedido_id",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
        db_column="produto_id",
    )
    quantity: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=3, db_column="quantidade"
    )
    packaging: models.CharField = models.CharField(
        max_length=50, null=True, blank=True, db_column="embalagem"
    )
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, db_column="valor_unitario"
    )
    line_total: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, editable=False, db_column="valor_total_item"
    )
    commission: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        db_column="comissao",
    )

    class Meta:
        db_table = "itens_pedido"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                check=models.Q(quantity__gt=0),
                name="itens_pedido_quantidade_positive",
            ),
            models.CheckConstraint(
                check=models.Q(unit_price__gte=0),
                name="itens_pedido_valor_unitario_non_negative",
            ),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.line_total = line_total(self.quantity, self.unit_price)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} ({self.line_total})"

"""Exchange (troca) model.

Business rules implemented:
- An exchange always belongs to an order and names the product returned.
- The optional line reference is nulled when the line is deleted
  (``ON DELETE SET NULL``); the exchange itself survives line replacement.
- Exchanges are created and deleted, never edited.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from modules.core.models import CreationAuditModel


class Exchange(CreationAuditModel):
    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="exchanges",
        db_column="pedido_id",
    )
    order_item: models.ForeignKey = models.ForeignKey(
        "orders.OrderItem",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="exchanges",
        db_column="item_pedido_id",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="exchanges",
        db_column="produto_id",
    )
    quantity: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=3, db_column="quantidade"
    )
    exchange_value: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        db_column="valor_troca",
    )
    reason: models.TextField = models.TextField(
        null=True, blank=True, db_column="motivo"
    )

    class Meta:
        db_table = "trocas"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["order"], name="trocas_pedido_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                check=models.Q(quantity__gt=0),
                name="trocas_quantidade_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"Troca {self.pk} pedido={self.order_id} produto={self.product_id}"

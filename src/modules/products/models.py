"""Product catalog registry.

Business rules implemented:
- ``codigo_produto`` is unique.
- ``preco_base`` is only a suggestion: order lines carry their own
  ``valor_unitario`` snapshot.
- Products referenced by order lines or exchanges cannot be deleted.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from modules.core.normalization import normalize_image_url


class Product(models.Model):
    """Catalog entry sold in orders and accepted in exchanges."""

    code = models.CharField(max_length=50, unique=True, db_column="codigo_produto")
    name = models.CharField(max_length=255, db_column="nome")
    packaging = models.CharField(
        max_length=50, null=True, blank=True, db_column="embalagem"
    )
    base_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        db_column="preco_base",
    )
    image_url = models.TextField(null=True, blank=True, db_column="imagem_url")

    class Meta:
        db_table = "produtos"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                check=models.Q(base_price__gte=0),
                name="produtos_preco_base_non_negative",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        self.code = (self.code or "").strip()
        self.image_url = normalize_image_url(self.image_url)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"

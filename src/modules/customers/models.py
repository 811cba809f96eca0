"""Customer registry.

Business rules implemented:
- ``codigo_cliente`` is unique and is the prefix of generated order keys.
- A customer may belong to a default delivery route.
- Customers referenced by orders cannot be deleted (PROTECT on the order FK).
"""

from __future__ import annotations

from django.db import models

from modules.core.normalization import normalize_image_url


class Customer(models.Model):
    """Customer registry entry.

    Only ``code`` and ``name`` are read by the order core; the remaining
    columns exist for the registry and presentation screens.
    """

    code = models.CharField(max_length=50, unique=True, db_column="codigo_cliente")
    name = models.CharField(max_length=255, db_column="nome")
    route = models.ForeignKey(
        "routes.Route",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="customers",
        db_column="rota_id",
    )
    image_url = models.TextField(null=True, blank=True, db_column="imagem_url")
    link = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "clientes"
        ordering = ["name"]

    def save(self, *args, **kwargs) -> None:
        self.code = (self.code or "").strip()
        self.image_url = normalize_image_url(self.image_url)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"

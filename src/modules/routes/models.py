"""Delivery route registry.

Routes group customers for delivery; orders may carry a route that differs
from the customer's default one.  Maintained by the registry screens, the
order core only checks existence and reads the name.
"""

from __future__ import annotations

from django.db import models

from modules.core.normalization import normalize_image_url


class Route(models.Model):
    name = models.CharField(max_length=120, db_column="nome")
    image_url = models.TextField(null=True, blank=True, db_column="imagem_url")

    class Meta:
        db_table = "rotas"
        ordering = ["name"]

    def save(self, *args, **kwargs) -> None:
        self.image_url = normalize_image_url(self.image_url)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name

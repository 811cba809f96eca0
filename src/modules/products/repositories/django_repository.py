"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Methods return ``None`` (or an empty set) for missing rows; the Service
Layer decides how to report them.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Set

import structlog
from django.db import transaction

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        return Product.objects.filter(id=id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        is_new = entity._state.adding
        entity.save()
        logger.info(
            "product.saved", product_id=entity.id, code=entity.code, is_new=is_new
        )
        return entity

    def existing_ids(self, ids: Iterable[int]) -> Set[int]:
        wanted = set(ids)
        if not wanted:
            return set()
        return set(
            Product.objects.filter(id__in=wanted).values_list("id", flat=True)
        )

    def get_for_update(self, id: int) -> Optional[Product]:
        return Product.objects.select_for_update().filter(id=id).first()

"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising, and the Service Layer decides how to translate a
missing entity into a domain error.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Customer]:
        return Customer.objects.select_related("route").filter(id=id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"route_id": 3}
            {"name__icontains": "mercado"}
        """
        queryset = Customer.objects.select_related("route")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""
        is_new = entity._state.adding
        entity.save()
        logger.info("customer.saved", customer_id=entity.id, is_new=is_new)
        return entity

    def get_by_code(self, code: str) -> Optional[Customer]:
        return Customer.objects.filter(code=code.strip()).first()

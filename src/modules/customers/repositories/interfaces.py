"""Customer repository interface.

Extends ``IRepository[Customer]`` with the code look-up used when an
order key has to be generated.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer registry."""

    @abstractmethod
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""

    @abstractmethod
    def get_by_code(self, code: str) -> Optional[Customer]:
        """Retrieve a customer by ``codigo_cliente``."""

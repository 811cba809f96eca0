"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The DRF exception handler translates them into HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class ProductNotFound(NotFoundError):
    """A product referenced by an order line or exchange does not exist."""

    def __init__(self, product_id: int) -> None:
        super().__init__(
            f"Produto com id {product_id} não encontrado", attr="produto_id"
        )
        self.product_id = product_id

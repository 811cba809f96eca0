"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
``modules.core.exceptions.api_exception_handler`` translates them into
HTTP responses; views never catch them.
"""

from __future__ import annotations

from typing import List

from modules.core.exceptions import (
    ConflictError,
    InvalidSequenceError,
    NotFoundError,
)


class OrderNotFound(NotFoundError):
    """The requested order does not exist."""

    def __init__(self, order_id: int) -> None:
        super().__init__("Pedido não encontrado")
        self.order_id = order_id


class OrderItemNotFound(NotFoundError):
    """The referenced line does not belong to the order."""

    def __init__(self, item_id: int) -> None:
        super().__init__(
            f"Item {item_id} não pertence ao pedido", attr="item_pedido_id"
        )
        self.item_id = item_id


class OrderKeyConflict(ConflictError):
    """``chave_pedido`` is already used by another order."""

    def __init__(self, order_key: str) -> None:
        super().__init__("Chave do pedido já existe", attr="chave_pedido")
        self.order_key = order_key


class InvalidRemaneioSequence(InvalidSequenceError):
    """Some requested ids are not orders in ``CONFERIR``."""

    def __init__(self, invalid_ids: List[int]) -> None:
        super().__init__(
            "Um ou mais pedidos não estão no status Conferir.", invalid_ids
        )

"""Exchange domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class ExchangeNotFound(NotFoundError):
    """The requested exchange does not exist."""

    def __init__(self, exchange_id: int) -> None:
        super().__init__("Troca não encontrada")
        self.exchange_id = exchange_id

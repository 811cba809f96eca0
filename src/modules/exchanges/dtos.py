"""Exchange DTOs for the Service Layer."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateExchangeDTO(BaseModel):
    """Immutable DTO for exchange creation requests."""

    model_config = ConfigDict(frozen=True)

    order_id: int = Field(gt=0)
    order_item_id: Optional[int] = Field(default=None, gt=0)
    product_id: int = Field(gt=0)
    quantity: Decimal
    exchange_value: Decimal = Decimal("0.00")
    reason: Optional[str] = None

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("quantidade deve ser maior que zero")
        return v

    @field_validator("reason")
    @classmethod
    def blank_reason_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``OrderItemDTO``: one order line.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``ReplaceOrderDTO``: partial replacement; tracks which fields were sent.
- ``StatusTransitionDTO``: input for a status change.

Status and date fields accept raw request tokens and normalize them, so a
DTO never holds an unparsed status string.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated, Any, List, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from modules.core.normalization import normalize_date, normalize_status
from modules.orders.constants import INVALID_STATUS_MESSAGE, OrderStatus

INVALID_DATE_MESSAGE = "Use data no formato YYYY-MM-DD"


def _parse_status(value: Any) -> OrderStatus:
    parsed = normalize_status(value)
    if parsed is None:
        raise ValueError(INVALID_STATUS_MESSAGE)
    return parsed


def _parse_date(value: Any) -> date:
    parsed = normalize_date(value)
    if parsed is None:
        raise ValueError(INVALID_DATE_MESSAGE)
    return parsed


StatusValue = Annotated[OrderStatus, BeforeValidator(_parse_status)]
CalendarDate = Annotated[date, BeforeValidator(_parse_date)]


class _PresenceMixin:
    """``provided(name)`` tells an omitted field from an explicit ``None``."""

    def provided(self, field: str) -> bool:
        return field in self.model_fields_set  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class OrderItemDTO(BaseModel):
    """Immutable DTO for a single order line."""

    model_config = ConfigDict(frozen=True)

    product_id: int = Field(gt=0)
    quantity: Decimal
    unit_price: Decimal
    packaging: Optional[str] = None
    commission: Decimal = Decimal("0.00")

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("quantidade deve ser maior que zero")
        return v

    @field_validator("unit_price")
    @classmethod
    def unit_price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("valor_unitario não pode ser negativo")
        return v

    @field_validator("packaging")
    @classmethod
    def blank_packaging_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


def _require_items(items: List[OrderItemDTO]) -> List[OrderItemDTO]:
    if not items:
        raise ValueError("O pedido deve ter ao menos um item.")
    return items


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    ``order_key`` is generated by the service when omitted or blank.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: int = Field(gt=0)
    route_id: Optional[int] = Field(default=None, gt=0)
    order_date: CalendarDate
    status: StatusValue = OrderStatus.WAITING
    order_key: Optional[str] = None
    items: List[OrderItemDTO]

    @field_validator("order_key")
    @classmethod
    def blank_key_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(cls, v: List[OrderItemDTO]) -> List[OrderItemDTO]:
        return _require_items(v)


class ReplaceOrderDTO(_PresenceMixin, BaseModel):
    """Immutable DTO for ``PUT /pedidos/{id}``.

    Only fields present in ``model_fields_set`` are applied.  ``route_id``
    may be explicitly ``None`` (detach the route); the other fields may be
    omitted but never sent as ``None``.
    """

    model_config = ConfigDict(frozen=True)

    route_id: Optional[int] = Field(default=None, gt=0)
    order_date: Optional[CalendarDate] = None
    status: Optional[StatusValue] = None
    items: Optional[List[OrderItemDTO]] = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "ReplaceOrderDTO":
        for field in ("order_date", "status", "items"):
            if self.provided(field) and getattr(self, field) is None:
                raise ValueError(f"{field} não pode ser nulo")
        if self.items is not None:
            _require_items(self.items)
        return self


class StatusTransitionDTO(_PresenceMixin, BaseModel):
    """Immutable DTO for ``PATCH /pedidos/{id}/status``.

    ``effective_value`` may be explicitly ``None`` to clear it; when it is
    omitted the stored value is kept.
    """

    model_config = ConfigDict(frozen=True)

    status: StatusValue
    effective_value: Optional[Decimal] = None
    order_date: Optional[CalendarDate] = None

    @model_validator(mode="after")
    def reject_null_date(self) -> "StatusTransitionDTO":
        if self.provided("order_date") and self.order_date is None:
            raise ValueError(INVALID_DATE_MESSAGE)
        return self

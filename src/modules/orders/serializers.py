"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).  Field names
are the Portuguese names used by the web and mobile clients; ``source``
maps them onto the model / DTO attribute names.  Business logic lives in
the Service Layer, which receives Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from decimal import Decimal
from collections.abc import Mapping
from typing import Any, Optional

from rest_framework import serializers

from modules.core.normalization import normalize_date, normalize_status
from modules.orders.constants import INVALID_STATUS_MESSAGE
from modules.orders.dtos import INVALID_DATE_MESSAGE
from modules.orders.models import Order, OrderItem

# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


class StatusField(serializers.Field):
    """Accepts any spelling ``normalize_status`` understands; emits the token."""

    default_error_messages = {"invalid": INVALID_STATUS_MESSAGE}

    def to_internal_value(self, data: Any):
        status = normalize_status(data)
        if status is None:
            self.fail("invalid")
        return status

    def to_representation(self, value: Any) -> str:
        return str(value)


class CalendarDateField(serializers.Field):
    """Strict ``YYYY-MM-DD`` date."""

    default_error_messages = {"invalid": INVALID_DATE_MESSAGE}

    def to_internal_value(self, data: Any):
        parsed = normalize_date(data)
        if parsed is None:
            self.fail("invalid")
        return parsed

    def to_representation(self, value: Any) -> Optional[str]:
        return value.isoformat() if value else None


def _money(**kwargs: Any) -> serializers.DecimalField:
    return serializers.DecimalField(max_digits=12, decimal_places=2, **kwargs)


def _quantity(**kwargs: Any) -> serializers.DecimalField:
    return serializers.DecimalField(max_digits=12, decimal_places=3, **kwargs)


# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class OrderItemInputSerializer(serializers.Serializer):
    """Validates a single line of an order payload."""

    produto_id = serializers.IntegerField(min_value=1, source="product_id")
    quantidade = _quantity(source="quantity")
    valor_unitario = _money(source="unit_price", min_value=Decimal("0"))
    embalagem = serializers.CharField(
        source="packaging",
        max_length=50,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
    comissao = _money(
        source="commission",
        required=False,
        allow_null=True,
        default=Decimal("0.00"),
    )

    def validate_quantidade(self, value: Decimal) -> Decimal:
        if value <= 0:
            raise serializers.ValidationError("quantidade deve ser maior que zero")
        return value

    def validate_comissao(self, value: Optional[Decimal]) -> Decimal:
        return Decimal("0.00") if value is None else value


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation payload."""

    chave_pedido = serializers.CharField(
        source="order_key",
        max_length=64,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
    cliente_id = serializers.IntegerField(min_value=1, source="customer_id")
    rota_id = serializers.IntegerField(
        min_value=1, source="route_id", required=False, allow_null=True
    )
    data = CalendarDateField(source="order_date")
    status = StatusField(required=False)
    itens = OrderItemInputSerializer(many=True, allow_empty=False, source="items")

    def to_internal_value(self, data: Any):
        # blank or null status means the default
        if isinstance(data, Mapping) and data.get("status") in (None, ""):
            data = {key: value for key, value in data.items() if key != "status"}
        return super().to_internal_value(data)


class ReplaceOrderSerializer(serializers.Serializer):
    """Validates ``PUT /pedidos/{id}``.

    Every field is optional and only the supplied keys reach
    ``validated_data``; ``rota_id`` alone may be ``null``.
    """

    rota_id = serializers.IntegerField(
        min_value=1, source="route_id", required=False, allow_null=True
    )
    data = CalendarDateField(source="order_date", required=False)
    status = StatusField(required=False)
    itens = OrderItemInputSerializer(
        many=True, allow_empty=False, source="items", required=False
    )


class StatusTransitionSerializer(serializers.Serializer):
    """Validates ``PATCH /pedidos/{id}/status``."""

    status = StatusField(error_messages={"required": "status é obrigatório"})
    valor_efetivado = _money(
        source="effective_value", required=False, allow_null=True
    )
    data = CalendarDateField(source="order_date", required=False)


class RemaneioOrderSerializer(serializers.Serializer):
    """Shape check only; id validation belongs to the sequencer."""

    pedido_ids = serializers.ListField(
        allow_empty=True,
        error_messages={
            "required": "pedido_ids é obrigatório e deve ter ao menos 1 item.",
            "not_a_list": "pedido_ids é obrigatório e deve ter ao menos 1 item.",
            "null": "pedido_ids é obrigatório e deve ter ao menos 1 item.",
        },
    )


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order lines with product code and name."""

    quantidade = _quantity(source="quantity", read_only=True)
    embalagem = serializers.CharField(source="packaging", read_only=True)
    valor_unitario = _money(source="unit_price", read_only=True)
    valor_total_item = _money(source="line_total", read_only=True)
    comissao = _money(source="commission", read_only=True)
    produto_id = serializers.IntegerField(read_only=True)
    codigo_produto = serializers.CharField(source="product.code", read_only=True)
    produto_nome = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "quantidade",
            "embalagem",
            "valor_unitario",
            "valor_total_item",
            "comissao",
            "produto_id",
            "codigo_produto",
            "produto_nome",
        ]
        read_only_fields = fields


class OrderRowSerializer(serializers.ModelSerializer):
    """The order row alone, as returned by the status transition."""

    chave_pedido = serializers.CharField(source="order_key", read_only=True)
    data = CalendarDateField(source="order_date", read_only=True)
    status = StatusField(read_only=True)
    ordem_remaneio = serializers.IntegerField(
        source="remaneio_position", read_only=True
    )
    valor_total = _money(source="total_value", read_only=True)
    valor_efetivado = _money(source="effective_value", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "chave_pedido",
            "data",
            "status",
            "ordem_remaneio",
            "valor_total",
            "valor_efetivado",
        ]
        read_only_fields = fields


class OrderSerializer(OrderRowSerializer):
    """Order with customer/route data, exchange summary and lines.

    Expects the instance to come from the repository read path
    (annotated ``has_exchanges``/``exchange_count``, prefetched lines and
    exchanges).
    """

    tem_trocas = serializers.BooleanField(source="has_exchanges", read_only=True)
    qtd_trocas = serializers.IntegerField(source="exchange_count", read_only=True)
    nomes_trocas = serializers.SerializerMethodField()
    cliente_id = serializers.IntegerField(source="customer_id", read_only=True)
    codigo_cliente = serializers.CharField(source="customer.code", read_only=True)
    cliente_nome = serializers.CharField(source="customer.name", read_only=True)
    rota_id = serializers.IntegerField(source="route_id", read_only=True)
    rota_nome = serializers.CharField(
        source="route.name", read_only=True, default=None
    )
    itens = OrderItemSerializer(source="items", many=True, read_only=True)

    class Meta(OrderRowSerializer.Meta):
        fields = OrderRowSerializer.Meta.fields + [
            "tem_trocas",
            "qtd_trocas",
            "nomes_trocas",
            "cliente_id",
            "codigo_cliente",
            "cliente_nome",
            "rota_id",
            "rota_nome",
            "itens",
        ]
        read_only_fields = fields

    def get_nomes_trocas(self, order: Order) -> Optional[str]:
        names = sorted({exchange.product.name for exchange in order.exchanges.all()})
        return ", ".join(names) if names else None

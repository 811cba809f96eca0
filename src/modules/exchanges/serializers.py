"""Exchange DRF serializers for API input/output."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from rest_framework import serializers

from modules.exchanges.models import Exchange


class CreateExchangeSerializer(serializers.Serializer):
    """Validates ``POST /trocas``."""

    pedido_id = serializers.IntegerField(min_value=1, source="order_id")
    item_pedido_id = serializers.IntegerField(
        min_value=1, source="order_item_id", required=False, allow_null=True
    )
    produto_id = serializers.IntegerField(min_value=1, source="product_id")
    quantidade = serializers.DecimalField(
        max_digits=12, decimal_places=3, source="quantity"
    )
    valor_troca = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        source="exchange_value",
        min_value=Decimal("0"),
        required=False,
        allow_null=True,
        default=Decimal("0.00"),
    )
    motivo = serializers.CharField(
        source="reason", required=False, allow_null=True, allow_blank=True
    )

    def validate_quantidade(self, value: Decimal) -> Decimal:
        if value <= 0:
            raise serializers.ValidationError("quantidade deve ser maior que zero")
        return value

    def validate_valor_troca(self, value: Optional[Decimal]) -> Decimal:
        return Decimal("0.00") if value is None else value


class ProductSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    codigo_produto = serializers.CharField(source="code")
    nome = serializers.CharField(source="name")


class ExchangeSerializer(serializers.ModelSerializer):
    """Read serializer; expects ``product`` to be selected with the row."""

    pedido_id = serializers.IntegerField(source="order_id", read_only=True)
    item_pedido_id = serializers.IntegerField(source="order_item_id", read_only=True)
    produto_id = serializers.IntegerField(source="product_id", read_only=True)
    codigo_produto = serializers.CharField(source="product.code", read_only=True)
    produto_nome = serializers.CharField(source="product.name", read_only=True)
    produto = ProductSummarySerializer(source="product", read_only=True)
    quantidade = serializers.DecimalField(
        max_digits=12, decimal_places=3, source="quantity", read_only=True
    )
    valor_troca = serializers.DecimalField(
        max_digits=12, decimal_places=2, source="exchange_value", read_only=True
    )
    motivo = serializers.CharField(source="reason", read_only=True)
    criado_em = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Exchange
        fields = [
            "id",
            "pedido_id",
            "item_pedido_id",
            "produto_id",
            "codigo_produto",
            "produto_nome",
            "produto",
            "quantidade",
            "valor_troca",
            "motivo",
            "criado_em",
        ]
        read_only_fields = fields

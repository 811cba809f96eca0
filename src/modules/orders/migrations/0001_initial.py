from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("customers", "0001_initial"),
        ("products", "0001_initial"),
        ("routes", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, db_column="criado_em"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(auto_now=True, db_column="atualizado_em"),
                ),
                (
                    "order_key",
                    models.CharField(
                        db_column="chave_pedido", max_length=64, unique=True
                    ),
                ),
                ("order_date", models.DateField(db_column="data")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("EM_ESPERA", "Em espera"),
                            ("CONFERIR", "Conferir"),
                            ("EFETIVADO", "Efetivado"),
                            ("CANCELADO", "Cancelado"),
                        ],
                        default="EM_ESPERA",
                        max_length=20,
                    ),
                ),
                (
                    "remaneio_position",
                    models.PositiveIntegerField(
                        blank=True, db_column="ordem_remaneio", null=True
                    ),
                ),
                (
                    "total_value",
                    models.DecimalField(
                        db_column="valor_total",
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=12,
                    ),
                ),
                (
                    "effective_value",
                    models.DecimalField(
                        blank=True,
                        db_column="valor_efetivado",
                        decimal_places=2,
                        max_digits=12,
                        null=True,
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        db_column="criado_por",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "updated_by",
                    models.ForeignKey(
                        blank=True,
                        db_column="atualizado_por",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        db_column="cliente_id",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="customers.customer",
                    ),
                ),
                (
                    "route",
                    models.ForeignKey(
                        blank=True,
                        db_column="rota_id",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to="routes.route",
                    ),
                ),
            ],
            options={
                "db_table": "pedidos",
                "indexes": [
                    models.Index(
                        fields=["status", "remaneio_position"],
                        name="pedidos_status_ordem_idx",
                    ),
                    models.Index(
                        fields=["-order_date", "-id"], name="pedidos_data_idx"
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        check=models.Q(remaneio_position__isnull=True)
                        | models.Q(status="CONFERIR"),
                        name="pedidos_ordem_remaneio_only_conferir",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "quantity",
                    models.DecimalField(
                        db_column="quantidade", decimal_places=3, max_digits=12
                    ),
                ),
                (
                    "packaging",
                    models.CharField(
                        blank=True, db_column="embalagem", max_length=50, null=True
                    ),
                ),
                (
                    "unit_price",
                    models.DecimalField(
                        db_column="valor_unitario", decimal_places=2, max_digits=12
                    ),
                ),
                (
                    "line_total",
                    models.DecimalField(
                        db_column="valor_total_item",
                        decimal_places=2,
                        editable=False,
                        max_digits=12,
                    ),
                ),
                (
                    "commission",
                    models.DecimalField(
                        db_column="comissao",
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=12,
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        db_column="pedido_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        db_column="produto_id",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="order_items",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "db_table": "itens_pedido",
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        check=models.Q(quantity__gt=0),
                        name="itens_pedido_quantidade_positive",
                    ),
                    models.CheckConstraint(
                        check=models.Q(unit_price__gte=0),
                        name="itens_pedido_valor_unitario_non_negative",
                    ),
                ],
            },
        ),
    ]

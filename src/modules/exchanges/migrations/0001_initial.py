from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("orders", "0001_initial"),
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Exchange",
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
                    "quantity",
                    models.DecimalField(
                        db_column="quantidade", decimal_places=3, max_digits=12
                    ),
                ),
                (
                    "exchange_value",
                    models.DecimalField(
                        db_column="valor_troca",
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=12,
                    ),
                ),
                (
                    "reason",
                    models.TextField(blank=True, db_column="motivo", null=True),
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
                    "order",
                    models.ForeignKey(
                        db_column="pedido_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="exchanges",
                        to="orders.order",
                    ),
                ),
                (
                    "order_item",
                    models.ForeignKey(
                        blank=True,
                        db_column="item_pedido_id",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="exchanges",
                        to="orders.orderitem",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        db_column="produto_id",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="exchanges",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "db_table": "trocas",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["order"], name="trocas_pedido_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        check=models.Q(quantity__gt=0),
                        name="trocas_quantidade_positive",
                    )
                ],
            },
        ),
    ]

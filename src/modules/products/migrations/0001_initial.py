from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
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
                    "code",
                    models.CharField(
                        db_column="codigo_produto", max_length=50, unique=True
                    ),
                ),
                ("name", models.CharField(db_column="nome", max_length=255)),
                (
                    "packaging",
                    models.CharField(
                        blank=True, db_column="embalagem", max_length=50, null=True
                    ),
                ),
                (
                    "base_price",
                    models.DecimalField(
                        db_column="preco_base",
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=12,
                    ),
                ),
                (
                    "image_url",
                    models.TextField(blank=True, db_column="imagem_url", null=True),
                ),
            ],
            options={
                "db_table": "produtos",
                "ordering": ["name"],
                "constraints": [
                    models.CheckConstraint(
                        check=models.Q(base_price__gte=0),
                        name="produtos_preco_base_non_negative",
                    )
                ],
            },
        ),
    ]

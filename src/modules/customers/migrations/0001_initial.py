import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("routes", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Customer",
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
                        db_column="codigo_cliente", max_length=50, unique=True
                    ),
                ),
                ("name", models.CharField(db_column="nome", max_length=255)),
                (
                    "image_url",
                    models.TextField(blank=True, db_column="imagem_url", null=True),
                ),
                ("link", models.TextField(blank=True, null=True)),
                (
                    "route",
                    models.ForeignKey(
                        blank=True,
                        db_column="rota_id",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="customers",
                        to="routes.route",
                    ),
                ),
            ],
            options={
                "db_table": "clientes",
                "ordering": ["name"],
            },
        ),
    ]

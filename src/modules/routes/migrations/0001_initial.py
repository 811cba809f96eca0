from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Route",
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
                ("name", models.CharField(db_column="nome", max_length=120)),
                (
                    "image_url",
                    models.TextField(blank=True, db_column="imagem_url", null=True),
                ),
            ],
            options={
                "db_table": "rotas",
                "ordering": ["name"],
            },
        ),
    ]

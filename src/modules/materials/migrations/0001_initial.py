from decimal import Decimal

import django.core.validators
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Material",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("category", models.CharField(max_length=100)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=4,
                        max_digits=14,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.0001"))],
                    ),
                ),
                ("quantity", models.PositiveIntegerField(default=0)),
                ("supplier", models.CharField(blank=True, default="", max_length=255)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("AUXILIARY", "Auxiliary material"),
                            ("FINISHED", "Finished goods"),
                        ],
                        max_length=20,
                    ),
                ),
            ],
            options={
                "db_table": "materials",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["type"], name="materials_type_idx"),
                    models.Index(fields=["category"], name="materials_category_idx"),
                    models.Index(fields=["supplier"], name="materials_supplier_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(quantity__gte=0),
                        name="materials_quantity_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(price__gt=0),
                        name="materials_price_positive",
                    ),
                ],
            },
        ),
    ]

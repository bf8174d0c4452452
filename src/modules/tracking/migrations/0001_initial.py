import django.db.models.deletion
import uuid6
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("projects", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="StatusUpdate",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "author_role",
                    models.CharField(
                        choices=[
                            ("PM", "Project manager"),
                            ("AM", "Account manager"),
                            ("WAREHOUSE", "Warehouse"),
                            ("ADMIN", "Administrator"),
                            ("USER", "User"),
                        ],
                        default="USER",
                        max_length=20,
                    ),
                ),
                (
                    "status_type",
                    models.CharField(
                        choices=[
                            ("ORDER", "Order"),
                            ("PICKUP", "Pickup"),
                            ("DELIVERY", "Delivery"),
                            ("CHECK", "Check"),
                        ],
                        max_length=20,
                    ),
                ),
                ("status_value", models.CharField(blank=True, default="", max_length=100)),
                ("additional_data", models.JSONField(blank=True, null=True)),
                (
                    "author",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="status_updates",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_updates",
                        to="projects.project",
                    ),
                ),
            ],
            options={
                "db_table": "status_updates",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["project", "status_type", "-created_at"],
                        name="su_project_type_created_idx",
                    ),
                ],
            },
        ),
    ]

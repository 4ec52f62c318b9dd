import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Table",
            fields=[
                ("table_id", models.CharField(max_length=50, primary_key=True, serialize=False)),
                ("name", models.CharField(blank=True, max_length=100)),
                ("number", models.PositiveIntegerField(default=0)),
                ("capacity", models.PositiveIntegerField(default=2)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Available", "Available"),
                            ("Occupied", "Occupied"),
                            ("Reserved", "Reserved"),
                            ("Not Available", "Not Available"),
                        ],
                        db_index=True,
                        default="Available",
                        max_length=20,
                    ),
                ),
                ("current_customer_id", models.CharField(blank=True, max_length=50, null=True)),
                ("current_transaction_id", models.CharField(blank=True, max_length=50, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Table",
                "verbose_name_plural": "Tables",
                "ordering": ["number"],
            },
        ),
        migrations.CreateModel(
            name="Seat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("seat_number", models.PositiveIntegerField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Available", "Available"),
                            ("Occupied", "Occupied"),
                            ("Reserved", "Reserved"),
                            ("Not Available", "Not Available"),
                        ],
                        default="Available",
                        max_length=20,
                    ),
                ),
                ("customer_id", models.CharField(blank=True, max_length=50, null=True)),
                (
                    "table",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="seats",
                        to="tables.table",
                    ),
                ),
            ],
            options={
                "ordering": ["table", "seat_number"],
                "constraints": [
                    models.UniqueConstraint(fields=("table", "seat_number"), name="unique_seat_number_per_table")
                ],
            },
        ),
    ]

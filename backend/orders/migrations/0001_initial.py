import django.core.serializers.json
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("staff", "0001_initial"),
        ("tables", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="WaitingTransaction",
            fields=[
                ("transaction_id", models.CharField(max_length=50, primary_key=True, serialize=False)),
                ("customer_id", models.CharField(blank=True, max_length=50, null=True)),
                ("table_number", models.PositiveIntegerField(blank=True, null=True)),
                ("table_name", models.CharField(blank=True, max_length=100)),
                (
                    "status",
                    models.CharField(
                        choices=[("Pending", "Pending"), ("Completed", "Completed"), ("Cancelled", "Cancelled")],
                        db_index=True,
                        default="Pending",
                        max_length=20,
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                (
                    "items",
                    models.JSONField(blank=True, default=list, encoder=django.core.serializers.json.DjangoJSONEncoder),
                ),
                ("is_refired", models.BooleanField(default=False)),
                ("refire_reason", models.CharField(blank=True, max_length=200)),
                ("refired_at", models.DateTimeField(blank=True, null=True)),
                ("refired_by_name", models.CharField(blank=True, max_length=200)),
                (
                    "refired_item_indices",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Indices of the refired items; empty means the whole order",
                    ),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("modified_at", models.DateTimeField(auto_now=True)),
                (
                    "refired_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="refired_transactions",
                        to="staff.staff",
                    ),
                ),
                (
                    "staff",
                    models.ForeignKey(
                        blank=True,
                        help_text="Server currently responsible for the order",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="waiting_transactions",
                        to="staff.staff",
                    ),
                ),
                (
                    "table",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="waiting_transactions",
                        to="tables.table",
                    ),
                ),
            ],
            options={
                "verbose_name": "Waiting Transaction",
                "verbose_name_plural": "Waiting Transactions",
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["staff", "status"], name="orders_wait_staff_i_3c1f0a_idx"),
                    models.Index(fields=["table", "status"], name="orders_wait_table_i_8d2b4e_idx"),
                ],
            },
        ),
    ]

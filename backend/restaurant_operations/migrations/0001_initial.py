import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


def bill_request_fields():
    return [
        ("request_id", models.CharField(max_length=50, primary_key=True, serialize=False)),
        ("staff_name", models.CharField(max_length=200)),
        ("table_id", models.CharField(blank=True, max_length=50, null=True)),
        ("table_name", models.CharField(blank=True, max_length=100, null=True)),
        ("requested_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
        (
            "status",
            models.CharField(
                choices=[("Pending", "Pending"), ("Completed", "Completed"), ("Cancelled", "Cancelled")],
                db_index=True,
                default="Pending",
                max_length=20,
            ),
        ),
        ("notes", models.CharField(blank=True, max_length=200, null=True)),
        ("completed_at", models.DateTimeField(blank=True, null=True)),
        ("completed_by", models.CharField(blank=True, max_length=100, null=True)),
        (
            "staff",
            models.ForeignKey(
                on_delete=django.db.models.deletion.PROTECT,
                related_name="+",
                to="staff.staff",
            ),
        ),
        (
            "transaction",
            models.ForeignKey(
                on_delete=django.db.models.deletion.PROTECT,
                related_name="+",
                to="orders.waitingtransaction",
            ),
        ),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("orders", "0001_initial"),
        ("staff", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PrintBillRequest",
            fields=bill_request_fields(),
            options={
                "verbose_name": "Print Bill Request",
                "verbose_name_plural": "Print Bill Requests",
                "ordering": ["requested_at"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "Pending")),
                        fields=("transaction",),
                        name="unique_pending_print_bill_per_transaction",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="PayEntireBillRequest",
            fields=bill_request_fields(),
            options={
                "verbose_name": "Pay Entire Bill Request",
                "verbose_name_plural": "Pay Entire Bill Requests",
                "ordering": ["requested_at"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "Pending")),
                        fields=("transaction",),
                        name="unique_pending_pay_entire_bill_per_transaction",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="TaxAdjustmentAuditLog",
            fields=[
                ("audit_id", models.CharField(max_length=50, primary_key=True, serialize=False)),
                ("staff_name", models.CharField(max_length=200)),
                ("action", models.CharField(choices=[("Remove", "Remove")], default="Remove", max_length=20)),
                ("apply_to", models.CharField(choices=[("Order", "Order")], default="Order", max_length=20)),
                ("original_tax_amount", models.DecimalField(decimal_places=4, max_digits=14)),
                ("new_tax_amount", models.DecimalField(decimal_places=4, default=0, max_digits=14)),
                ("reason", models.CharField(max_length=200)),
                ("timestamp", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                (
                    "staff",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="tax_adjustments",
                        to="staff.staff",
                    ),
                ),
                (
                    "transaction",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="tax_adjustments",
                        to="orders.waitingtransaction",
                    ),
                ),
            ],
            options={
                "verbose_name": "Tax Adjustment Audit Log",
                "verbose_name_plural": "Tax Adjustment Audit Log",
                "ordering": ["timestamp"],
            },
        ),
    ]

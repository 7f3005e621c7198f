import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SavedCalculation",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "tool_slug",
                    models.CharField(
                        choices=[
                            ("vat-calculator", "VAT Calculator"),
                            ("import-duty-estimator", "Import Duty Estimator"),
                            ("fba-storage-calculator", "FBA Storage Calculator"),
                            ("discount-impact-simulator", "Discount Impact Simulator"),
                            ("safety-stock-calculator", "Safety Stock Calculator"),
                            ("shipping-comparator", "Shipping Comparator"),
                            ("size-converter", "Size Converter"),
                            ("weight-converter", "Weight Converter"),
                        ],
                        db_index=True,
                        max_length=50,
                    ),
                ),
                ("title", models.CharField(blank=True, default="", max_length=200)),
                ("inputs", models.JSONField(default=dict)),
                ("outputs", models.JSONField(default=dict)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]

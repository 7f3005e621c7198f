"""
Django ORM models for persistence.
Infrastructure layer: how saved calculations are stored.
"""

import uuid
from django.db import models


class BaseModel(models.Model):

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class ToolSlug(models.TextChoices):
    """
    Calculators whose results can be saved.
    To add a new tool:
    1. Add an entry here
    2. Expose its calculator in api/v1/views.py
    """

    VAT = "vat-calculator", "VAT Calculator"
    IMPORT_DUTY = "import-duty-estimator", "Import Duty Estimator"
    FBA_STORAGE = "fba-storage-calculator", "FBA Storage Calculator"
    DISCOUNT_IMPACT = "discount-impact-simulator", "Discount Impact Simulator"
    SAFETY_STOCK = "safety-stock-calculator", "Safety Stock Calculator"
    SHIPPING = "shipping-comparator", "Shipping Comparator"
    SIZE_CONVERTER = "size-converter", "Size Converter"
    WEIGHT_CONVERTER = "weight-converter", "Weight Converter"


class SavedCalculation(BaseModel):

    tool_slug = models.CharField(
        max_length=50,
        choices=ToolSlug.choices,
        db_index=True,
    )
    title = models.CharField(max_length=200, blank=True, default="")
    inputs = models.JSONField(default=dict)
    outputs = models.JSONField(default=dict)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        label = self.title or self.get_tool_slug_display()
        return f"{label} | {self.created_at:%Y-%m-%d %H:%M}" if self.created_at else label

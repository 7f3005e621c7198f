from datetime import timedelta

from django.utils import timezone

from apps.calculators.infrastructure.persistence.models import SavedCalculation, ToolSlug


def create_calculation(tool_slug=ToolSlug.VAT, title="", age_days=0, **kwargs):
    """Create a saved calculation whose created_at lies ``age_days`` in the past."""
    calculation = SavedCalculation.objects.create(
        tool_slug=tool_slug,
        title=title,
        inputs=kwargs.get("inputs", {"amount": "100", "mode": "add"}),
        outputs=kwargs.get("outputs", {"total_with_vat": "115"}),
    )
    if age_days:
        SavedCalculation.objects.filter(pk=calculation.pk).update(
            created_at=timezone.now() - timedelta(days=age_days)
        )
        calculation.refresh_from_db()
    return calculation

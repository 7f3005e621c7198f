"""
Repository pattern implementation.
Abstracts database access to decouple domain logic from persistence.
"""

from typing import Optional

from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.calculators.application.dto import CalculationPageDTO, SavedCalculationDTO
from apps.calculators.infrastructure.persistence.models import SavedCalculation


def _to_dto(calculation: SavedCalculation) -> SavedCalculationDTO:
    return SavedCalculationDTO(
        id=str(calculation.id),
        tool_slug=calculation.tool_slug,
        title=calculation.title,
        inputs=calculation.inputs,
        outputs=calculation.outputs,
        created_at=calculation.created_at,
    )


class SavedCalculationRepository:
    """Repository for SavedCalculation aggregate."""

    @staticmethod
    def get_by_id(calculation_id) -> Optional[SavedCalculation]:
        """Get a saved calculation by primary key."""
        try:
            return SavedCalculation.objects.get(pk=calculation_id)
        except (SavedCalculation.DoesNotExist, ValidationError):
            return None

    @staticmethod
    def create(tool_slug: str, inputs: dict, outputs: dict, title: str = "") -> SavedCalculation:
        """Save a calculation."""
        return SavedCalculation.objects.create(
            tool_slug=tool_slug,
            title=title,
            inputs=inputs,
            outputs=outputs,
        )

    @staticmethod
    def get_page(page: int = 1, page_size: int = 10, tool_slug: Optional[str] = None) -> CalculationPageDTO:
        """Newest-first page of saved calculations, optionally for one tool."""
        queryset = SavedCalculation.objects.all()
        if tool_slug:
            queryset = queryset.filter(tool_slug=tool_slug)

        total = queryset.count()
        offset = (page - 1) * page_size
        items = [_to_dto(c) for c in queryset[offset:offset + page_size]]

        return CalculationPageDTO(items=items, total=total, page=page, page_size=page_size)

    @staticmethod
    def delete(calculation: SavedCalculation) -> None:
        calculation.delete()

    @staticmethod
    def delete_older_than(days: int) -> int:
        """Delete saved calculations created more than ``days`` days ago."""
        cutoff = timezone.now() - timezone.timedelta(days=days)
        deleted, _ = SavedCalculation.objects.filter(created_at__lt=cutoff).delete()
        return deleted

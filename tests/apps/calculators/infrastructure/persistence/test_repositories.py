import uuid

import pytest

from apps.calculators.infrastructure.persistence.models import SavedCalculation, ToolSlug
from apps.calculators.infrastructure.persistence.repositories import SavedCalculationRepository
from tests.apps.calculators.factories import create_calculation


@pytest.mark.django_db
class TestSavedCalculationRepository:
    """Tests for SavedCalculationRepository."""

    def test_create_and_get(self):
        created = SavedCalculationRepository.create(
            tool_slug=ToolSlug.IMPORT_DUTY,
            inputs={"fob_value": "1000"},
            outputs={"total_landed_cost": "1388.625"},
            title="Laptops to Riyadh",
        )

        fetched = SavedCalculationRepository.get_by_id(created.id)

        assert fetched == created
        assert fetched.outputs["total_landed_cost"] == "1388.625"
        assert str(fetched).startswith("Laptops to Riyadh | ")

    def test_get_missing_or_malformed_id(self):
        assert SavedCalculationRepository.get_by_id(uuid.uuid4()) is None
        assert SavedCalculationRepository.get_by_id("not-a-uuid") is None

    def test_get_page_is_newest_first(self):
        oldest = create_calculation(title="oldest", age_days=3)
        middle = create_calculation(title="middle", age_days=2)
        newest = create_calculation(title="newest", age_days=1)

        first = SavedCalculationRepository.get_page(page=1, page_size=2)
        second = SavedCalculationRepository.get_page(page=2, page_size=2)

        assert first.total == 3
        assert first.total_pages == 2
        assert [item.id for item in first.items] == [str(newest.id), str(middle.id)]
        assert [item.id for item in second.items] == [str(oldest.id)]

    def test_get_page_filters_by_tool(self):
        create_calculation(tool_slug=ToolSlug.VAT)
        create_calculation(tool_slug=ToolSlug.SAFETY_STOCK)

        page = SavedCalculationRepository.get_page(tool_slug=ToolSlug.SAFETY_STOCK)

        assert page.total == 1
        assert page.items[0].tool_slug == ToolSlug.SAFETY_STOCK

    def test_page_past_the_end_is_empty(self):
        create_calculation()

        page = SavedCalculationRepository.get_page(page=5, page_size=10)

        assert page.items == []
        assert page.total == 1

    def test_delete(self):
        calculation = create_calculation()

        SavedCalculationRepository.delete(calculation)

        assert SavedCalculation.objects.count() == 0

    def test_delete_older_than(self):
        create_calculation(age_days=91)
        create_calculation(age_days=89)

        deleted = SavedCalculationRepository.delete_older_than(90)

        assert deleted == 1
        assert SavedCalculation.objects.count() == 1

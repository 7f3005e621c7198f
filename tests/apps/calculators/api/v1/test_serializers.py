from decimal import Decimal

import pytest

from apps.calculators.api.v1.serializers import (
    SafetyStockQuerySerializer,
    SavedCalculationSerializer,
    VATQuerySerializer,
)


class TestQuerySerializers:
    """Tests for tool query-parameter serializers."""

    def test_vat_query(self):
        serializer = VATQuerySerializer(data={"amount": "99.95", "mode": "add"})

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data == {"amount": Decimal("99.95"), "mode": "add"}

    @pytest.mark.parametrize("data", [
        {"mode": "add"},
        {"amount": "abc", "mode": "add"},
        {"amount": "NaN", "mode": "add"},
        {"amount": "10", "mode": "double"},
        {"amount": "10", "mode": "add", "country": "france"},
    ])
    def test_vat_query_rejects(self, data):
        assert not VATQuerySerializer(data=data).is_valid()

    def test_safety_stock_optional_fields(self):
        serializer = SafetyStockQuerySerializer(data={"average_daily_sales": "10", "lead_time_days": "7"})

        assert serializer.is_valid(), serializer.errors
        assert "current_stock" not in serializer.validated_data


@pytest.mark.django_db
class TestSavedCalculationSerializer:

    def test_valid(self):
        serializer = SavedCalculationSerializer(data={
            "tool_slug": "vat-calculator",
            "title": "  March invoices  ",
            "inputs": {"amount": "100"},
            "outputs": {"total_with_vat": "115"},
        })

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["title"] == "March invoices"

    def test_rejects_unknown_tool(self):
        serializer = SavedCalculationSerializer(data={"tool_slug": "tax-evader", "inputs": {}, "outputs": {}})

        assert not serializer.is_valid()
        assert "tool_slug" in serializer.errors

    def test_rejects_non_object_inputs(self):
        serializer = SavedCalculationSerializer(data={"tool_slug": "vat-calculator", "inputs": [1, 2], "outputs": {}})

        assert not serializer.is_valid()
        assert "inputs" in serializer.errors

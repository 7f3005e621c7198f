"""
Serializers for the calculators bounded context.
Query-parameter serializers check types and choices; range rules live in
domain/validation.py.
"""

from rest_framework import serializers

from apps.calculators.domain.conversions import SizeCategory, SizeSystem, WeightUnit
from apps.calculators.domain.models import Country, ProductCategory, SizeTier, VATMode
from apps.calculators.domain.validation import MAX_STORAGE_MONTHS
from apps.calculators.infrastructure.persistence.models import SavedCalculation


def _choices(enum_cls):
    return [member.value for member in enum_cls]


def _number(**kwargs):
    return serializers.DecimalField(max_digits=None, decimal_places=None, **kwargs)


class VATQuerySerializer(serializers.Serializer):
    amount = _number()
    mode = serializers.ChoiceField(choices=_choices(VATMode))
    country = serializers.ChoiceField(choices=_choices(Country), required=False)


class ImportDutyQuerySerializer(serializers.Serializer):
    fob_value = _number()
    destination_country = serializers.ChoiceField(choices=_choices(Country))
    product_category = serializers.ChoiceField(choices=_choices(ProductCategory))
    shipping_cost = _number(required=False)
    insurance_cost = _number(required=False)


class FBAStorageQuerySerializer(serializers.Serializer):
    length = _number()
    width = _number()
    height = _number()
    units = serializers.IntegerField()
    storage_duration_months = serializers.IntegerField(max_value=MAX_STORAGE_MONTHS)
    size_tier = serializers.ChoiceField(choices=_choices(SizeTier))
    start_month = serializers.IntegerField(required=False)


class DiscountImpactQuerySerializer(serializers.Serializer):
    original_price = _number()
    product_cost = _number()
    discount_percentage = _number()
    current_monthly_sales = _number()


class SafetyStockQuerySerializer(serializers.Serializer):
    average_daily_sales = _number()
    lead_time_days = serializers.IntegerField()
    safety_days = serializers.IntegerField(required=False)
    current_stock = _number(required=False)
    today = serializers.DateField(required=False)


class ShippingQuerySerializer(serializers.Serializer):
    weight = _number()
    length = _number()
    width = _number()
    height = _number()
    origin_region = serializers.CharField()
    destination_region = serializers.CharField()


class SizeConvertQuerySerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=_choices(SizeCategory))
    source_system = serializers.ChoiceField(choices=_choices(SizeSystem))
    size = serializers.CharField()


class SizeRecommendQuerySerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=_choices(SizeCategory))
    chest = _number(required=False)
    waist = _number(required=False)
    hip = _number(required=False)
    foot_length = _number(required=False)


class WeightConvertQuerySerializer(serializers.Serializer):
    value = _number()
    unit = serializers.ChoiceField(choices=_choices(WeightUnit))


class SavedCalculationSerializer(serializers.ModelSerializer):
    tool_name = serializers.CharField(
        source="get_tool_slug_display",
        read_only=True,
    )

    class Meta:
        model = SavedCalculation
        fields = ["id", "tool_slug", "tool_name", "title", "inputs", "outputs", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_title(self, value: str) -> str:
        return value.strip()

    def validate_inputs(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("inputs must be a JSON object.")
        return value

    def validate_outputs(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("outputs must be a JSON object.")
        return value

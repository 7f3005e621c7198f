"""
Input normalization for the calculators.

Each ``normalize_*`` function takes loosely typed caller input (form values,
query parameters, JSON numbers) and returns either a fully defaulted,
validated input dataclass or None. None means "no result": the caller should
prompt for input rather than report an error.
"""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from django.utils import timezone

from apps.calculators.domain.models import (
    Country,
    DiscountImpactInput,
    FBAStorageInput,
    ImportDutyInput,
    ProductCategory,
    SafetyStockInput,
    ShippingInput,
    SizeTier,
    VATInput,
    VATMode,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

DEFAULT_SAFETY_DAYS = 7

# Ten years of monthly breakdown rows
MAX_STORAGE_MONTHS = 120

# Anything this large is a typo, and would overflow the unit conversions
MAX_MAGNITUDE = Decimal("1e15")


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Parse a finite number.

    Accepts int, float, Decimal and numeric strings. Returns None for blanks,
    booleans, NaN, infinities, magnitudes of MAX_MAGNITUDE or more and
    anything unparseable.
    """
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = str(value)
    try:
        number = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not number.is_finite() or abs(number) >= MAX_MAGNITUDE:
        return None
    return number


def non_negative(value: Any) -> Optional[Decimal]:
    number = to_decimal(value)
    if number is None or number < 0:
        return None
    return number


def positive(value: Any) -> Optional[Decimal]:
    number = to_decimal(value)
    if number is None or number <= 0:
        return None
    return number


def percentage(value: Any) -> Optional[Decimal]:
    number = non_negative(value)
    if number is None or number > 100:
        return None
    return number


def whole_number(value: Any, minimum: int = 1) -> Optional[int]:
    """Parse an integral value that is at least ``minimum`` (3, "3" and 3.0 all pass)."""
    number = to_decimal(value)
    if number is None or number != number.to_integral_value() or number < minimum:
        return None
    return int(number)


def to_enum(enum_cls: Type[E], value: Any) -> Optional[E]:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _reject(calculator: str, field: str) -> None:
    logger.debug("%s: rejected input field %r", calculator, field)
    return None


def normalize_vat(amount: Any, mode: Any, country: Any = None) -> Optional[VATInput]:
    parsed_amount = non_negative(amount)
    if parsed_amount is None:
        return _reject("vat", "amount")
    parsed_mode = to_enum(VATMode, mode)
    if parsed_mode is None:
        return _reject("vat", "mode")
    parsed_country = Country.SAUDI if is_blank(country) else to_enum(Country, country)
    if parsed_country is None:
        return _reject("vat", "country")
    return VATInput(amount=parsed_amount, mode=parsed_mode, country=parsed_country)


def normalize_import_duty(
    fob_value: Any,
    destination_country: Any,
    product_category: Any,
    shipping_cost: Any = None,
    insurance_cost: Any = None,
) -> Optional[ImportDutyInput]:
    fob = non_negative(fob_value)
    if fob is None:
        return _reject("import_duty", "fob_value")

    shipping = Decimal("0") if is_blank(shipping_cost) else non_negative(shipping_cost)
    if shipping is None:
        return _reject("import_duty", "shipping_cost")

    insurance = Decimal("0") if is_blank(insurance_cost) else non_negative(insurance_cost)
    if insurance is None:
        return _reject("import_duty", "insurance_cost")

    country = to_enum(Country, destination_country)
    if country is None:
        return _reject("import_duty", "destination_country")

    category = to_enum(ProductCategory, product_category)
    if category is None:
        return _reject("import_duty", "product_category")

    return ImportDutyInput(
        fob_value=fob,
        shipping_cost=shipping,
        insurance_cost=insurance,
        destination_country=country,
        product_category=category,
    )


def normalize_fba_storage(
    length: Any,
    width: Any,
    height: Any,
    units: Any,
    storage_duration_months: Any,
    size_tier: Any,
    start_month: Any = None,
) -> Optional[FBAStorageInput]:
    dimensions = {"length": positive(length), "width": positive(width), "height": positive(height)}
    for name, parsed in dimensions.items():
        if parsed is None:
            return _reject("fba_storage", name)

    parsed_units = whole_number(units)
    if parsed_units is None:
        return _reject("fba_storage", "units")

    duration = whole_number(storage_duration_months)
    if duration is None or duration > MAX_STORAGE_MONTHS:
        return _reject("fba_storage", "storage_duration_months")

    tier = to_enum(SizeTier, size_tier)
    if tier is None:
        return _reject("fba_storage", "size_tier")

    month = 1 if is_blank(start_month) else whole_number(start_month)
    if month is None or month > 12:
        return _reject("fba_storage", "start_month")

    return FBAStorageInput(
        length=dimensions["length"],
        width=dimensions["width"],
        height=dimensions["height"],
        units=parsed_units,
        storage_duration_months=duration,
        size_tier=tier,
        start_month=month,
    )


def normalize_discount_impact(
    original_price: Any,
    product_cost: Any,
    discount_percentage: Any,
    current_monthly_sales: Any,
) -> Optional[DiscountImpactInput]:
    price = positive(original_price)
    if price is None:
        return _reject("discount_impact", "original_price")
    cost = non_negative(product_cost)
    if cost is None:
        return _reject("discount_impact", "product_cost")
    discount = percentage(discount_percentage)
    if discount is None:
        return _reject("discount_impact", "discount_percentage")
    sales = non_negative(current_monthly_sales)
    if sales is None:
        return _reject("discount_impact", "current_monthly_sales")

    return DiscountImpactInput(
        original_price=price,
        product_cost=cost,
        discount_percentage=discount,
        current_monthly_sales=sales,
    )


def normalize_safety_stock(
    average_daily_sales: Any,
    lead_time_days: Any,
    safety_days: Any = None,
    current_stock: Any = None,
    today: Optional[date] = None,
) -> Optional[SafetyStockInput]:
    daily_sales = non_negative(average_daily_sales)
    if daily_sales is None:
        return _reject("safety_stock", "average_daily_sales")

    lead_time = whole_number(lead_time_days)
    if lead_time is None:
        return _reject("safety_stock", "lead_time_days")

    safety = DEFAULT_SAFETY_DAYS if is_blank(safety_days) else whole_number(safety_days, minimum=0)
    if safety is None:
        return _reject("safety_stock", "safety_days")

    stock = None
    if not is_blank(current_stock):
        stock = non_negative(current_stock)
        if stock is None:
            return _reject("safety_stock", "current_stock")

    return SafetyStockInput(
        average_daily_sales=daily_sales,
        lead_time_days=lead_time,
        safety_days=safety,
        current_stock=stock,
        today=today or timezone.localdate(),
    )


def normalize_shipping(
    weight: Any,
    length: Any,
    width: Any,
    height: Any,
    origin_region: Any,
    destination_region: Any,
) -> Optional[ShippingInput]:
    measures = {
        "weight": positive(weight),
        "length": positive(length),
        "width": positive(width),
        "height": positive(height),
    }
    for name, parsed in measures.items():
        if parsed is None:
            return _reject("shipping", name)

    regions = {"origin_region": origin_region, "destination_region": destination_region}
    for name, region in regions.items():
        if not isinstance(region, str) or is_blank(region):
            return _reject("shipping", name)

    return ShippingInput(
        weight=measures["weight"],
        length=measures["length"],
        width=measures["width"],
        height=measures["height"],
        origin_region=origin_region.strip(),
        destination_region=destination_region.strip(),
    )

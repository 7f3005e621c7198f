"""
Size and weight conversion tables.

The charts are static data. The only logic here is row lookup,
range-containment search and the nearest-match fallback.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from apps.calculators.domain.validation import positive, to_enum


class SizeCategory(str, Enum):
    MEN_CLOTHING = "men-clothing"
    WOMEN_CLOTHING = "women-clothing"
    KIDS_CLOTHING = "kids-clothing"
    SHOES = "shoes"


class SizeSystem(str, Enum):
    CN = "CN"
    US = "US"
    EU = "EU"
    UK = "UK"


class MatchConfidence(str, Enum):
    EXACT = "exact"
    APPROXIMATE = "approximate"


class WeightUnit(str, Enum):
    GRAM = "g"
    OUNCE = "oz"
    POUND = "lb"
    KILOGRAM = "kg"


class ShippingWeightTier(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


Range = tuple[Decimal, Decimal]


@dataclass(frozen=True)
class SizeRow:
    """One size across all four systems, plus its body measurements in cm."""
    cn: str
    us: str
    eu: str
    uk: str
    chest: Optional[Range] = None
    waist: Optional[Range] = None
    hip: Optional[Range] = None
    foot_length: Optional[Decimal] = None

    def label(self, system: SizeSystem) -> str:
        return getattr(self, system.value.lower())

    def labels(self) -> dict[str, str]:
        return {system.value: self.label(system) for system in SizeSystem}


def _r(low: str, high: str) -> Range:
    return Decimal(low), Decimal(high)


SIZE_CHARTS: dict[SizeCategory, tuple[SizeRow, ...]] = {
    SizeCategory.MEN_CLOTHING: (
        SizeRow("S", "XS", "44", "34", chest=_r("86", "91"), waist=_r("71", "76")),
        SizeRow("M", "S", "46", "36", chest=_r("91", "96"), waist=_r("76", "81")),
        SizeRow("L", "M", "48", "38", chest=_r("96", "101"), waist=_r("81", "86")),
        SizeRow("XL", "L", "50", "40", chest=_r("101", "106"), waist=_r("86", "91")),
        SizeRow("XXL", "XL", "52", "42", chest=_r("106", "111"), waist=_r("91", "96")),
        SizeRow("XXXL", "XXL", "54", "44", chest=_r("111", "116"), waist=_r("96", "101")),
    ),
    SizeCategory.WOMEN_CLOTHING: (
        SizeRow("S", "2-4", "34-36", "6-8", chest=_r("80", "84"), waist=_r("60", "64"), hip=_r("86", "90")),
        SizeRow("M", "6-8", "38-40", "10-12", chest=_r("84", "88"), waist=_r("64", "68"), hip=_r("90", "94")),
        SizeRow("L", "10-12", "42-44", "14-16", chest=_r("88", "92"), waist=_r("68", "72"), hip=_r("94", "98")),
        SizeRow("XL", "14-16", "46-48", "18-20", chest=_r("92", "96"), waist=_r("72", "76"), hip=_r("98", "102")),
        SizeRow("XXL", "18-20", "50-52", "22-24", chest=_r("96", "100"), waist=_r("76", "80"), hip=_r("102", "106")),
    ),
    SizeCategory.KIDS_CLOTHING: (
        SizeRow("100", "3T", "98", "3-4", chest=_r("52", "54"), waist=_r("48", "50")),
        SizeRow("110", "4T", "104", "4-5", chest=_r("54", "56"), waist=_r("50", "52")),
        SizeRow("120", "5-6", "116", "5-6", chest=_r("56", "60"), waist=_r("52", "54")),
        SizeRow("130", "7-8", "128", "7-8", chest=_r("60", "64"), waist=_r("54", "56")),
        SizeRow("140", "10-12", "140", "9-10", chest=_r("64", "68"), waist=_r("56", "58")),
        SizeRow("150", "14", "152", "11-12", chest=_r("68", "72"), waist=_r("58", "60")),
        SizeRow("160", "16", "164", "13-14", chest=_r("72", "76"), waist=_r("60", "62")),
    ),
    SizeCategory.SHOES: tuple(
        SizeRow(cn, us, eu, uk, foot_length=Decimal(foot))
        for cn, us, eu, uk, foot in (
            ("35", "4", "35", "2.5", "22.5"),
            ("36", "4.5", "36", "3", "23"),
            ("37", "5", "37", "3.5", "23.5"),
            ("38", "5.5", "38", "4", "24"),
            ("39", "6", "39", "5", "24.5"),
            ("40", "7", "40", "6", "25.5"),
            ("41", "8", "41", "7", "26"),
            ("42", "9", "42", "8", "27"),
            ("43", "10", "43", "9", "27.5"),
            ("44", "11", "44", "10", "28.5"),
            ("45", "12", "45", "11", "29.5"),
        )
    ),
}

# A foot length within this many cm of a chart value counts as an exact fit
SHOE_EXACT_TOLERANCE_CM = Decimal("0.5")

CLOTHING_MEASUREMENTS = ("chest", "waist", "hip")


@dataclass(frozen=True)
class SizeConversionResult:
    category: SizeCategory
    sizes: dict[str, str]
    chest: Optional[Range] = None
    waist: Optional[Range] = None
    hip: Optional[Range] = None
    foot_length: Optional[Decimal] = None


@dataclass(frozen=True)
class SizeRecommendation:
    recommended_size: str
    system: SizeSystem
    confidence: MatchConfidence
    sizes: dict[str, str]
    measurement: str


def _find_row(category: SizeCategory, system: SizeSystem, size: str) -> Optional[SizeRow]:
    for row in SIZE_CHARTS[category]:
        if row.label(system) == size:
            return row
    return None


def convert_size(category, source_system, size) -> Optional[SizeConversionResult]:
    """
    Convert a size label from one system to all four.

    Returns None for an unknown category, system or size.
    """
    parsed_category = to_enum(SizeCategory, category)
    parsed_system = to_enum(SizeSystem, source_system)
    if parsed_category is None or parsed_system is None:
        return None
    if not isinstance(size, str) or not size.strip():
        return None

    row = _find_row(parsed_category, parsed_system, size.strip())
    if row is None:
        return None

    return SizeConversionResult(
        category=parsed_category,
        sizes=row.labels(),
        chest=row.chest,
        waist=row.waist,
        hip=row.hip,
        foot_length=row.foot_length,
    )


def _distance_to_range(value: Decimal, bounds: Range) -> Decimal:
    low, high = bounds
    if value < low:
        return low - value
    if value > high:
        return value - high
    return Decimal("0")


def _recommend_shoe(rows: tuple[SizeRow, ...], foot_length: Decimal) -> SizeRecommendation:
    best = min(rows, key=lambda row: abs(row.foot_length - foot_length))
    difference = abs(best.foot_length - foot_length)
    confidence = MatchConfidence.EXACT if difference <= SHOE_EXACT_TOLERANCE_CM else MatchConfidence.APPROXIMATE
    return SizeRecommendation(
        recommended_size=best.cn,
        system=SizeSystem.CN,
        confidence=confidence,
        sizes=best.labels(),
        measurement="foot_length",
    )


def recommend_size(category, chest=None, waist=None, hip=None, foot_length=None) -> Optional[SizeRecommendation]:
    """
    Recommend a size from body measurements (cm).

    Clothing uses the first measurement supplied in chest, waist, hip order.
    A value inside a row's range is an exact match (the lower row wins on a
    shared boundary); otherwise the row with the nearest boundary is returned
    as approximate. Shoes match on the nearest foot length.
    """
    parsed_category = to_enum(SizeCategory, category)
    if parsed_category is None:
        return None
    rows = SIZE_CHARTS[parsed_category]

    if parsed_category == SizeCategory.SHOES:
        length = positive(foot_length)
        if length is None:
            return None
        return _recommend_shoe(rows, length)

    supplied = {"chest": chest, "waist": waist, "hip": hip}
    for measurement in CLOTHING_MEASUREMENTS:
        value = positive(supplied[measurement])
        if value is None or getattr(rows[0], measurement) is None:
            continue

        for row in rows:
            low, high = getattr(row, measurement)
            if low <= value <= high:
                return SizeRecommendation(
                    recommended_size=row.cn,
                    system=SizeSystem.CN,
                    confidence=MatchConfidence.EXACT,
                    sizes=row.labels(),
                    measurement=measurement,
                )

        nearest = min(rows, key=lambda row: _distance_to_range(value, getattr(row, measurement)))
        return SizeRecommendation(
            recommended_size=nearest.cn,
            system=SizeSystem.CN,
            confidence=MatchConfidence.APPROXIMATE,
            sizes=nearest.labels(),
            measurement=measurement,
        )

    return None


def size_comparison_table(category) -> Optional[dict]:
    parsed_category = to_enum(SizeCategory, category)
    if parsed_category is None:
        return None
    headers = [system.value for system in SizeSystem]
    rows = [[row.label(system) for system in SizeSystem] for row in SIZE_CHARTS[parsed_category]]
    return {"headers": headers, "rows": rows}


def available_sizes(category, system) -> list[str]:
    parsed_category = to_enum(SizeCategory, category)
    parsed_system = to_enum(SizeSystem, system)
    if parsed_category is None or parsed_system is None:
        return []
    return [row.label(parsed_system) for row in SIZE_CHARTS[parsed_category]]


# --- Weight ------------------------------------------------------------------

GRAMS_PER_UNIT: dict[WeightUnit, Decimal] = {
    WeightUnit.GRAM: Decimal("1"),
    WeightUnit.OUNCE: Decimal("28.3495"),
    WeightUnit.POUND: Decimal("453.592"),
    WeightUnit.KILOGRAM: Decimal("1000"),
}

WEIGHT_DISPLAY_PLACES = Decimal("0.001")


@dataclass(frozen=True)
class WeightTierBand:
    lower_grams: Decimal  # inclusive
    upper_grams: Optional[Decimal]  # exclusive, None = unbounded
    tier: ShippingWeightTier

    def contains(self, grams: Decimal) -> bool:
        return grams >= self.lower_grams and (self.upper_grams is None or grams < self.upper_grams)


# Ordered, contiguous bands covering [0, inf)
SHIPPING_WEIGHT_TIERS: tuple[WeightTierBand, ...] = (
    WeightTierBand(Decimal("0"), Decimal("500"), ShippingWeightTier.LIGHT),
    WeightTierBand(Decimal("500"), Decimal("2000"), ShippingWeightTier.MEDIUM),
    WeightTierBand(Decimal("2000"), None, ShippingWeightTier.HEAVY),
)


@dataclass(frozen=True)
class ProductReference:
    key: str
    name: str
    weight_grams: Decimal


PRODUCT_REFERENCES: tuple[ProductReference, ...] = (
    ProductReference("smartphone", "iPhone 15 Pro", Decimal("187")),
    ProductReference("laptop", 'MacBook Air 13"', Decimal("1240")),
    ProductReference("tablet", 'iPad Pro 11"', Decimal("466")),
    ProductReference("earbuds", "AirPods Pro", Decimal("50.8")),
    ProductReference("smartwatch", "Apple Watch", Decimal("38.7")),
    ProductReference("t_shirt", "Standard T-Shirt", Decimal("150")),
    ProductReference("jeans", "Jeans", Decimal("600")),
    ProductReference("running_shoes", "Running Shoes", Decimal("300")),
    ProductReference("hardcover_book", "Hardcover Book", Decimal("500")),
    ProductReference("water_bottle", "Water Bottle (500ml)", Decimal("530")),
    ProductReference("laptop_bag", "Laptop Bag", Decimal("800")),
    ProductReference("perfume", "Perfume (100ml)", Decimal("350")),
)


@dataclass(frozen=True)
class WeightConversionResult:
    grams: Decimal
    ounces: Decimal
    pounds: Decimal
    kilograms: Decimal
    shipping_tier: ShippingWeightTier
    reference: Optional[ProductReference] = None


def to_grams(value: Decimal, unit: WeightUnit) -> Decimal:
    return value * GRAMS_PER_UNIT[unit]


def from_grams(grams: Decimal, unit: WeightUnit) -> Decimal:
    return grams / GRAMS_PER_UNIT[unit]


def shipping_weight_tier(grams: Decimal) -> ShippingWeightTier:
    """Tier whose [lower, upper) band contains ``grams``."""
    for band in SHIPPING_WEIGHT_TIERS:
        if band.contains(grams):
            return band.tier
    raise ValueError(f"Weight must be non-negative, got {grams}")


def closest_reference(grams: Decimal) -> Optional[ProductReference]:
    """Nearest everyday product, if it is within 50% of its own weight."""
    closest = min(PRODUCT_REFERENCES, key=lambda ref: abs(grams - ref.weight_grams))
    if abs(grams - closest.weight_grams) <= closest.weight_grams / 2:
        return closest
    return None


def convert_weight(value, unit) -> Optional[WeightConversionResult]:
    amount = positive(value)
    parsed_unit = to_enum(WeightUnit, unit)
    if amount is None or parsed_unit is None:
        return None

    grams = to_grams(amount, parsed_unit)

    def display(target: WeightUnit) -> Decimal:
        return from_grams(grams, target).quantize(WEIGHT_DISPLAY_PLACES, rounding=ROUND_HALF_UP)

    return WeightConversionResult(
        grams=display(WeightUnit.GRAM),
        ounces=display(WeightUnit.OUNCE),
        pounds=display(WeightUnit.POUND),
        kilograms=display(WeightUnit.KILOGRAM),
        shipping_tier=shipping_weight_tier(grams),
        reference=closest_reference(grams),
    )

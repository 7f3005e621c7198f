"""
Localized display labels for calculator enums.

Calculators only ever return machine-stable enum values. Display text lives
here as a locale -> key -> string resource map, keyed "<group>.<value>".
"""

from enum import Enum
from typing import Union

from apps.calculators.domain.conversions import (
    MatchConfidence,
    ShippingWeightTier,
    SizeCategory,
    SizeSystem,
    WeightUnit,
)
from apps.calculators.domain.models import (
    Country,
    ProductCategory,
    ShippingCarrier,
    SizeTier,
    SurchargeType,
    UrgencyLevel,
    VATMode,
    ViabilityLevel,
)

DEFAULT_LOCALE = "en"

ENUM_GROUPS: dict[type, str] = {
    VATMode: "vat_mode",
    Country: "country",
    ProductCategory: "product_category",
    SizeTier: "size_tier",
    SurchargeType: "surcharge_type",
    UrgencyLevel: "urgency",
    ViabilityLevel: "viability",
    ShippingCarrier: "carrier",
    SizeCategory: "size_category",
    SizeSystem: "size_system",
    MatchConfidence: "confidence",
    WeightUnit: "weight_unit",
    ShippingWeightTier: "weight_tier",
}

LABELS: dict[str, dict[str, str]] = {
    "en": {
        "vat_mode.add": "Add VAT",
        "vat_mode.extract": "Extract VAT",
        "country.saudi": "Saudi Arabia",
        "country.uae": "UAE",
        "country.kuwait": "Kuwait",
        "country.bahrain": "Bahrain",
        "country.oman": "Oman",
        "country.qatar": "Qatar",
        "product_category.electronics": "Electronics",
        "product_category.clothing": "Clothing",
        "product_category.food": "Food",
        "product_category.cosmetics": "Cosmetics",
        "product_category.general": "General",
        "size_tier.standard": "Standard size",
        "size_tier.oversize": "Oversize",
        "surcharge_type.none": "No surcharge",
        "surcharge_type.aged": "Aged inventory surcharge",
        "surcharge_type.long_term": "Long-term storage fee",
        "urgency.normal": "Normal",
        "urgency.warning": "Warning",
        "urgency.critical": "Critical",
        "viability.ok": "Viable",
        "viability.caution": "Caution",
        "viability.warning": "Not viable",
        "carrier.aramex": "Aramex",
        "carrier.smsa": "SMSA",
        "carrier.dhl": "DHL",
        "carrier.fedex": "FedEx",
        "carrier.saudi_post": "Saudi Post",
        "size_category.men-clothing": "Men's Clothing",
        "size_category.women-clothing": "Women's Clothing",
        "size_category.kids-clothing": "Kids' Clothing",
        "size_category.shoes": "Shoes",
        "size_system.CN": "Chinese",
        "size_system.US": "US",
        "size_system.EU": "EU",
        "size_system.UK": "UK",
        "confidence.exact": "Exact match",
        "confidence.approximate": "Approximate match",
        "weight_unit.g": "Grams",
        "weight_unit.oz": "Ounces",
        "weight_unit.lb": "Pounds",
        "weight_unit.kg": "Kilograms",
        "weight_tier.light": "Light",
        "weight_tier.medium": "Medium",
        "weight_tier.heavy": "Heavy",
        "unit.days": "days",
    },
    "ar": {
        "vat_mode.add": "إضافة الضريبة",
        "vat_mode.extract": "استخراج الضريبة",
        "country.saudi": "السعودية",
        "country.uae": "الإمارات",
        "country.kuwait": "الكويت",
        "country.bahrain": "البحرين",
        "country.oman": "عُمان",
        "country.qatar": "قطر",
        "product_category.electronics": "إلكترونيات",
        "product_category.clothing": "ملابس",
        "product_category.food": "أغذية",
        "product_category.cosmetics": "مستحضرات تجميل",
        "product_category.general": "عام",
        "size_tier.standard": "حجم قياسي",
        "size_tier.oversize": "حجم كبير",
        "surcharge_type.none": "بدون رسوم إضافية",
        "surcharge_type.aged": "رسوم المخزون القديم",
        "surcharge_type.long_term": "رسوم التخزين طويل الأمد",
        "urgency.normal": "طبيعي",
        "urgency.warning": "تحذير",
        "urgency.critical": "حرج",
        "viability.ok": "مجدٍ",
        "viability.caution": "تنبيه",
        "viability.warning": "غير مجدٍ",
        "carrier.aramex": "أرامكس",
        "carrier.smsa": "سمسا",
        "carrier.dhl": "دي إتش إل",
        "carrier.fedex": "فيديكس",
        "carrier.saudi_post": "البريد السعودي",
        "size_category.men-clothing": "ملابس رجالية",
        "size_category.women-clothing": "ملابس نسائية",
        "size_category.kids-clothing": "ملابس أطفال",
        "size_category.shoes": "أحذية",
        "size_system.CN": "صيني",
        "size_system.US": "أمريكي",
        "size_system.EU": "أوروبي",
        "size_system.UK": "بريطاني",
        "confidence.exact": "مطابقة تامة",
        "confidence.approximate": "مطابقة تقريبية",
        "weight_unit.g": "جرام",
        "weight_unit.oz": "أونصة",
        "weight_unit.lb": "باوند",
        "weight_unit.kg": "كيلوجرام",
        "weight_tier.light": "خفيف",
        "weight_tier.medium": "متوسط",
        "weight_tier.heavy": "ثقيل",
        "unit.days": "أيام",
    },
}

SUPPORTED_LOCALES = tuple(LABELS)


def label_key(value: Union[Enum, str]) -> str:
    if isinstance(value, Enum):
        return f"{ENUM_GROUPS[type(value)]}.{value.value}"
    return value


def get_label(value: Union[Enum, str], locale: str = DEFAULT_LOCALE) -> str:
    """
    Display label for an enum member (or a raw "<group>.<value>" key).

    Unknown locales fall back to English; unknown keys raise KeyError.
    """
    resources = LABELS.get(locale, LABELS[DEFAULT_LOCALE])
    return resources[label_key(value)]

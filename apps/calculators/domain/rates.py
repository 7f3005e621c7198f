"""
Static rate tables and their lookups.

Rates are stored as percentages (15 means 15%) except for the FBA and carrier
tables, which are currency amounts per cubic foot / per kilogram.
A lookup for a key that is not in a table raises UnknownRateError.
"""

from dataclasses import dataclass
from decimal import Decimal

from apps.calculators.domain.models import (
    Country,
    ProductCategory,
    ShippingCarrier,
    SizeTier,
)


class UnknownRateError(KeyError):
    """Raised when a rate table has no entry for the requested key."""


SAUDI_VAT_RATE = Decimal("15")

VAT_RATES: dict[Country, Decimal] = {
    Country.SAUDI: Decimal("15"),
    Country.UAE: Decimal("5"),
    Country.KUWAIT: Decimal("0"),
    Country.BAHRAIN: Decimal("10"),
    Country.OMAN: Decimal("5"),
    Country.QATAR: Decimal("0"),
}

# GCC common external tariff: 5% across the board, basic food exempt.
_GCC_DUTY_RATES: dict[ProductCategory, Decimal] = {
    ProductCategory.ELECTRONICS: Decimal("5"),
    ProductCategory.CLOTHING: Decimal("5"),
    ProductCategory.FOOD: Decimal("0"),
    ProductCategory.COSMETICS: Decimal("5"),
    ProductCategory.GENERAL: Decimal("5"),
}

DUTY_RATES: dict[tuple[Country, ProductCategory], Decimal] = {
    (country, category): rate
    for country in Country
    for category, rate in _GCC_DUTY_RATES.items()
}


# FBA monthly storage rate per cubic foot: (January-September, October-December)
PEAK_SEASON_START_MONTH = 10

FBA_STORAGE_RATES: dict[SizeTier, tuple[Decimal, Decimal]] = {
    SizeTier.STANDARD: (Decimal("0.87"), Decimal("2.40")),
    SizeTier.OVERSIZE: (Decimal("0.56"), Decimal("1.40")),
}

# Per cubic foot, charged every month once inventory passes the threshold
AGED_SURCHARGE_RATES: dict[SizeTier, Decimal] = {
    SizeTier.STANDARD: Decimal("1.50"),
    SizeTier.OVERSIZE: Decimal("0.50"),
}

LONG_TERM_RATES: dict[SizeTier, Decimal] = {
    SizeTier.STANDARD: Decimal("6.90"),
    SizeTier.OVERSIZE: Decimal("6.90"),
}

AGED_INVENTORY_THRESHOLD_MONTHS = 6
LONG_TERM_THRESHOLD_MONTHS = 12


@dataclass(frozen=True)
class CarrierRate:
    base_rate: Decimal
    per_kg: Decimal
    delivery_days: str
    min_delivery_days: int


# Approximate domestic rates in SAR
CARRIER_RATES: dict[ShippingCarrier, CarrierRate] = {
    ShippingCarrier.ARAMEX: CarrierRate(Decimal("25"), Decimal("8"), "2-3", 2),
    ShippingCarrier.SMSA: CarrierRate(Decimal("20"), Decimal("7"), "2-4", 2),
    ShippingCarrier.DHL: CarrierRate(Decimal("45"), Decimal("15"), "1-2", 1),
    ShippingCarrier.FEDEX: CarrierRate(Decimal("40"), Decimal("12"), "1-2", 1),
    ShippingCarrier.SAUDI_POST: CarrierRate(Decimal("15"), Decimal("5"), "3-7", 3),
}


def _lookup(table: dict, key, table_name: str):
    try:
        return table[key]
    except KeyError:
        raise UnknownRateError(f"No {table_name} entry for {key!r}") from None


def vat_rate(country: Country) -> Decimal:
    """VAT percentage for a destination country."""
    return _lookup(VAT_RATES, country, "VAT rate")


def duty_rate(country: Country, category: ProductCategory) -> Decimal:
    """Customs duty percentage for a (country, category) pair."""
    return _lookup(DUTY_RATES, (country, category), "duty rate")


def storage_rate(size_tier: SizeTier, calendar_month: int) -> Decimal:
    """
    Per-cubic-foot monthly storage rate for a calendar month (1-12).

    October to December is peak season and uses the higher rate.
    """
    if not 1 <= calendar_month <= 12:
        raise UnknownRateError(f"No storage rate for calendar month {calendar_month!r}")
    off_peak, peak = _lookup(FBA_STORAGE_RATES, size_tier, "storage rate")
    return peak if calendar_month >= PEAK_SEASON_START_MONTH else off_peak


def aged_surcharge_rate(size_tier: SizeTier) -> Decimal:
    return _lookup(AGED_SURCHARGE_RATES, size_tier, "aged surcharge rate")


def long_term_rate(size_tier: SizeTier) -> Decimal:
    return _lookup(LONG_TERM_RATES, size_tier, "long-term storage rate")


def carrier_rate(carrier: ShippingCarrier) -> CarrierRate:
    return _lookup(CARRIER_RATES, carrier, "carrier rate")

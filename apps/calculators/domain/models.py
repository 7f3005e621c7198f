"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.

Inputs are only built by the normalization step in ``validation.py``;
results are built by the calculators in ``services.py`` and ``conversions.py``.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class VATMode(str, Enum):
    ADD = "add"
    EXTRACT = "extract"


class Country(str, Enum):
    SAUDI = "saudi"
    UAE = "uae"
    KUWAIT = "kuwait"
    BAHRAIN = "bahrain"
    OMAN = "oman"
    QATAR = "qatar"


class ProductCategory(str, Enum):
    ELECTRONICS = "electronics"
    CLOTHING = "clothing"
    FOOD = "food"
    COSMETICS = "cosmetics"
    GENERAL = "general"


class SizeTier(str, Enum):
    STANDARD = "standard"
    OVERSIZE = "oversize"


class SurchargeType(str, Enum):
    NONE = "none"
    AGED = "aged"
    LONG_TERM = "long_term"


class UrgencyLevel(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


class ViabilityLevel(str, Enum):
    OK = "ok"
    CAUTION = "caution"
    WARNING = "warning"


class ShippingCarrier(str, Enum):
    ARAMEX = "aramex"
    SMSA = "smsa"
    DHL = "dhl"
    FEDEX = "fedex"
    SAUDI_POST = "saudi_post"


# --- VAT ---------------------------------------------------------------------

@dataclass(frozen=True)
class VATInput:
    amount: Decimal
    mode: VATMode
    country: Country = Country.SAUDI


@dataclass(frozen=True)
class VATResult:
    rate: Decimal  # percentage, e.g. 15
    amount_before_vat: Decimal
    vat_amount: Decimal
    total_with_vat: Decimal


# --- Import duty -------------------------------------------------------------

@dataclass(frozen=True)
class ImportDutyInput:
    fob_value: Decimal
    destination_country: Country
    product_category: ProductCategory
    shipping_cost: Decimal = Decimal("0")
    insurance_cost: Decimal = Decimal("0")


@dataclass(frozen=True)
class ImportDutyBreakdown:
    fob: Decimal
    shipping: Decimal
    insurance: Decimal
    duty: Decimal
    vat: Decimal


@dataclass(frozen=True)
class ImportDutyResult:
    cif_value: Decimal
    duty_rate: Decimal
    customs_duty: Decimal
    vat_rate: Decimal
    vat_base: Decimal
    vat_amount: Decimal
    total_landed_cost: Decimal
    breakdown: ImportDutyBreakdown


# --- FBA storage -------------------------------------------------------------

@dataclass(frozen=True)
class FBAStorageInput:
    length: Decimal
    width: Decimal
    height: Decimal
    units: int
    storage_duration_months: int
    size_tier: SizeTier
    start_month: int = 1


@dataclass(frozen=True)
class MonthlyBreakdown:
    month: int
    calendar_month: int
    fee: Decimal
    surcharge: Decimal
    surcharge_type: SurchargeType
    total: Decimal
    running_total: Decimal


@dataclass(frozen=True)
class FBAStorageResult:
    cubic_feet: Decimal
    monthly_fee: Decimal
    aged_inventory_surcharge: Decimal
    long_term_storage_fee: Decimal
    total_cost: Decimal
    cost_per_unit: Decimal
    monthly_breakdown: tuple[MonthlyBreakdown, ...]


# --- Discount impact ---------------------------------------------------------

@dataclass(frozen=True)
class DiscountImpactInput:
    original_price: Decimal
    product_cost: Decimal
    discount_percentage: Decimal
    current_monthly_sales: Decimal


@dataclass(frozen=True)
class ProfitComparison:
    sales_volume: int
    original_profit: Decimal
    discounted_profit: Decimal
    difference: Decimal
    is_break_even: bool = False


@dataclass(frozen=True)
class DiscountImpactResult:
    original_margin: Decimal
    discounted_price: Decimal
    baseline_profit: Decimal  # profit at current volume and original price
    discounted_margin: Optional[Decimal]
    margin_reduction: Optional[Decimal]
    break_even_units: Optional[Decimal]
    sales_increase_needed: Optional[Decimal]
    profit_comparison: tuple[ProfitComparison, ...]
    is_viable: bool
    viability: ViabilityLevel
    warning: Optional[str] = None


# --- Safety stock ------------------------------------------------------------

@dataclass(frozen=True)
class SafetyStockInput:
    average_daily_sales: Decimal
    lead_time_days: int
    safety_days: int = 7
    current_stock: Optional[Decimal] = None
    today: date = field(default_factory=date.today)


@dataclass(frozen=True)
class SafetyStockResult:
    safety_stock: Decimal
    reorder_point: Decimal
    needs_reorder: bool
    urgency_level: UrgencyLevel
    recommended_order_quantity: int
    days_until_stockout: Optional[Decimal] = None
    projected_stockout_date: Optional[date] = None


# --- Shipping ----------------------------------------------------------------

@dataclass(frozen=True)
class ShippingInput:
    weight: Decimal
    length: Decimal
    width: Decimal
    height: Decimal
    origin_region: str
    destination_region: str


@dataclass(frozen=True)
class CarrierQuote:
    carrier: ShippingCarrier
    cost: Decimal
    delivery_days: str
    is_cheapest: bool
    is_fastest: bool


@dataclass(frozen=True)
class ShippingResult:
    volumetric_weight: Decimal
    chargeable_weight: Decimal
    carriers: tuple[CarrierQuote, ...]

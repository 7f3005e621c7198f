"""
Domain services - Core business logic.
Deterministic, tiered-rate financial calculators.

Every ``calculate`` accepts the output of the matching ``normalize_*`` function
from ``validation.py`` and passes a None ("no result") straight through.
Amounts are never rounded here; rounding belongs to ``formatting.py``.
"""

from datetime import date, timedelta
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal
from typing import Optional

from apps.calculators.domain import rates
from apps.calculators.domain.models import (
    CarrierQuote,
    DiscountImpactInput,
    DiscountImpactResult,
    FBAStorageInput,
    FBAStorageResult,
    ImportDutyBreakdown,
    ImportDutyInput,
    ImportDutyResult,
    MonthlyBreakdown,
    ProfitComparison,
    SafetyStockInput,
    SafetyStockResult,
    ShippingCarrier,
    ShippingInput,
    ShippingResult,
    SizeTier,
    SurchargeType,
    UrgencyLevel,
    VATInput,
    VATMode,
    VATResult,
    ViabilityLevel,
)

HUNDRED = Decimal("100")
ZERO = Decimal("0")

# Cubic inches per cubic foot
CUBIC_INCHES_PER_CUBIC_FOOT = Decimal("1728")

# Air freight volumetric divisor for centimetres -> kilograms
VOLUMETRIC_DIVISOR = Decimal("5000")

COMPARISON_VOLUME_MULTIPLIERS = (Decimal("0.5"), Decimal("1"), Decimal("1.5"), Decimal("2"))

LOSS_WARNING = "Warning: This discount exceeds your profit margin. Each sale will result in a loss."
CAUTION_WARNING = (
    "Caution: This discount significantly reduces your profit margin. "
    "Ensure increased sales volume justifies the discount."
)


def _ceil(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def _floor(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


class VATService:
    """VAT add/extract at the destination country's fixed rate."""

    @staticmethod
    def add_vat(amount: Decimal, rate: Decimal) -> Decimal:
        """Total including VAT for a net ``amount``; ``rate`` is a percentage."""
        return amount + amount * rate / HUNDRED

    @staticmethod
    def extract_vat(total: Decimal, rate: Decimal) -> Decimal:
        """Net amount contained in a VAT-inclusive ``total``."""
        return total / (1 + rate / HUNDRED)

    @staticmethod
    def calculate(data: Optional[VATInput]) -> Optional[VATResult]:
        """
        Example:
            >>> VATService.calculate(normalize_vat("100", "add"))
            VATResult(rate=Decimal('15'), amount_before_vat=Decimal('100'),
                      vat_amount=Decimal('15'), total_with_vat=Decimal('115'))
        """
        if data is None:
            return None

        rate = rates.vat_rate(data.country)

        if data.mode == VATMode.ADD:
            base = data.amount
            total = VATService.add_vat(base, rate)
            vat = total - base
        else:
            total = data.amount
            base = VATService.extract_vat(total, rate)
            vat = total - base

        return VATResult(
            rate=rate,
            amount_before_vat=base,
            vat_amount=vat,
            total_with_vat=total,
        )


class ImportDutyService:
    """
    Landed cost estimate: FOB -> CIF -> duty -> VAT -> total.

    VAT is charged on (CIF + duty), not on CIF alone, as customs authorities do.
    """

    @staticmethod
    def calculate(data: Optional[ImportDutyInput]) -> Optional[ImportDutyResult]:
        if data is None:
            return None

        cif = data.fob_value + data.shipping_cost + data.insurance_cost

        duty_rate = rates.duty_rate(data.destination_country, data.product_category)
        duty = cif * duty_rate / HUNDRED

        vat_rate = rates.vat_rate(data.destination_country)
        vat_base = cif + duty
        vat = vat_base * vat_rate / HUNDRED

        return ImportDutyResult(
            cif_value=cif,
            duty_rate=duty_rate,
            customs_duty=duty,
            vat_rate=vat_rate,
            vat_base=vat_base,
            vat_amount=vat,
            total_landed_cost=cif + duty + vat,
            breakdown=ImportDutyBreakdown(
                fob=data.fob_value,
                shipping=data.shipping_cost,
                insurance=data.insurance_cost,
                duty=duty,
                vat=vat,
            ),
        )


class FBAStorageService:
    """
    Fulfilment-centre storage fees with seasonal rates and age surcharges.

    Months 1..6 pay the base fee only, months 7..12 add the aged-inventory
    surcharge, and from month 13 the long-term fee replaces the aged surcharge.
    """

    @staticmethod
    def cubic_feet(length: Decimal, width: Decimal, height: Decimal, units: int) -> Decimal:
        return length * width * height / CUBIC_INCHES_PER_CUBIC_FOOT * units

    @staticmethod
    def calendar_month(start_month: int, storage_month: int) -> int:
        return (start_month - 1 + storage_month - 1) % 12 + 1

    @staticmethod
    def surcharge_for_month(storage_month: int, cubic_feet: Decimal, size_tier: SizeTier) -> tuple[Decimal, SurchargeType]:
        if storage_month > rates.LONG_TERM_THRESHOLD_MONTHS:
            return cubic_feet * rates.long_term_rate(size_tier), SurchargeType.LONG_TERM
        if storage_month > rates.AGED_INVENTORY_THRESHOLD_MONTHS:
            return cubic_feet * rates.aged_surcharge_rate(size_tier), SurchargeType.AGED
        return ZERO, SurchargeType.NONE

    @staticmethod
    def calculate(data: Optional[FBAStorageInput]) -> Optional[FBAStorageResult]:
        if data is None:
            return None

        cubic_feet = FBAStorageService.cubic_feet(data.length, data.width, data.height, data.units)

        breakdown = []
        running_total = ZERO
        total_fees = ZERO
        aged_total = ZERO
        long_term_total = ZERO

        for month in range(1, data.storage_duration_months + 1):
            calendar_month = FBAStorageService.calendar_month(data.start_month, month)
            fee = cubic_feet * rates.storage_rate(data.size_tier, calendar_month)
            surcharge, surcharge_type = FBAStorageService.surcharge_for_month(
                month, cubic_feet, data.size_tier
            )

            total_fees += fee
            if surcharge_type == SurchargeType.AGED:
                aged_total += surcharge
            elif surcharge_type == SurchargeType.LONG_TERM:
                long_term_total += surcharge

            month_total = fee + surcharge
            running_total += month_total
            breakdown.append(
                MonthlyBreakdown(
                    month=month,
                    calendar_month=calendar_month,
                    fee=fee,
                    surcharge=surcharge,
                    surcharge_type=surcharge_type,
                    total=month_total,
                    running_total=running_total,
                )
            )

        return FBAStorageResult(
            cubic_feet=cubic_feet,
            monthly_fee=total_fees / data.storage_duration_months,
            aged_inventory_surcharge=aged_total,
            long_term_storage_fee=long_term_total,
            total_cost=running_total,
            cost_per_unit=running_total / data.units,
            monthly_breakdown=tuple(breakdown),
        )


class DiscountImpactService:
    """Margin erosion and break-even volume for a proposed discount."""

    @staticmethod
    def margin(price: Decimal, cost: Decimal) -> Optional[Decimal]:
        """Margin as a percentage of price; None when the price is zero."""
        if price == 0:
            return None
        return (price - cost) / price * HUNDRED

    @staticmethod
    def break_even_units(
        current_sales: Decimal, original_unit_profit: Decimal, discounted_unit_profit: Decimal
    ) -> Optional[Decimal]:
        """
        Volume at which discounted profit matches today's profit at today's volume.

        Solves ``units * discounted_unit_profit = current_sales * original_unit_profit``.
        Returns None when each discounted sale makes no profit.
        """
        if discounted_unit_profit <= 0:
            return None
        return current_sales * original_unit_profit / discounted_unit_profit

    @staticmethod
    def profit_comparison(
        current_sales: Decimal,
        original_unit_profit: Decimal,
        discounted_unit_profit: Decimal,
        break_even_units: Optional[Decimal],
    ) -> tuple[ProfitComparison, ...]:
        volumes = {_ceil(current_sales * multiplier) for multiplier in COMPARISON_VOLUME_MULTIPLIERS}
        break_even_volume = None
        if break_even_units is not None:
            break_even_volume = _ceil(break_even_units)
            volumes.add(break_even_volume)

        rows = []
        for volume in sorted(volumes):
            original_profit = volume * original_unit_profit
            discounted_profit = volume * discounted_unit_profit
            rows.append(
                ProfitComparison(
                    sales_volume=volume,
                    original_profit=original_profit,
                    discounted_profit=discounted_profit,
                    difference=discounted_profit - original_profit,
                    is_break_even=volume == break_even_volume,
                )
            )
        return tuple(rows)

    @staticmethod
    def viability(
        original_margin: Decimal, discounted_margin: Optional[Decimal]
    ) -> tuple[bool, ViabilityLevel, Optional[str]]:
        if discounted_margin is None or discounted_margin <= 0:
            return False, ViabilityLevel.WARNING, LOSS_WARNING
        if discounted_margin < original_margin / 2:
            return True, ViabilityLevel.CAUTION, CAUTION_WARNING
        return True, ViabilityLevel.OK, None

    @staticmethod
    def calculate(data: Optional[DiscountImpactInput]) -> Optional[DiscountImpactResult]:
        if data is None:
            return None

        price = data.original_price
        cost = data.product_cost
        sales = data.current_monthly_sales

        original_margin = DiscountImpactService.margin(price, cost)
        discounted_price = price * (1 - data.discount_percentage / HUNDRED)
        discounted_margin = DiscountImpactService.margin(discounted_price, cost)

        original_unit_profit = price - cost
        discounted_unit_profit = discounted_price - cost

        break_even = DiscountImpactService.break_even_units(
            sales, original_unit_profit, discounted_unit_profit
        )
        sales_increase = None
        if break_even is not None and sales > 0:
            sales_increase = (break_even - sales) / sales * HUNDRED

        is_viable, viability, warning = DiscountImpactService.viability(
            original_margin, discounted_margin
        )

        return DiscountImpactResult(
            original_margin=original_margin,
            discounted_price=discounted_price,
            baseline_profit=sales * original_unit_profit,
            discounted_margin=discounted_margin,
            margin_reduction=(
                original_margin - discounted_margin if discounted_margin is not None else None
            ),
            break_even_units=break_even,
            sales_increase_needed=sales_increase,
            profit_comparison=DiscountImpactService.profit_comparison(
                sales, original_unit_profit, discounted_unit_profit, break_even
            ),
            is_viable=is_viable,
            viability=viability,
            warning=warning,
        )


class SafetyStockService:
    """Safety stock, reorder point and stock-out urgency."""

    @staticmethod
    def urgency(
        days_until_stockout: Optional[Decimal], lead_time_days: int, needs_reorder: bool
    ) -> UrgencyLevel:
        """
        critical: stock runs out before a new order could arrive.
        warning: at or below the reorder point, but lead time still covers it.
        normal: otherwise.
        """
        if days_until_stockout is not None and days_until_stockout < lead_time_days:
            return UrgencyLevel.CRITICAL
        if needs_reorder:
            return UrgencyLevel.WARNING
        return UrgencyLevel.NORMAL

    @staticmethod
    def projected_stockout_date(today: date, days_until_stockout: Decimal) -> Optional[date]:
        days = _floor(days_until_stockout)
        if days > (date.max - today).days:
            return None
        return today + timedelta(days=days)

    @staticmethod
    def calculate(data: Optional[SafetyStockInput]) -> Optional[SafetyStockResult]:
        if data is None:
            return None

        daily_sales = data.average_daily_sales
        safety_stock = daily_sales * data.safety_days
        reorder_point = daily_sales * data.lead_time_days + safety_stock
        target_level = reorder_point + safety_stock

        if data.current_stock is None:
            return SafetyStockResult(
                safety_stock=safety_stock,
                reorder_point=reorder_point,
                needs_reorder=False,
                urgency_level=UrgencyLevel.NORMAL,
                recommended_order_quantity=_ceil(target_level),
            )

        stock = data.current_stock
        days_until_stockout = None
        projected_date = None
        if daily_sales > 0:
            days_until_stockout = stock / daily_sales
            projected_date = SafetyStockService.projected_stockout_date(data.today, days_until_stockout)

        needs_reorder = stock <= reorder_point

        return SafetyStockResult(
            safety_stock=safety_stock,
            reorder_point=reorder_point,
            needs_reorder=needs_reorder,
            urgency_level=SafetyStockService.urgency(
                days_until_stockout, data.lead_time_days, needs_reorder
            ),
            recommended_order_quantity=max(0, _ceil(target_level - stock)),
            days_until_stockout=days_until_stockout,
            projected_stockout_date=projected_date,
        )


class ShippingService:
    """Carrier price comparison on chargeable (actual vs volumetric) weight."""

    @staticmethod
    def volumetric_weight(length: Decimal, width: Decimal, height: Decimal) -> Decimal:
        return length * width * height / VOLUMETRIC_DIVISOR

    @staticmethod
    def calculate(data: Optional[ShippingInput]) -> Optional[ShippingResult]:
        if data is None:
            return None

        volumetric = ShippingService.volumetric_weight(data.length, data.width, data.height)
        chargeable = max(data.weight, volumetric)

        costs = {}
        for carrier in ShippingCarrier:
            rate = rates.carrier_rate(carrier)
            costs[carrier] = rate.base_rate + chargeable * rate.per_kg

        cheapest = min(costs.values())
        fastest = min(rates.carrier_rate(carrier).min_delivery_days for carrier in costs)

        quotes = tuple(
            CarrierQuote(
                carrier=carrier,
                cost=cost,
                delivery_days=rates.carrier_rate(carrier).delivery_days,
                is_cheapest=cost == cheapest,
                is_fastest=rates.carrier_rate(carrier).min_delivery_days == fastest,
            )
            for carrier, cost in costs.items()
        )

        return ShippingResult(
            volumetric_weight=volumetric,
            chargeable_weight=chargeable,
            carriers=quotes,
        )

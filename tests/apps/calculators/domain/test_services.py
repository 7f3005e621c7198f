from datetime import date
from decimal import Decimal

import pytest

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
from apps.calculators.domain.services import (
    CAUTION_WARNING,
    LOSS_WARNING,
    DiscountImpactService,
    FBAStorageService,
    ImportDutyService,
    SafetyStockService,
    ShippingService,
    VATService,
)
from apps.calculators.domain.validation import (
    normalize_discount_impact,
    normalize_fba_storage,
    normalize_import_duty,
    normalize_safety_stock,
    normalize_shipping,
    normalize_vat,
)


class TestVATService:
    """Tests for VAT add/extract."""

    def test_add_vat_saudi(self):
        """Adding 15% to 100 gives 15 VAT and 115 total."""
        result = VATService.calculate(normalize_vat("100", "add"))

        assert result.rate == Decimal("15")
        assert result.amount_before_vat == Decimal("100")
        assert result.vat_amount == Decimal("15")
        assert result.total_with_vat == Decimal("115")

    def test_extract_vat_saudi(self):
        """Extracting 15% from 115 gives a base of 100."""
        result = VATService.calculate(normalize_vat("115", "extract"))

        assert result.amount_before_vat == Decimal("100")
        assert result.vat_amount == Decimal("15")
        assert result.total_with_vat == Decimal("115")

    def test_country_rate_is_used(self):
        result = VATService.calculate(normalize_vat("200", VATMode.ADD, Country.UAE))

        assert result.rate == Decimal("5")
        assert result.vat_amount == Decimal("10")

    def test_zero_rate_country(self):
        result = VATService.calculate(normalize_vat("200", "extract", "kuwait"))

        assert result.vat_amount == Decimal("0")
        assert result.amount_before_vat == Decimal("200")

    def test_zero_amount_is_a_result(self):
        """Zero is a valid amount, not "no result"."""
        result = VATService.calculate(normalize_vat("0", "add"))

        assert result is not None
        assert result.total_with_vat == Decimal("0")

    def test_no_input_no_result(self):
        assert VATService.calculate(None) is None
        assert VATService.calculate(normalize_vat("-1", "add")) is None

    def test_huge_amount_no_result(self):
        """Amounts past the accepted magnitude are rejected instead of overflowing."""
        assert VATService.calculate(normalize_vat("9e999999", "add")) is None

    @pytest.mark.parametrize("amount", ["0.01", "1", "99.99", "1234.56", "1000000"])
    def test_add_then_extract_recovers_amount(self, amount):
        """Extracting VAT from an added-VAT total recovers the original amount."""
        added = VATService.calculate(normalize_vat(amount, "add"))
        extracted = VATService.calculate(normalize_vat(added.total_with_vat, "extract"))

        assert abs(extracted.amount_before_vat - Decimal(amount)) < Decimal("0.000001")

    def test_helpers(self):
        assert VATService.add_vat(Decimal("100"), Decimal("15")) == Decimal("115")
        assert VATService.extract_vat(Decimal("115"), Decimal("15")) == Decimal("100")


class TestImportDutyService:
    """Tests for the landed cost estimator."""

    def test_landed_cost(self):
        """VAT is charged on CIF plus duty."""
        data = normalize_import_duty(
            fob_value="1000",
            destination_country="saudi",
            product_category="electronics",
            shipping_cost="100",
            insurance_cost="50",
        )

        result = ImportDutyService.calculate(data)

        assert result.cif_value == Decimal("1150")
        assert result.duty_rate == Decimal("5")
        assert result.customs_duty == Decimal("57.50")
        assert result.vat_base == Decimal("1207.50")
        assert result.vat_amount == Decimal("181.125")
        assert result.total_landed_cost == Decimal("1388.625")
        assert result.breakdown.fob == Decimal("1000")
        assert result.breakdown.shipping == Decimal("100")
        assert result.breakdown.insurance == Decimal("50")
        assert result.breakdown.duty == result.customs_duty
        assert result.breakdown.vat == result.vat_amount

    def test_optional_costs_default_to_zero(self):
        data = normalize_import_duty("1000", Country.UAE, ProductCategory.FOOD)

        result = ImportDutyService.calculate(data)

        assert result.cif_value == Decimal("1000")
        assert result.customs_duty == Decimal("0")
        assert result.vat_amount == Decimal("50")
        assert result.total_landed_cost == Decimal("1050")

    def test_no_input_no_result(self):
        assert ImportDutyService.calculate(None) is None


def _storage(duration, tier="standard", start_month=None, units=1):
    # 12x12x12 inches is exactly one cubic foot per unit
    return FBAStorageService.calculate(
        normalize_fba_storage("12", "12", "12", units, duration, tier, start_month)
    )


class TestFBAStorageService:
    """Tests for storage fees and age surcharges."""

    def test_cubic_feet(self):
        assert FBAStorageService.cubic_feet(Decimal("12"), Decimal("12"), Decimal("12"), 3) == Decimal("3")

    def test_calendar_month_wraps(self):
        assert FBAStorageService.calendar_month(1, 1) == 1
        assert FBAStorageService.calendar_month(10, 3) == 12
        assert FBAStorageService.calendar_month(12, 2) == 1

    def test_six_months_has_no_surcharge(self):
        result = _storage(6)

        assert result.total_cost == Decimal("5.22")
        assert result.aged_inventory_surcharge == Decimal("0")
        assert all(row.surcharge_type == SurchargeType.NONE for row in result.monthly_breakdown)

    def test_month_seven_adds_aged_surcharge(self):
        """The aged surcharge starts in month 7, not month 6."""
        result = _storage(7)

        month_6, month_7 = result.monthly_breakdown[5], result.monthly_breakdown[6]
        assert month_6.surcharge == Decimal("0")
        assert month_7.surcharge_type == SurchargeType.AGED
        assert month_7.surcharge == Decimal("1.50")
        assert result.aged_inventory_surcharge == Decimal("1.50")
        assert result.total_cost == Decimal("7.59")

    def test_long_term_replaces_aged(self):
        """From month 13 the long-term fee is charged instead of the aged surcharge."""
        result = _storage(13)

        month_13 = result.monthly_breakdown[12]
        assert month_13.surcharge_type == SurchargeType.LONG_TERM
        assert month_13.surcharge == Decimal("6.90")
        assert result.aged_inventory_surcharge == Decimal("9.00")
        assert result.long_term_storage_fee == Decimal("6.90")
        assert result.total_cost == Decimal("31.80")

    def test_peak_season_rate(self):
        result = _storage(3, start_month=10)

        assert [row.calendar_month for row in result.monthly_breakdown] == [10, 11, 12]
        assert all(row.fee == Decimal("2.40") for row in result.monthly_breakdown)
        assert result.monthly_fee == Decimal("2.40")

    def test_oversize_rates(self):
        result = _storage(7, tier=SizeTier.OVERSIZE)

        assert result.monthly_breakdown[0].fee == Decimal("0.56")
        assert result.monthly_breakdown[6].surcharge == Decimal("0.50")

    def test_running_total_and_cost_per_unit(self):
        result = _storage(4, units=4)

        running = Decimal("0")
        for row in result.monthly_breakdown:
            running += row.total
            assert row.running_total == running
        assert result.total_cost == running
        assert result.cost_per_unit == result.total_cost / 4

    def test_no_input_no_result(self):
        assert FBAStorageService.calculate(None) is None


class TestDiscountImpactService:
    """Tests for the discount simulator."""

    def test_break_even(self):
        result = DiscountImpactService.calculate(normalize_discount_impact("100", "60", "20", "50"))

        assert result.discounted_price == Decimal("80")
        assert result.original_margin == Decimal("40")
        assert result.discounted_margin == Decimal("25")
        assert result.margin_reduction == Decimal("15")
        assert result.break_even_units == Decimal("100")
        assert result.sales_increase_needed == Decimal("100")
        assert result.baseline_profit == Decimal("2000")
        assert result.is_viable is True
        assert result.viability == ViabilityLevel.OK
        assert result.warning is None

    def test_profit_comparison_rows(self):
        result = DiscountImpactService.calculate(normalize_discount_impact("100", "60", "20", "50"))

        volumes = [row.sales_volume for row in result.profit_comparison]
        assert volumes == [25, 50, 75, 100]

        break_even_row = result.profit_comparison[-1]
        assert break_even_row.is_break_even is True
        assert break_even_row.original_profit == Decimal("4000")
        assert break_even_row.discounted_profit == Decimal("2000")
        assert break_even_row.difference == Decimal("-2000")

    def test_caution_below_half_margin(self):
        result = DiscountImpactService.calculate(normalize_discount_impact("100", "50", "40", "10"))

        assert result.is_viable is True
        assert result.viability == ViabilityLevel.CAUTION
        assert result.warning == CAUTION_WARNING

    def test_discount_to_cost_is_a_loss(self):
        result = DiscountImpactService.calculate(normalize_discount_impact("100", "50", "50", "10"))

        assert result.discounted_margin == Decimal("0")
        assert result.break_even_units is None
        assert result.sales_increase_needed is None
        assert result.is_viable is False
        assert result.viability == ViabilityLevel.WARNING
        assert result.warning == LOSS_WARNING

    def test_full_discount_has_undefined_margin(self):
        result = DiscountImpactService.calculate(normalize_discount_impact("100", "50", "100", "10"))

        assert result.discounted_price == Decimal("0")
        assert result.discounted_margin is None
        assert result.margin_reduction is None
        assert result.is_viable is False

    def test_zero_current_sales(self):
        result = DiscountImpactService.calculate(normalize_discount_impact("100", "60", "20", "0"))

        assert result.sales_increase_needed is None
        assert result.baseline_profit == Decimal("0")

    def test_margin_never_rises_with_discount(self):
        margins = [
            DiscountImpactService.calculate(
                normalize_discount_impact("100", "60", discount, "50")
            ).discounted_margin
            for discount in range(0, 100, 10)
        ]

        assert margins == sorted(margins, reverse=True)

    def test_no_input_no_result(self):
        assert DiscountImpactService.calculate(None) is None


class TestSafetyStockService:
    """Tests for safety stock and reorder point."""

    today = date(2026, 10, 17)

    def _calculate(self, stock, ads="10", lead_time=7, safety_days=3):
        return SafetyStockService.calculate(
            normalize_safety_stock(ads, lead_time, safety_days, stock, self.today)
        )

    def test_critical_when_stock_runs_out_before_lead_time(self):
        result = self._calculate("50")

        assert result.safety_stock == Decimal("30")
        assert result.reorder_point == Decimal("100")
        assert result.days_until_stockout == Decimal("5")
        assert result.projected_stockout_date == date(2026, 10, 22)
        assert result.needs_reorder is True
        assert result.urgency_level == UrgencyLevel.CRITICAL
        assert result.recommended_order_quantity == 80

    def test_stock_at_reorder_point_needs_reorder(self):
        result = self._calculate("100")

        assert result.needs_reorder is True
        assert result.urgency_level == UrgencyLevel.WARNING
        assert result.recommended_order_quantity == 30

    def test_healthy_stock(self):
        result = self._calculate("500")

        assert result.needs_reorder is False
        assert result.urgency_level == UrgencyLevel.NORMAL
        assert result.recommended_order_quantity == 0

    def test_without_current_stock(self):
        result = self._calculate(None)

        assert result.needs_reorder is False
        assert result.urgency_level == UrgencyLevel.NORMAL
        assert result.days_until_stockout is None
        assert result.projected_stockout_date is None
        assert result.recommended_order_quantity == 130

    def test_zero_sales_never_runs_out(self):
        result = self._calculate("5", ads="0")

        assert result.reorder_point == Decimal("0")
        assert result.days_until_stockout is None
        assert result.projected_stockout_date is None
        assert result.urgency_level == UrgencyLevel.NORMAL

    def test_order_quantity_rounds_up(self):
        result = self._calculate("50.5", ads="10.1")

        # reorder point 101.0 + safety stock 30.3 - stock 50.5 = 80.8
        assert result.recommended_order_quantity == 81

    def test_default_safety_days(self):
        result = SafetyStockService.calculate(normalize_safety_stock("2", 5))

        assert result.safety_stock == Decimal("14")
        assert result.reorder_point == Decimal("24")

    def test_reorder_point_grows_with_lead_time(self):
        points = [self._calculate(None, lead_time=days).reorder_point for days in range(1, 31)]

        assert points == sorted(points)
        assert len(set(points)) == len(points)

    def test_no_input_no_result(self):
        assert SafetyStockService.calculate(None) is None


class TestShippingService:
    """Tests for the carrier comparator."""

    def test_actual_weight_is_chargeable(self):
        result = ShippingService.calculate(normalize_shipping("2", "10", "10", "10", "Riyadh", "Jeddah"))

        assert result.volumetric_weight == Decimal("0.2")
        assert result.chargeable_weight == Decimal("2")

        costs = {quote.carrier: quote.cost for quote in result.carriers}
        assert costs == {
            ShippingCarrier.ARAMEX: Decimal("41"),
            ShippingCarrier.SMSA: Decimal("34"),
            ShippingCarrier.DHL: Decimal("75"),
            ShippingCarrier.FEDEX: Decimal("64"),
            ShippingCarrier.SAUDI_POST: Decimal("25"),
        }

    def test_cheapest_and_fastest_flags(self):
        result = ShippingService.calculate(normalize_shipping("2", "10", "10", "10", "Riyadh", "Jeddah"))

        cheapest = [quote.carrier for quote in result.carriers if quote.is_cheapest]
        fastest = [quote.carrier for quote in result.carriers if quote.is_fastest]
        assert cheapest == [ShippingCarrier.SAUDI_POST]
        assert set(fastest) == {ShippingCarrier.DHL, ShippingCarrier.FEDEX}

    def test_volumetric_weight_is_chargeable(self):
        result = ShippingService.calculate(normalize_shipping("1", "50", "40", "30", "Riyadh", "Dammam"))

        assert result.volumetric_weight == Decimal("12")
        assert result.chargeable_weight == Decimal("12")

    def test_no_input_no_result(self):
        assert ShippingService.calculate(None) is None
        assert ShippingService.calculate(normalize_shipping("0", "1", "1", "1", "a", "b")) is None

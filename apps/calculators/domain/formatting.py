"""
Display formatting for calculator results.

This is the only place results are rounded. Undefined values (None) and
infinities are shown as ``∞`` because they come from "no break-even" or
"never runs out" outcomes rather than from bad input.
"""

from datetime import date
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal
from typing import Optional, Union

from django.utils import dateformat, translation
from django.utils.formats import number_format

from apps.calculators.application.labels import get_label

INFINITY_SYMBOL = "∞"

CURRENCY_SYMBOLS = {
    "SAR": "SAR",
    "USD": "$",
}

Number = Union[Decimal, int, float]


def _is_undefined(value: Optional[Number]) -> bool:
    if value is None:
        return True
    if isinstance(value, Decimal):
        return not value.is_finite()
    if isinstance(value, float):
        return value != value or value in (float("inf"), float("-inf"))
    return False


def _quantize(value: Number, decimals: int) -> Decimal:
    exponent = Decimal(1).scaleb(-decimals)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def format_number(value: Optional[Number], decimals: int = 2, locale: str = "en", grouping: bool = True) -> str:
    if _is_undefined(value):
        return INFINITY_SYMBOL
    with translation.override(locale):
        return number_format(_quantize(value, decimals), decimal_pos=decimals, use_l10n=True, force_grouping=grouping)


def format_currency(value: Optional[Number], currency: str = "SAR", decimals: int = 2, locale: str = "en") -> str:
    """
    ``1234.5`` -> ``"1,234.50 SAR"``; USD uses a leading ``$``.
    """
    if _is_undefined(value):
        return INFINITY_SYMBOL
    amount = format_number(value, decimals, locale)
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    if symbol == "$":
        return f"${amount}"
    return f"{amount} {symbol}"


def format_percentage(value: Optional[Number], decimals: int = 2, locale: str = "en") -> str:
    if _is_undefined(value):
        return INFINITY_SYMBOL
    return f"{format_number(value, decimals, locale)}%"


def format_days(value: Optional[Number], locale: str = "en") -> str:
    if _is_undefined(value):
        return INFINITY_SYMBOL
    suffix = get_label("unit.days", locale)
    return f"{format_number(value, 1, locale)} {suffix}"


def format_units(value: Optional[Number], locale: str = "en") -> str:
    """Whole units, rounded up: you cannot sell a fraction of an item."""
    if _is_undefined(value):
        return INFINITY_SYMBOL
    whole = Decimal(str(value)).to_integral_value(rounding=ROUND_CEILING)
    with translation.override(locale):
        return number_format(whole, decimal_pos=0, use_l10n=True, force_grouping=True)


def format_weight(value: Optional[Number], unit: str = "kg", decimals: int = 3, locale: str = "en") -> str:
    if _is_undefined(value):
        return INFINITY_SYMBOL
    return f"{format_number(value, decimals, locale, grouping=False)} {unit}"


def format_date(value: Optional[date], locale: str = "en") -> str:
    """``date(2026, 10, 17)`` -> ``"Oct 17, 2026"`` in English."""
    if value is None:
        return INFINITY_SYMBOL
    with translation.override(locale):
        return dateformat.format(value, "M j, Y")

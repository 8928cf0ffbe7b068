from __future__ import annotations

"""
Currency formatting for unit finance displays.

- format_compact: ₦3.9K / ₦3.9M / ₦2.1B / ₦1.2T
- format_full: ₦1,234,567
- format_percent: +12.5% / -3% / 0%
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Union

from unitfin.config import CURRENCY_SYMBOL

Number = Union[int, float, Decimal]

# Largest first; the first threshold the magnitude reaches wins.
COMPACT_UNITS: tuple[tuple[Decimal, str], ...] = (
    (Decimal(10) ** 12, "T"),
    (Decimal(10) ** 9, "B"),
    (Decimal(10) ** 6, "M"),
    (Decimal(10) ** 3, "K"),
)

_ONE_PLACE = Decimal("0.1")
_WHOLE = Decimal("1")


def _to_decimal(amount: Number | None) -> Decimal:
    if amount is None:
        return Decimal(0)
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation:
        return Decimal(0)
    if not value.is_finite():
        return Decimal(0)
    return value


def _quantize(value: Decimal, exp: Decimal) -> Decimal:
    # Widen precision so quantize never runs out of digits on huge amounts
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(exp, rounding=ROUND_HALF_UP)


def _grouped_integer(value: Decimal) -> str:
    return f"{int(_quantize(value, _WHOLE)):,}"


def format_compact(amount: Number | None) -> str:
    """Abbreviate an amount with a K/M/B/T suffix, keeping the sign.

    Examples:
        format_compact(999) == "₦999"
        format_compact(1500) == "₦1.5K"
        format_compact(-2_000_000) == "-₦2M"
    """
    value = _to_decimal(amount)
    sign = "-" if value < 0 else ""
    magnitude = value.copy_abs()
    for threshold, symbol in COMPACT_UNITS:
        if magnitude >= threshold:
            with localcontext() as ctx:
                ctx.prec = max(ctx.prec, magnitude.adjusted() + 3)
                mantissa = magnitude / threshold
            mantissa = _quantize(mantissa, _ONE_PLACE)
            text = str(mantissa)
            if text.endswith(".0"):
                text = text[:-2]
            return f"{sign}{CURRENCY_SYMBOL}{text}{symbol}"
    grouped = _grouped_integer(magnitude)
    if grouped == "0":
        sign = ""
    return f"{sign}{CURRENCY_SYMBOL}{grouped}"


def format_full(amount: Number | None) -> str:
    """Full amount as a grouped whole number, e.g. "₦1,234,567"."""
    value = _to_decimal(amount)
    grouped = _grouped_integer(value.copy_abs())
    sign = "-" if value < 0 and grouped != "0" else ""
    return f"{sign}{CURRENCY_SYMBOL}{grouped}"


def format_percent(value: Number | None) -> str:
    """Signed percentage; whole numbers drop the decimal and zero is never "-0%"."""
    pct = _to_decimal(value)
    if pct == 0:
        return "0%"
    magnitude = pct.copy_abs()
    if magnitude == magnitude.to_integral_value():
        text = str(int(magnitude))
    else:
        text = str(_quantize(magnitude, _ONE_PLACE))
    sign = "+" if pct > 0 else "-"
    return f"{sign}{text}%"


__all__ = [
    "COMPACT_UNITS",
    "format_compact",
    "format_full",
    "format_percent",
]

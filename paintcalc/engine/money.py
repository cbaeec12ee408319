"""Rounding and clamping helpers shared by the pricing engines."""

from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP, getcontext, localcontext

Number = Decimal | float | int

WHOLE_UNIT = Decimal("1")
ZERO = Decimal("0")


def to_decimal(value: Number | None) -> Decimal:
    """Coerce int/float/Decimal input. Floats go through str so 0.1 stays 0.1."""
    if value is None:
        return ZERO
    dec = value if isinstance(value, Decimal) else Decimal(str(value))
    # NaN and infinities are treated as missing input
    if not dec.is_finite():
        return ZERO
    return dec


def _integer_context(dec: Decimal):
    # Rounding to whole units needs a precision covering every integer digit
    return localcontext(prec=max(getcontext().prec, dec.adjusted() + 2))


def round_currency(amount: Number | None) -> Decimal:
    """Round to the nearest whole currency unit, ties away from zero."""
    dec = to_decimal(amount)
    with _integer_context(dec):
        return dec.quantize(WHOLE_UNIT, ROUND_HALF_UP)


def clamp_non_neg(value: Number | None) -> Decimal:
    return max(ZERO, to_decimal(value))


def whole_count(value: Number | None) -> int:
    """Counts: fractional input truncated toward zero, negatives become 0."""
    dec = to_decimal(value)
    with _integer_context(dec):
        count = int(dec.to_integral_value(ROUND_DOWN))
    return max(0, count)


def fmt_number(value: Number | None) -> str:
    """Plain decimal text for basis strings: 200, 150.5, 1.88."""
    dec = to_decimal(value)
    with _integer_context(dec):
        integral = dec.to_integral_value()
    if dec == integral:
        return format(integral, "f")
    return format(dec.normalize(), "f")

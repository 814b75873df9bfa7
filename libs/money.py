"""Money helpers

All amounts are carried as Decimal with two places. Conversion is total:
missing, non-finite or unparsable inputs become zero instead of raising, so a
single bad row never aborts a computation over many.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_CEILING
from typing import Any

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

# Tolerance when comparing amount_paid against amount_due
AMOUNT_EPSILON = Decimal("0.000001")


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a loosely typed amount to Decimal without rounding

    Floats go through their shortest repr (0.1 + 0.2 -> "0.30000000000000004"),
    which keeps the value the user saw instead of the binary expansion.

    Args:
        value: int, float, Decimal, numeric string or None

    Returns:
        Decimal value, or Decimal(0) when the input is not a finite number
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal(0)
    try:
        if isinstance(value, float):
            result = Decimal(repr(value))
        else:
            result = Decimal(str(value).strip().replace(",", ""))
    except (InvalidOperation, ValueError):
        return Decimal(0)
    return result if result.is_finite() else Decimal(0)


def round2(value: Any) -> Decimal:
    """
    Round an amount to 2 decimal places, halves toward +infinity

    Matches the storefront's Math.round(x * 100) / 100: 1.005 -> 1.01 and
    -0.125 -> -0.12. Idempotent: round2(round2(x)) == round2(x).

    Args:
        value: Any amount accepted by to_decimal

    Returns:
        Decimal quantized to cents; 0.00 when the amount has more digits
        than the decimal context can hold
    """
    try:
        return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_CEILING)
    except InvalidOperation:
        return ZERO


def format_php(value: Any) -> str:
    """
    Format an amount as Philippine pesos

    Example: 11200 -> "₱11,200.00", -5 -> "-₱5.00"
    """
    amount = round2(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}₱{abs(amount):,.2f}"

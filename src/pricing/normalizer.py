"""
Charm price normalization.

Rounds a raw amount up to the nearest price ending in .99, so a quoted price
is never below the computed amount.

Examples:
    5.00  -> 5.99
    5.99  -> 5.99
    5.995 -> 6.99
    0.50  -> 0.99
"""

import math
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

CHARM_ENDING = Decimal("0.99")
CENTS = Decimal("0.01")


def to_finite_decimal(value: Any) -> Decimal | None:
    """
    Convert a numeric value to Decimal.

    Args:
        value: int, float, Decimal or numeric string.

    Returns:
        Decimal, or None if the value is not a finite number.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, Decimal):
            number = value
        else:
            as_float = float(value)
            if not math.isfinite(as_float):
                return None
            # str() keeps the shortest repr, so 5.995 stays 5.995
            number = Decimal(str(as_float))
    except (TypeError, ValueError, InvalidOperation):
        return None

    if not number.is_finite():
        return None
    return number


def round_up_to_charm(value: Decimal) -> Decimal:
    """
    Round a positive Decimal up to the next X.99 price.

    Precision grows with the magnitude of the value, so any finite amount
    can be quantized to cents.

    Args:
        value: Positive amount.

    Returns:
        Decimal: Price ending in .99, quantized to cents.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 6)
        whole = value.to_integral_value(rounding=ROUND_FLOOR)
        candidate = whole + CHARM_ENDING
        if candidate < value:
            candidate = whole + 1 + CHARM_ENDING
        return candidate.quantize(CENTS, rounding=ROUND_HALF_UP)


def normalize_price(value: Any) -> float:
    """
    Normalize a raw price to the .99 convention.

    Non-numeric, non-finite, zero and negative values normalize to 0, as do
    results too large to represent as a float.

    Args:
        value: Raw price.

    Returns:
        float: Normalized price, or 0.0.
    """
    number = to_finite_decimal(value)
    if number is None or number <= 0:
        return 0.0
    result = float(round_up_to_charm(number))
    if not math.isfinite(result):
        return 0.0
    return result

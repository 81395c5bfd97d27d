"""
Money Module

This module holds the single rounding and tolerance policy used by the
ledger and settlement calculations.

Features:
    - Convert int/float/str/Decimal inputs to Decimal safely
    - Round to cents with ROUND_HALF_UP
    - One shared tolerance (EPSILON) for "settled" comparisons

Functions:
    to_decimal: Convert a raw amount to a Decimal.
    round_money: Round a Decimal to 2 decimal places.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


# Balances within one cent of zero are considered settled
EPSILON = Decimal("0.01")

CENTS = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """
    Convert a raw amount to a Decimal.

    Floats go through str() so that 0.1 becomes Decimal("0.1") rather
    than its binary expansion.

    Args:
        value: int, float, str or Decimal amount.

    Returns:
        Decimal: The converted amount.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"amount must be a number, got: {value!r}")

    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValueError(f"amount must be a number, got: {value!r}")

    if not result.is_finite():
        raise ValueError(f"amount must be finite, got: {value!r}")
    return result


def round_money(value: Decimal) -> Decimal:
    """Round a Decimal to 2 decimal places (ROUND_HALF_UP)."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)

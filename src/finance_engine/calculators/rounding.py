"""Amount rounding shared by the invoice and payroll calculators.

Rounding:
- Every stored or returned monetary amount is rounded to 2 decimals
- ROUND_HALF_UP, so 10.125 -> 10.13
- ``round_amount`` is the only rounding primitive in the engine
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
OUTPUT_PRECISION = Decimal("0.01")


def to_decimal(value: Number | None) -> Decimal:
    """Coerce a numeric input to Decimal.

    Floats go through ``str`` so 100.333 stays 100.333 instead of its
    binary expansion. ``None`` is treated as zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("booleans are not amounts")
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_amount(value: Number | None) -> Decimal:
    """Round amount to 2 decimal places."""
    return to_decimal(value).quantize(OUTPUT_PRECISION, rounding=ROUND_HALF_UP)


def percentage_of(amount: Decimal, percentage: Number | None) -> Decimal:
    """Return ``percentage`` percent of ``amount`` (unrounded)."""
    return amount * (to_decimal(percentage) / HUNDRED)


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide, degrading to zero when the divisor is zero."""
    if denominator == 0:
        return ZERO
    return numerator / denominator

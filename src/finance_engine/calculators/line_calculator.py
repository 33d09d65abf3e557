"""Per-line total calculation for invoices, quotes and purchases."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from finance_engine.calculators.rounding import (
    HUNDRED,
    ZERO,
    Number,
    percentage_of,
    round_amount,
    safe_divide,
    to_decimal,
)
from finance_engine.calculators.types import CalculationConfig, LineItem, LineTotals


def extract_included_tax(amount: Number, tax_percent: Number) -> Decimal:
    """Return the tax contained in a tax-inclusive ``amount``.

    amount - amount / (1 + tax_percent/100). Unrounded. A divisor of zero
    (tax_percent == -100) yields zero.
    """
    amount = to_decimal(amount)
    divisor = 1 + to_decimal(tax_percent) / HUNDRED
    if divisor == 0:
        return ZERO
    return amount - safe_divide(amount, divisor)


def remove_included_tax(amount: Number, tax_percent: Number) -> Decimal:
    """Return the net amount inside a tax-inclusive ``amount`` (unrounded)."""
    amount = to_decimal(amount)
    return amount - extract_included_tax(amount, tax_percent)


def add_tax(amount: Number, tax_percent: Number) -> Decimal:
    """Return ``amount`` plus ``tax_percent`` percent of it, rounded."""
    amount = to_decimal(amount)
    return round_amount(amount + percentage_of(amount, tax_percent))


class LineCalculator:
    """Computes totals for one document line.

    Calculation order (each step rounded to cents):
    1) raw amount = price * quantity
    2) tax: extracted from raw amount when tax is included, added on top otherwise
    3) tax-exclusive amount = raw amount - extracted tax
    4) discount on the tax-exclusive amount
    5) retention on the tax-exclusive amount
    6) subtotal = tax-exclusive amount - retention
    7) total = subtotal + tax - discount
    """

    @staticmethod
    def calculate(
        line: LineItem | Mapping[str, Any],
        config: CalculationConfig,
    ) -> LineTotals:
        """Calculate totals for a single line."""
        if not isinstance(line, LineItem):
            line = LineItem.from_mapping(line)

        raw_amount = round_amount(line.price * line.quantity)

        if config.tax_included:
            total_tax = round_amount(extract_included_tax(raw_amount, line.tax_percent))
            tax_to_subtract = total_tax
        else:
            total_tax = round_amount(percentage_of(raw_amount, line.tax_percent))
            tax_to_subtract = ZERO

        total_minus_tax = round_amount(raw_amount - tax_to_subtract)
        total_discount = round_amount(percentage_of(total_minus_tax, line.discount_percent))
        total_retention = round_amount(
            percentage_of(total_minus_tax, config.retention_percent)
        )
        subtotal = round_amount(total_minus_tax - total_retention)
        total = round_amount(subtotal + total_tax - total_discount)

        return LineTotals(
            total=total,
            subtotal=subtotal,
            total_tax=total_tax,
            total_discount=total_discount,
            total_retention=total_retention,
        )

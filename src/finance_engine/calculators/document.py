"""Document-level aggregation of line totals."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Mapping

from finance_engine.calculators.line_calculator import LineCalculator
from finance_engine.calculators.rounding import ZERO, round_amount
from finance_engine.calculators.types import (
    CalculationConfig,
    DocumentTotals,
    LineItem,
    LineTotals,
)


class DocumentAggregator:
    """Sums line totals across a document.

    Each line is calculated independently with the document's config; the
    sums are rounded once more at the end to absorb summation drift.
    Refund lines (negative quantity) are also summed into ``total_refunds``.
    """

    @staticmethod
    def line_totals(
        lines: Iterable[LineItem | Mapping[str, Any]],
        config: CalculationConfig,
    ) -> list[LineTotals]:
        """Calculate every line, preserving input order."""
        return [LineCalculator.calculate(line, config) for line in lines]

    @staticmethod
    def calculate(
        lines: Iterable[LineItem | Mapping[str, Any]],
        config: CalculationConfig,
    ) -> DocumentTotals:
        """Calculate aggregated totals for a document."""
        sums: dict[str, Decimal] = {
            "total": ZERO,
            "subtotal": ZERO,
            "total_tax": ZERO,
            "total_discount": ZERO,
            "total_retention": ZERO,
        }
        total_refunds = ZERO

        for line in lines:
            if not isinstance(line, LineItem):
                line = LineItem.from_mapping(line)
            totals = LineCalculator.calculate(line, config)
            for name, value in totals.to_dict().items():
                sums[name] += value
            if line.is_refund:
                total_refunds += totals.total

        return DocumentTotals(
            total=round_amount(sums["total"]),
            subtotal=round_amount(sums["subtotal"]),
            total_tax=round_amount(sums["total_tax"]),
            total_discount=round_amount(sums["total_discount"]),
            total_retention=round_amount(sums["total_retention"]),
            total_refunds=round_amount(total_refunds),
        )

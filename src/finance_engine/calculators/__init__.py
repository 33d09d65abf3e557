"""Invoice line and document calculations."""

from finance_engine.calculators.document import DocumentAggregator
from finance_engine.calculators.line_calculator import (
    LineCalculator,
    add_tax,
    extract_included_tax,
    remove_included_tax,
)
from finance_engine.calculators.rounding import round_amount, to_decimal
from finance_engine.calculators.types import (
    CalculationConfig,
    DocumentTotals,
    LineItem,
    LineTotals,
)

__all__ = [
    "CalculationConfig",
    "DocumentAggregator",
    "DocumentTotals",
    "LineCalculator",
    "LineItem",
    "LineTotals",
    "add_tax",
    "extract_included_tax",
    "remove_included_tax",
    "round_amount",
    "to_decimal",
]

"""Finance engine: invoice line totals and payroll concept calculations."""

from finance_engine.calculators import (
    CalculationConfig,
    DocumentAggregator,
    DocumentTotals,
    LineCalculator,
    LineItem,
    LineTotals,
    round_amount,
)
from finance_engine.config import Settings, get_settings
from finance_engine.logging_config import configure_logging
from finance_engine.payroll import (
    CATALOG,
    Concept,
    ConceptAdjuster,
    ConceptCalculator,
    ConceptCatalog,
    ConceptCode,
    ConceptIssue,
    ConceptNotFoundError,
    ConceptType,
    IssueKind,
    PeriodFrequency,
    ProrationContext,
    ProrationHelper,
    UnsupportedProrationFrequencyError,
)
from finance_engine.schemas import ParseResult, parse_concepts

__version__ = "1.0.0"

__all__ = [
    "CATALOG",
    "CalculationConfig",
    "Concept",
    "ConceptAdjuster",
    "ConceptCalculator",
    "ConceptCatalog",
    "ConceptCode",
    "ConceptIssue",
    "ConceptNotFoundError",
    "ConceptType",
    "DocumentAggregator",
    "DocumentTotals",
    "IssueKind",
    "LineCalculator",
    "LineItem",
    "LineTotals",
    "ParseResult",
    "PeriodFrequency",
    "ProrationContext",
    "ProrationHelper",
    "Settings",
    "UnsupportedProrationFrequencyError",
    "configure_logging",
    "get_settings",
    "parse_concepts",
    "round_amount",
]

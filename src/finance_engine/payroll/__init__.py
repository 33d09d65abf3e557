"""Payroll concept catalog and calculations."""

from finance_engine.payroll.adjuster import ConceptAdjuster, ConceptIssue, IssueKind
from finance_engine.payroll.catalog import CATALOG, ConceptCatalog, ConceptNotFoundError
from finance_engine.payroll.concept_calculator import ConceptCalculator
from finance_engine.payroll.proration import (
    PeriodFrequency,
    ProrationHelper,
    UnsupportedProrationFrequencyError,
)
from finance_engine.payroll.types import (
    CalculationSubtype,
    Concept,
    ConceptCode,
    ConceptDefinition,
    ConceptTotals,
    ConceptType,
    ProrationContext,
)

__all__ = [
    "CATALOG",
    "CalculationSubtype",
    "Concept",
    "ConceptAdjuster",
    "ConceptCalculator",
    "ConceptCatalog",
    "ConceptCode",
    "ConceptDefinition",
    "ConceptIssue",
    "ConceptNotFoundError",
    "ConceptTotals",
    "ConceptType",
    "IssueKind",
    "PeriodFrequency",
    "ProrationContext",
    "ProrationHelper",
    "UnsupportedProrationFrequencyError",
]

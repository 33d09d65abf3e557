"""Validation and context-driven recalculation of payroll concept sets."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable

from finance_engine.calculators.rounding import ZERO, round_amount
from finance_engine.payroll.catalog import CATALOG, ConceptCatalog
from finance_engine.payroll.concept_calculator import ConceptCalculator
from finance_engine.payroll.types import (
    CalculationSubtype,
    Concept,
    ConceptCode,
    ConceptDefinition,
    ConceptTotals,
    ConceptType,
    ProrationContext,
)

logger = logging.getLogger(__name__)


class IssueKind(str, Enum):
    """Kinds of problems ``ConceptAdjuster.validate`` reports."""

    MISSING_REQUIRED_CONCEPT = "MISSING_REQUIRED_CONCEPT"
    DUPLICATE_CONCEPT = "DUPLICATE_CONCEPT"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    UNKNOWN_CONCEPT = "UNKNOWN_CONCEPT"


@dataclass(frozen=True)
class ConceptIssue:
    """One validation problem in a concept set."""

    kind: IssueKind
    key_name: str
    message: str

    def __str__(self) -> str:
        return self.message


class ConceptAdjuster:
    """Keeps a concept set consistent with the catalog and salary context.

    All operations return new Concept instances; the list passed in is
    never modified.
    """

    def __init__(self, catalog: ConceptCatalog = CATALOG):
        self.catalog = catalog

    def _definition(self, concept: Concept) -> ConceptDefinition | None:
        return self.catalog.find(concept.key_name, concept.type)

    def validate(self, concepts: Iterable[Concept]) -> list[ConceptIssue]:
        """Collect every problem in a concept set.

        Returns list of issues (empty if the set is valid). Never raises.
        """
        concepts = list(concepts)
        issues: list[ConceptIssue] = []

        present = {(c.type, c.normalized_key) for c in concepts}
        for definition in self.catalog.required():
            if (definition.type, definition.normalized_key) not in present:
                issues.append(
                    ConceptIssue(
                        kind=IssueKind.MISSING_REQUIRED_CONCEPT,
                        key_name=definition.key_name,
                        message=f"Concept '{definition.key_name}' is required",
                    )
                )

        counts = Counter(c.normalized_key for c in concepts)
        reported: set[str] = set()
        for concept in concepts:
            key = concept.normalized_key
            if counts[key] > 1 and key not in reported:
                reported.add(key)
                issues.append(
                    ConceptIssue(
                        kind=IssueKind.DUPLICATE_CONCEPT,
                        key_name=concept.key_name,
                        message=(
                            f"Concept '{concept.key_name}' appears {counts[key]} times"
                        ),
                    )
                )

        for concept in concepts:
            definition = self._definition(concept)
            if definition is None:
                issues.append(
                    ConceptIssue(
                        kind=IssueKind.UNKNOWN_CONCEPT,
                        key_name=concept.key_name,
                        message=(
                            f"Concept '{concept.key_name}' is not a known "
                            f"{concept.type.value} concept"
                        ),
                    )
                )
            elif definition.whole_units and concept.quantity % 1 != 0:
                issues.append(
                    ConceptIssue(
                        kind=IssueKind.INVALID_QUANTITY,
                        key_name=concept.key_name,
                        message=(
                            f"Concept '{concept.key_name}' quantity must be a whole "
                            f"number, got {concept.quantity}"
                        ),
                    )
                )

        return issues

    def adjust_to_base_salary(
        self, concepts: Iterable[Concept], context: ProrationContext
    ) -> list[Concept]:
        """Recompute salary-dependent concepts for a new salary context.

        - Percent-of-salary concepts are recomputed from ``context.salary``
        - Salary takes ``context.salary``
        - Severance accrual takes days worked as quantity and is recomputed
        - Severance interest is recomputed for days worked
        - Everything else is copied unchanged
        """
        adjusted: list[Concept] = []

        for concept in concepts:
            definition = self._definition(concept)
            if definition is None:
                adjusted.append(concept.with_values())
                continue

            amount = concept.amount
            quantity = concept.quantity

            if definition.subtype is CalculationSubtype.PERCENT_OF_SALARY:
                amount = round_amount(
                    ConceptCalculator.percent_of_salary(
                        context.salary,
                        ConceptCalculator.effective_percentage(concept, definition),
                    )
                )

            if definition.code is ConceptCode.SALARY:
                amount = round_amount(context.salary)
            elif definition.code is ConceptCode.LAYOFF:
                quantity = Decimal(context.days_worked)
                amount = round_amount(
                    ConceptCalculator.layoff(context.base_salary, quantity)
                )
            elif definition.code is ConceptCode.LAYOFF_INTEREST:
                amount = round_amount(
                    ConceptCalculator.layoff_interest(
                        context.base_salary, context.days_worked
                    )
                )

            adjusted.append(concept.with_values(amount=amount, quantity=quantity))

        return adjusted

    def build_defaults(self, context: ProrationContext) -> list[Concept]:
        """Create the starting concept set for an employee and pay period.

        One concept per required catalog entry, plus the transport subsidy
        when the employee receives it, adjusted to the salary context.
        """
        concepts: list[Concept] = []
        for definition in self.catalog.required():
            amount = context.salary if definition.code is ConceptCode.SALARY else ZERO
            concepts.append(
                Concept(key_name=definition.key_name, type=definition.type, amount=amount)
            )

        if context.has_transport_aid:
            transport_aid = self.catalog.get(ConceptCode.TRANSPORT_AID)
            concepts.append(
                Concept(
                    key_name=transport_aid.key_name,
                    type=transport_aid.type,
                    amount=round_amount(
                        ConceptCalculator.day_prorated(
                            transport_aid.day_based_full_value or ZERO,
                            context.days_worked,
                        )
                    ),
                    quantity=Decimal(context.days_worked),
                )
            )

        logger.debug(
            "Built %d default concepts for %s days worked",
            len(concepts),
            context.days_worked,
        )
        return self.adjust_to_base_salary(concepts, context)

    def recompute(
        self, concepts: Iterable[Concept], context: ProrationContext
    ) -> list[Concept]:
        """Recompute every known concept from its subtype.

        Severance interest uses the severance accrual's quantity when the set
        contains one. Direct-value concepts keep the amount they carry.
        """
        resolved = [(c, self._definition(c)) for c in concepts]
        layoff_days = next(
            (
                c.quantity
                for c, definition in resolved
                if definition is not None and definition.code is ConceptCode.LAYOFF
            ),
            None,
        )

        recomputed: list[Concept] = []
        for concept, definition in resolved:
            if definition is None or definition.subtype is CalculationSubtype.DIRECT_VALUE:
                recomputed.append(concept.with_values())
                continue
            amount = ConceptCalculator.compute(
                concept, definition, context, layoff_days=layoff_days
            )
            recomputed.append(concept.with_values(amount=round_amount(amount)))

        return recomputed

    def totals(self, concepts: Iterable[Concept]) -> ConceptTotals:
        """Sum incomes and deductions of a concept set."""
        total_incomes = ZERO
        total_deductions = ZERO
        salary = ZERO

        for concept in concepts:
            if concept.type is ConceptType.INCOME:
                total_incomes += concept.amount
                definition = self._definition(concept)
                if definition is not None and definition.code is ConceptCode.SALARY:
                    salary = concept.amount
            else:
                total_deductions += concept.amount

        return ConceptTotals(
            total_incomes=round_amount(total_incomes),
            total_deductions=round_amount(total_deductions),
            total=round_amount(total_incomes - total_deductions),
            salary=round_amount(salary),
        )

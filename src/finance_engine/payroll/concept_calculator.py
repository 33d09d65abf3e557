"""Amount formulas for payroll concepts, one per calculation subtype."""

from __future__ import annotations

from decimal import Decimal

from finance_engine.calculators.rounding import (
    HUNDRED,
    ZERO,
    Number,
    percentage_of,
    safe_divide,
    to_decimal,
)
from finance_engine.payroll.types import (
    CalculationSubtype,
    Concept,
    ConceptDefinition,
    ProrationContext,
)

HOURS_PER_MONTH = Decimal("240")
DAYS_PER_YEAR = Decimal("360")
DAYS_PER_MONTH = Decimal("30")
LAYOFF_INTEREST_RATE = Decimal("0.12")


class ConceptCalculator:
    """Pure formulas for concept amounts.

    Results are unrounded; callers round when storing on a Concept.
    """

    @staticmethod
    def percent_of_salary(salary: Number, percentage: Number) -> Decimal:
        """Percentage of the period salary (service bonus, health, pension)."""
        return percentage_of(to_decimal(salary), percentage)

    @staticmethod
    def quantity_based(
        base_salary: Number,
        percentage: Number,
        multiplier: Number | None,
        quantity: Number,
    ) -> Decimal:
        """Hours or days paid at the base hourly wage plus a surcharge.

        hourly = base_salary / 240, raised by ``percentage`` percent, times
        quantity and multiplier (1 when unset).
        """
        hourly = to_decimal(base_salary) / HOURS_PER_MONTH
        adjusted = hourly * (1 + to_decimal(percentage) / HUNDRED)
        factor = to_decimal(multiplier) if multiplier else Decimal("1")
        return adjusted * to_decimal(quantity) * factor

    @staticmethod
    def layoff(base_salary: Number, quantity: Number) -> Decimal:
        """Severance accrual for ``quantity`` days."""
        return to_decimal(base_salary) * to_decimal(quantity) / DAYS_PER_YEAR

    @staticmethod
    def layoff_interest(base_salary: Number, quantity: Number) -> Decimal:
        """Yearly 12% interest on the severance accrual, for ``quantity`` days."""
        quantity = to_decimal(quantity)
        if quantity == 0:
            return ZERO
        layoff_value = ConceptCalculator.layoff(base_salary, quantity)
        return safe_divide(layoff_value * LAYOFF_INTEREST_RATE * quantity, DAYS_PER_YEAR)

    @staticmethod
    def day_prorated(full_month_value: Number, days_worked: Number) -> Decimal:
        return to_decimal(full_month_value) / DAYS_PER_MONTH * to_decimal(days_worked)

    @staticmethod
    def direct_value(amount: Number) -> Decimal:
        return to_decimal(amount)

    @staticmethod
    def effective_percentage(concept: Concept, definition: ConceptDefinition) -> Decimal:
        """Custom percentage floored at 0, else the catalog percentage."""
        if concept.custom_percentage is None:
            return definition.percentage
        return max(concept.custom_percentage, ZERO)

    @staticmethod
    def compute(
        concept: Concept,
        definition: ConceptDefinition,
        context: ProrationContext,
        layoff_days: Number | None = None,
    ) -> Decimal:
        """Derive a concept's amount from its subtype.

        ``layoff_days`` is the accrual day count used for layoff interest;
        the context's days worked are used when it is not given.
        """
        subtype = definition.subtype

        if subtype is CalculationSubtype.DIRECT_VALUE:
            return ConceptCalculator.direct_value(concept.amount)
        if subtype is CalculationSubtype.DAY_PRORATED:
            return ConceptCalculator.day_prorated(
                definition.day_based_full_value or ZERO, context.days_worked
            )
        if subtype is CalculationSubtype.QUANTITY_BASED:
            return ConceptCalculator.quantity_based(
                context.base_salary,
                definition.percentage,
                definition.multiplier,
                concept.quantity,
            )
        if subtype is CalculationSubtype.PERCENT_OF_SALARY:
            return ConceptCalculator.percent_of_salary(
                context.salary,
                ConceptCalculator.effective_percentage(concept, definition),
            )
        if subtype is CalculationSubtype.LAYOFF:
            return ConceptCalculator.layoff(context.base_salary, concept.quantity)
        if subtype is CalculationSubtype.LAYOFF_INTEREST:
            days = context.days_worked if layoff_days is None else layoff_days
            return ConceptCalculator.layoff_interest(context.base_salary, days)

        raise ValueError(f"Unsupported calculation subtype: {subtype!r}")

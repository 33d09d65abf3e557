"""Type definitions for payroll concept calculations."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from finance_engine.calculators.rounding import ZERO, Number, to_decimal


class ConceptType(str, Enum):
    """Payroll concept direction."""

    INCOME = "income"
    DEDUCTION = "deduction"


class CalculationSubtype(str, Enum):
    """How a concept's amount is derived."""

    DIRECT_VALUE = "value"
    DAY_PRORATED = "valueFromDaysWorked"
    QUANTITY_BASED = "quantity"
    PERCENT_OF_SALARY = "percentOfSalary"
    LAYOFF = "layOff"
    LAYOFF_INTEREST = "layOffInterests"


class ConceptCode(str, Enum):
    """Stable identity of a catalog concept, independent of its label."""

    # Incomes
    SALARY = "SALARY"
    TRANSPORT_AID = "TRANSPORT_AID"
    SALARY_PER_DIEM = "SALARY_PER_DIEM"
    NON_SALARY_PER_DIEM = "NON_SALARY_PER_DIEM"
    DAYTIME_OVERTIME = "DAYTIME_OVERTIME"
    NIGHT_OVERTIME = "NIGHT_OVERTIME"
    HOLIDAY_OVERTIME = "HOLIDAY_OVERTIME"
    HOLIDAY_NIGHT_OVERTIME = "HOLIDAY_NIGHT_OVERTIME"
    NIGHT_SURCHARGE = "NIGHT_SURCHARGE"
    HOLIDAY_SURCHARGE = "HOLIDAY_SURCHARGE"
    HOLIDAY_NIGHT_SURCHARGE = "HOLIDAY_NIGHT_SURCHARGE"
    VACATION = "VACATION"
    UNTAKEN_VACATION = "UNTAKEN_VACATION"
    SERVICE_BONUS = "SERVICE_BONUS"
    NON_SALARY_SERVICE_BONUS = "NON_SALARY_SERVICE_BONUS"
    LAYOFF = "LAYOFF"
    LAYOFF_INTEREST = "LAYOFF_INTEREST"
    DISABILITY = "DISABILITY"
    PARENTAL_LEAVE = "PARENTAL_LEAVE"
    PAID_LEAVE = "PAID_LEAVE"
    UNPAID_LEAVE = "UNPAID_LEAVE"
    SALARY_BONUS = "SALARY_BONUS"
    NON_SALARY_BONUS = "NON_SALARY_BONUS"
    SALARY_ALLOWANCE = "SALARY_ALLOWANCE"
    NON_SALARY_ALLOWANCE = "NON_SALARY_ALLOWANCE"
    OTHER_SALARY_INCOME = "OTHER_SALARY_INCOME"
    OTHER_NON_SALARY_INCOME = "OTHER_NON_SALARY_INCOME"
    ORDINARY_COMPENSATION = "ORDINARY_COMPENSATION"
    EXTRAORDINARY_COMPENSATION = "EXTRAORDINARY_COMPENSATION"
    FOOD_BONUS = "FOOD_BONUS"
    NON_SALARY_FOOD_BONUS = "NON_SALARY_FOOD_BONUS"
    OTHER_BONUSES = "OTHER_BONUSES"
    OTHER_NON_SALARY_BONUSES = "OTHER_NON_SALARY_BONUSES"
    COMMISSIONS = "COMMISSIONS"
    THIRD_PARTY_PAYMENT_INCOME = "THIRD_PARTY_PAYMENT_INCOME"
    ADVANCES_INCOME = "ADVANCES_INCOME"
    WORK_SUPPLIES = "WORK_SUPPLIES"
    SUPPORT_STIPEND = "SUPPORT_STIPEND"
    TELEWORK = "TELEWORK"
    RETIREMENT_BONUS = "RETIREMENT_BONUS"
    DISMISSAL_COMPENSATION = "DISMISSAL_COMPENSATION"
    REFUND_INCOME = "REFUND_INCOME"
    OTHER_CONCEPTS = "OTHER_CONCEPTS"
    OTHER_NON_SALARY_CONCEPTS = "OTHER_NON_SALARY_CONCEPTS"

    # Deductions
    HEALTH = "HEALTH"
    PENSION = "PENSION"
    PENSION_SECURITY_FUND = "PENSION_SECURITY_FUND"
    UNION_DUES = "UNION_DUES"
    PUBLIC_SANCTION = "PUBLIC_SANCTION"
    PRIVATE_SANCTION = "PRIVATE_SANCTION"
    PAYROLL_LOAN = "PAYROLL_LOAN"
    THIRD_PARTY_PAYMENT_DEDUCTION = "THIRD_PARTY_PAYMENT_DEDUCTION"
    ADVANCES_DEDUCTION = "ADVANCES_DEDUCTION"
    OTHER_DEDUCTIONS = "OTHER_DEDUCTIONS"
    VOLUNTARY_PENSION = "VOLUNTARY_PENSION"
    WITHHOLDING_TAX = "WITHHOLDING_TAX"
    AFC = "AFC"
    COOPERATIVE = "COOPERATIVE"
    TAX_GARNISHMENT = "TAX_GARNISHMENT"
    COMPLEMENTARY_PLAN = "COMPLEMENTARY_PLAN"
    EDUCATION = "EDUCATION"
    REFUND_DEDUCTION = "REFUND_DEDUCTION"
    DEBT_PAYMENT = "DEBT_PAYMENT"
    SUBSISTENCE_FUND = "SUBSISTENCE_FUND"


def normalize_key(key_name: str) -> str:
    """Case- and whitespace-insensitive form of a concept label."""
    return key_name.strip().lower()


@dataclass(frozen=True)
class ConceptDefinition:
    """Catalog entry describing one kind of payroll concept."""

    code: ConceptCode
    key_name: str  # Display label
    type: ConceptType
    subtype: CalculationSubtype
    percentage: Decimal = ZERO  # Used by QUANTITY_BASED and PERCENT_OF_SALARY
    required: bool = False
    read_only: bool = False
    day_based_full_value: Decimal | None = None  # Full-month value for DAY_PRORATED
    multiplier: Decimal | None = None
    quantity_label: str | None = None
    whole_units: bool = False  # Quantity must be an integer

    @property
    def normalized_key(self) -> str:
        return normalize_key(self.key_name)


@dataclass
class Concept:
    """A payroll line item for one employee in one pay period.

    Owned by the caller. Engine functions return updated copies rather
    than mutating instances they receive.
    """

    key_name: str
    type: ConceptType
    amount: Decimal = ZERO
    quantity: Decimal = ZERO
    custom_percentage: Decimal | None = None
    id: str = field(default_factory=lambda: str(uuid4()))

    def __post_init__(self) -> None:
        self.type = ConceptType(self.type)
        self.amount = to_decimal(self.amount)
        self.quantity = to_decimal(self.quantity)
        if self.custom_percentage is not None:
            self.custom_percentage = to_decimal(self.custom_percentage)

    @property
    def normalized_key(self) -> str:
        return normalize_key(self.key_name)

    def with_values(self, **changes) -> Concept:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class ProrationContext:
    """Salary context for one employee and pay period.

    ``salary`` is the amount paid for the period; ``base_salary`` is its
    monthly equivalent.
    """

    salary: Decimal
    base_salary: Decimal
    days_worked: int
    has_transport_aid: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "salary", to_decimal(self.salary))
        object.__setattr__(self, "base_salary", to_decimal(self.base_salary))
        days_worked = to_decimal(self.days_worked)
        if days_worked % 1 != 0:
            raise ValueError(
                f"days_worked must be a whole number, got {self.days_worked}"
            )
        object.__setattr__(self, "days_worked", int(days_worked))

    @classmethod
    def from_portion(
        cls,
        salary: Number,
        days_worked: int,
        has_transport_aid: bool = False,
        strict: bool | None = None,
    ) -> ProrationContext:
        """Build a context whose base salary is reconstructed from the period salary."""
        from finance_engine.payroll.proration import ProrationHelper

        return cls(
            salary=to_decimal(salary),
            base_salary=ProrationHelper.base_salary_from_portion(
                days_worked, salary, strict=strict
            ),
            days_worked=days_worked,
            has_transport_aid=has_transport_aid,
        )


@dataclass(frozen=True)
class ConceptTotals:
    """Aggregate amounts of a concept set."""

    total_incomes: Decimal = ZERO
    total_deductions: Decimal = ZERO
    total: Decimal = ZERO  # incomes - deductions
    salary: Decimal = ZERO

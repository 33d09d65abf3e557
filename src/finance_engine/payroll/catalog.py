"""Payroll concept catalog.

The catalog is built once at import time and is read-only afterwards:
definitions are frozen dataclasses held in tuples, and the lookup indexes
are exposed through ``MappingProxyType``.
"""

from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType
from typing import Iterator

from finance_engine.payroll.types import (
    CalculationSubtype,
    ConceptCode,
    ConceptDefinition,
    ConceptType,
    normalize_key,
)

INCOME = ConceptType.INCOME
DEDUCTION = ConceptType.DEDUCTION

VALUE = CalculationSubtype.DIRECT_VALUE
DAYS = CalculationSubtype.DAY_PRORATED
QUANTITY = CalculationSubtype.QUANTITY_BASED
PERCENT = CalculationSubtype.PERCENT_OF_SALARY

HOURS_LABEL = "Horas trabajadas"
VACATION_LABEL = "Días de vacaciones"
LEAVE_LABEL = "Días de licencia"

TRANSPORT_AID_MONTHLY_VALUE = Decimal("162000")
HOURS_PER_VACATION_DAY = Decimal("8")


class ConceptNotFoundError(Exception):
    """Raised when a concept is not in the catalog."""

    def __init__(self, key_name: str, concept_type: ConceptType | None = None):
        self.key_name = key_name
        self.concept_type = concept_type
        msg = f"Concept '{key_name}' not found"
        if concept_type is not None:
            msg += f" among {concept_type.value} concepts"
        super().__init__(msg)


def _value(code: ConceptCode, key_name: str, concept_type: ConceptType) -> ConceptDefinition:
    return ConceptDefinition(code=code, key_name=key_name, type=concept_type, subtype=VALUE)


def _hours(code: ConceptCode, key_name: str, percentage: str) -> ConceptDefinition:
    return ConceptDefinition(
        code=code,
        key_name=key_name,
        type=INCOME,
        subtype=QUANTITY,
        percentage=Decimal(percentage),
        quantity_label=HOURS_LABEL,
        read_only=True,
    )


def _days(
    code: ConceptCode, key_name: str, percentage: str, label: str
) -> ConceptDefinition:
    return ConceptDefinition(
        code=code,
        key_name=key_name,
        type=INCOME,
        subtype=QUANTITY,
        percentage=Decimal(percentage),
        quantity_label=label,
        read_only=True,
    )


C = ConceptCode

DEFINITIONS: tuple[ConceptDefinition, ...] = (
    # Incomes
    ConceptDefinition(
        code=C.SALARY,
        key_name="Salario",
        type=INCOME,
        subtype=VALUE,
        required=True,
    ),
    ConceptDefinition(
        code=C.TRANSPORT_AID,
        key_name="Auxilio de transporte",
        type=INCOME,
        subtype=DAYS,
        day_based_full_value=TRANSPORT_AID_MONTHLY_VALUE,
        read_only=True,
    ),
    _value(C.SALARY_PER_DIEM, "Viaticos salariales", INCOME),
    _value(C.NON_SALARY_PER_DIEM, "Viaticos no salariales", INCOME),
    _hours(C.DAYTIME_OVERTIME, "Horas diurnas extras (25%)", "25"),
    _hours(C.NIGHT_OVERTIME, "Horas nocturnas extras (75%)", "75"),
    _hours(C.HOLIDAY_OVERTIME, "Horas extras dominicales y festivas (100%)", "100"),
    _hours(
        C.HOLIDAY_NIGHT_OVERTIME,
        "Horas extras nocturnas dominicales y festivas (150%)",
        "150",
    ),
    _hours(C.NIGHT_SURCHARGE, "Horas recargos nocturnos (35%)", "35"),
    _hours(C.HOLIDAY_SURCHARGE, "Horas de recargo dominicales y festivas (75%)", "75"),
    _hours(
        C.HOLIDAY_NIGHT_SURCHARGE,
        "Horas de recargo nocturno dominicales y festivas (110%)",
        "110",
    ),
    ConceptDefinition(
        code=C.VACATION,
        key_name="Vacaciones regulares",
        type=INCOME,
        subtype=QUANTITY,
        multiplier=HOURS_PER_VACATION_DAY,
        quantity_label=VACATION_LABEL,
        read_only=True,
        whole_units=True,
    ),
    ConceptDefinition(
        code=C.UNTAKEN_VACATION,
        key_name="Vacaciones no tomadas",
        type=INCOME,
        subtype=QUANTITY,
        multiplier=HOURS_PER_VACATION_DAY,
        quantity_label=VACATION_LABEL,
        read_only=True,
    ),
    ConceptDefinition(
        code=C.SERVICE_BONUS,
        key_name="Prima",
        type=INCOME,
        subtype=PERCENT,
        percentage=Decimal("8.3333333"),
        required=True,
        read_only=True,
    ),
    _value(C.NON_SALARY_SERVICE_BONUS, "Prima no salarial", INCOME),
    ConceptDefinition(
        code=C.LAYOFF,
        key_name="Cesantías",
        type=INCOME,
        subtype=CalculationSubtype.LAYOFF,
        required=True,
        read_only=True,
    ),
    ConceptDefinition(
        code=C.LAYOFF_INTEREST,
        key_name="Intereses a las cesantías",
        type=INCOME,
        subtype=CalculationSubtype.LAYOFF_INTEREST,
        required=True,
        read_only=True,
    ),
    _days(C.DISABILITY, "Incapacidad", "100", "Días de incapacidad"),
    _days(C.PARENTAL_LEAVE, "Licencia de maternidad o paternidad", "100", LEAVE_LABEL),
    _days(C.PAID_LEAVE, "Licencia remunerada", "100", LEAVE_LABEL),
    _days(C.UNPAID_LEAVE, "Licencia no remunerada", "0", LEAVE_LABEL),
    _value(C.SALARY_BONUS, "Bonificación salarial", INCOME),
    _value(C.NON_SALARY_BONUS, "Bonificación no salarial", INCOME),
    _value(C.SALARY_ALLOWANCE, "Auxilio salarial", INCOME),
    _value(C.NON_SALARY_ALLOWANCE, "Auxilio no salarial", INCOME),
    _value(C.OTHER_SALARY_INCOME, "Otro ingreso salarial", INCOME),
    _value(C.OTHER_NON_SALARY_INCOME, "Otro ingreso no salarial", INCOME),
    _value(C.ORDINARY_COMPENSATION, "Compensación ordinaria", INCOME),
    _value(C.EXTRAORDINARY_COMPENSATION, "Compensación extraordinaria", INCOME),
    _value(C.FOOD_BONUS, "Bono de alimentación", INCOME),
    _value(C.NON_SALARY_FOOD_BONUS, "Bono de alimentación no salarial", INCOME),
    _value(C.OTHER_BONUSES, "Otros bonos", INCOME),
    _value(C.OTHER_NON_SALARY_BONUSES, "Otros bonos no salariales", INCOME),
    _value(C.COMMISSIONS, "Comisiones", INCOME),
    _value(C.THIRD_PARTY_PAYMENT_INCOME, "Pago a terceros", INCOME),
    _value(C.ADVANCES_INCOME, "Avances", INCOME),
    _value(C.WORK_SUPPLIES, "Dotación", INCOME),
    _value(C.SUPPORT_STIPEND, "Apoyo de sostenimiento", INCOME),
    _value(C.TELEWORK, "Teletrabajo", INCOME),
    _value(C.RETIREMENT_BONUS, "Bonificación por retiro", INCOME),
    _value(C.DISMISSAL_COMPENSATION, "Indemnización por despido", INCOME),
    _value(C.REFUND_INCOME, "Reintegro", INCOME),
    _value(C.OTHER_CONCEPTS, "Otros conceptos", INCOME),
    _value(C.OTHER_NON_SALARY_CONCEPTS, "Otros conceptos no salariales", INCOME),
    # Deductions
    ConceptDefinition(
        code=C.HEALTH,
        key_name="Salud",
        type=DEDUCTION,
        subtype=PERCENT,
        percentage=Decimal("4"),
        required=True,
        read_only=True,
    ),
    ConceptDefinition(
        code=C.PENSION,
        key_name="Pensión",
        type=DEDUCTION,
        subtype=PERCENT,
        percentage=Decimal("4"),
        required=True,
        read_only=True,
    ),
    ConceptDefinition(
        code=C.PENSION_SECURITY_FUND,
        key_name="Fondo de seguridad pensional",
        type=DEDUCTION,
        subtype=PERCENT,
        percentage=Decimal("1"),
        read_only=True,
    ),
    ConceptDefinition(
        code=C.UNION_DUES,
        key_name="Sindicato",
        type=DEDUCTION,
        subtype=PERCENT,
    ),
    _value(C.PUBLIC_SANCTION, "Sanción pública", DEDUCTION),
    _value(C.PRIVATE_SANCTION, "Sanción privada", DEDUCTION),
    _value(C.PAYROLL_LOAN, "Libranza", DEDUCTION),
    _value(C.THIRD_PARTY_PAYMENT_DEDUCTION, "Pago a terceros", DEDUCTION),
    _value(C.ADVANCES_DEDUCTION, "Anticipos", DEDUCTION),
    _value(C.OTHER_DEDUCTIONS, "Otras deducciones", DEDUCTION),
    _value(C.VOLUNTARY_PENSION, "Pensión voluntaria", DEDUCTION),
    _value(C.WITHHOLDING_TAX, "Retención en la fuente", DEDUCTION),
    _value(C.AFC, "AFC", DEDUCTION),
    _value(C.COOPERATIVE, "Cooperativa", DEDUCTION),
    _value(C.TAX_GARNISHMENT, "Embargo fiscal", DEDUCTION),
    _value(C.COMPLEMENTARY_PLAN, "Plan complementario", DEDUCTION),
    _value(C.EDUCATION, "Educación", DEDUCTION),
    _value(C.REFUND_DEDUCTION, "Reintegro", DEDUCTION),
    _value(C.DEBT_PAYMENT, "Pago de deudas", DEDUCTION),
    _value(C.SUBSISTENCE_FUND, "Fondo de subsistencia", DEDUCTION),
)


class ConceptCatalog:
    """Read-only registry of concept definitions.

    Lookups by label are case-insensitive. "Pago a terceros" and "Reintegro"
    exist as both income and deduction; an untyped lookup returns the income
    entry, a typed lookup returns the entry of that type.
    """

    def __init__(self, definitions: tuple[ConceptDefinition, ...]):
        by_code: dict[ConceptCode, ConceptDefinition] = {}
        by_typed_key: dict[tuple[ConceptType, str], ConceptDefinition] = {}
        by_key: dict[str, ConceptDefinition] = {}

        for definition in definitions:
            typed_key = (definition.type, definition.normalized_key)
            if definition.code in by_code:
                raise ValueError(f"Duplicate concept code {definition.code.value}")
            if typed_key in by_typed_key:
                raise ValueError(f"Duplicate concept label '{definition.key_name}'")
            by_code[definition.code] = definition
            by_typed_key[typed_key] = definition
            by_key.setdefault(definition.normalized_key, definition)

        self._definitions = tuple(definitions)
        self._by_code = MappingProxyType(by_code)
        self._by_typed_key = MappingProxyType(by_typed_key)
        self._by_key = MappingProxyType(by_key)
        self._by_type = MappingProxyType(
            {
                concept_type: tuple(d for d in definitions if d.type == concept_type)
                for concept_type in ConceptType
            }
        )
        self._required = tuple(d for d in definitions if d.required)

    def __iter__(self) -> Iterator[ConceptDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, key_name: object) -> bool:
        return isinstance(key_name, str) and normalize_key(key_name) in self._by_key

    def find(
        self, key_name: str, concept_type: ConceptType | None = None
    ) -> ConceptDefinition | None:
        """Return the definition for a label, or None."""
        key = normalize_key(key_name)
        if concept_type is None:
            return self._by_key.get(key)
        return self._by_typed_key.get((ConceptType(concept_type), key))

    def lookup(
        self, key_name: str, concept_type: ConceptType | None = None
    ) -> ConceptDefinition:
        """Return the definition for a label.

        Raises:
            ConceptNotFoundError: If no definition matches
        """
        definition = self.find(key_name, concept_type)
        if definition is None:
            raise ConceptNotFoundError(key_name, concept_type)
        return definition

    def get(self, code: ConceptCode) -> ConceptDefinition:
        """Return the definition for a stable concept code."""
        try:
            return self._by_code[ConceptCode(code)]
        except (KeyError, ValueError):
            raise ConceptNotFoundError(str(code)) from None

    def by_type(self, concept_type: ConceptType) -> tuple[ConceptDefinition, ...]:
        return self._by_type[ConceptType(concept_type)]

    def required(self) -> tuple[ConceptDefinition, ...]:
        return self._required


CATALOG = ConceptCatalog(DEFINITIONS)

"""Tests for concept set validation and adjustment."""

from decimal import Decimal

from finance_engine.payroll.adjuster import ConceptAdjuster, IssueKind
from finance_engine.payroll.catalog import CATALOG
from finance_engine.payroll.types import (
    Concept,
    ConceptCode,
    ConceptType,
    ProrationContext,
)


def by_key(concepts):
    return {(c.type, c.key_name): c for c in concepts}


def income(key_name, amount="0", quantity="0", **kwargs) -> Concept:
    return Concept(
        key_name=key_name,
        type=ConceptType.INCOME,
        amount=Decimal(amount),
        quantity=Decimal(quantity),
        **kwargs,
    )


def deduction(key_name, amount="0", **kwargs) -> Concept:
    return Concept(
        key_name=key_name, type=ConceptType.DEDUCTION, amount=Decimal(amount), **kwargs
    )


class TestBuildDefaults:
    """Test the starting concept set."""

    def test_monthly_with_transport_aid(self, adjuster, monthly_context):
        concepts = adjuster.build_defaults(monthly_context)
        values = {key: c.amount for key, c in by_key(concepts).items()}

        assert len(concepts) == len(CATALOG.required()) + 1
        assert values[(ConceptType.INCOME, "Salario")] == Decimal("1300000")
        assert values[(ConceptType.INCOME, "Prima")] == Decimal("108333.33")
        assert values[(ConceptType.INCOME, "Cesantías")] == Decimal("108333.33")
        assert values[(ConceptType.INCOME, "Intereses a las cesantías")] == Decimal("1083.33")
        assert values[(ConceptType.INCOME, "Auxilio de transporte")] == Decimal("162000")
        assert values[(ConceptType.DEDUCTION, "Salud")] == Decimal("52000")
        assert values[(ConceptType.DEDUCTION, "Pensión")] == Decimal("52000")

    def test_includes_every_required_concept(self, adjuster, monthly_context):
        concepts = adjuster.build_defaults(monthly_context)
        keys = set(by_key(concepts))
        for definition in CATALOG.required():
            assert (definition.type, definition.key_name) in keys
        assert adjuster.validate(concepts) == []

    def test_transport_aid_appended_last(self, adjuster, monthly_context):
        concepts = adjuster.build_defaults(monthly_context)
        assert concepts[-1].key_name == "Auxilio de transporte"
        assert concepts[-1].quantity == Decimal("30")

    def test_without_transport_aid(self, adjuster):
        context = ProrationContext(
            salary=Decimal("2000000"), base_salary=Decimal("2000000"), days_worked=30
        )
        concepts = adjuster.build_defaults(context)
        assert len(concepts) == len(CATALOG.required())
        assert all(c.key_name != "Auxilio de transporte" for c in concepts)

    def test_biweekly(self, adjuster, biweekly_context):
        """Severance accrues on the monthly base; percentages use the period salary."""
        concepts = by_key(adjuster.build_defaults(biweekly_context))

        layoff = concepts[(ConceptType.INCOME, "Cesantías")]
        assert layoff.quantity == Decimal("15")
        assert layoff.amount == Decimal("54166.67")
        assert concepts[(ConceptType.INCOME, "Intereses a las cesantías")].amount == Decimal("270.83")
        assert concepts[(ConceptType.INCOME, "Prima")].amount == Decimal("54166.67")
        assert concepts[(ConceptType.INCOME, "Auxilio de transporte")].amount == Decimal("81000")
        assert concepts[(ConceptType.DEDUCTION, "Salud")].amount == Decimal("26000")

    def test_ids_are_unique(self, adjuster, monthly_context):
        concepts = adjuster.build_defaults(monthly_context)
        assert len({c.id for c in concepts}) == len(concepts)


class TestValidate:
    """Test concept set validation."""

    def test_missing_salary(self, adjuster, monthly_context):
        concepts = [
            c for c in adjuster.build_defaults(monthly_context) if c.key_name != "Salario"
        ]
        issues = adjuster.validate(concepts)

        assert len(issues) == 1
        assert issues[0].kind is IssueKind.MISSING_REQUIRED_CONCEPT
        assert issues[0].key_name == "Salario"

    def test_empty_set_reports_every_required_concept(self, adjuster):
        issues = adjuster.validate([])
        assert [i.kind for i in issues] == [IssueKind.MISSING_REQUIRED_CONCEPT] * len(
            CATALOG.required()
        )

    def test_duplicate_is_case_insensitive(self, adjuster, monthly_context):
        concepts = adjuster.build_defaults(monthly_context) + [income("SALARIO", "10")]
        issues = adjuster.validate(concepts)

        assert [i.kind for i in issues] == [IssueKind.DUPLICATE_CONCEPT]
        assert "2 times" in issues[0].message

    def test_duplicate_reported_once_per_key(self, adjuster, monthly_context):
        concepts = adjuster.build_defaults(monthly_context) + [
            income("Comisiones"),
            income("comisiones"),
            income(" Comisiones "),
        ]
        issues = adjuster.validate(concepts)
        assert len(issues) == 1
        assert "3 times" in issues[0].message

    def test_same_label_on_income_and_deduction_is_duplicate(
        self, adjuster, monthly_context
    ):
        concepts = adjuster.build_defaults(monthly_context) + [
            income("Reintegro", "1000"),
            deduction("reintegro", "500"),
        ]
        issues = adjuster.validate(concepts)

        assert [i.kind for i in issues] == [IssueKind.DUPLICATE_CONCEPT]
        assert issues[0].key_name == "Reintegro"

    def test_fractional_vacation_days(self, adjuster, monthly_context):
        concepts = adjuster.build_defaults(monthly_context) + [
            income("Vacaciones regulares", quantity="1.5")
        ]
        issues = adjuster.validate(concepts)
        assert [i.kind for i in issues] == [IssueKind.INVALID_QUANTITY]

    def test_whole_vacation_days(self, adjuster, monthly_context):
        concepts = adjuster.build_defaults(monthly_context) + [
            income("Vacaciones regulares", quantity="2")
        ]
        assert adjuster.validate(concepts) == []

    def test_fractional_overtime_allowed(self, adjuster, monthly_context):
        concepts = adjuster.build_defaults(monthly_context) + [
            income("Horas diurnas extras (25%)", quantity="1.5")
        ]
        assert adjuster.validate(concepts) == []

    def test_unknown_concept(self, adjuster, monthly_context):
        concepts = adjuster.build_defaults(monthly_context) + [income("Bono misterioso")]
        issues = adjuster.validate(concepts)
        assert [i.kind for i in issues] == [IssueKind.UNKNOWN_CONCEPT]

    def test_collects_all_problems(self, adjuster):
        concepts = [
            income("Salario", "1000"),
            income("salario", "1000"),
            income("Vacaciones regulares", quantity="0.5"),
        ]
        kinds = {i.kind for i in adjuster.validate(concepts)}
        assert kinds == {
            IssueKind.MISSING_REQUIRED_CONCEPT,
            IssueKind.DUPLICATE_CONCEPT,
            IssueKind.INVALID_QUANTITY,
        }


class TestAdjustToBaseSalary:
    """Test recomputation for a changed salary context."""

    def test_recomputes_dependent_concepts(self, adjuster, monthly_context):
        concepts = adjuster.build_defaults(monthly_context)
        raised = ProrationContext(
            salary=Decimal("3600000"), base_salary=Decimal("3600000"), days_worked=30
        )
        adjusted = by_key(adjuster.adjust_to_base_salary(concepts, raised))

        assert adjusted[(ConceptType.INCOME, "Salario")].amount == Decimal("3600000")
        assert adjusted[(ConceptType.INCOME, "Cesantías")].amount == Decimal("300000")
        assert adjusted[(ConceptType.INCOME, "Intereses a las cesantías")].amount == Decimal("3000")
        assert adjusted[(ConceptType.DEDUCTION, "Salud")].amount == Decimal("144000")
        # Transport aid is not salary dependent
        assert adjusted[(ConceptType.INCOME, "Auxilio de transporte")].amount == Decimal("162000")

    def test_layoff_quantity_follows_days_worked(self, adjuster):
        context = ProrationContext(
            salary=Decimal("900000"), base_salary=Decimal("3600000"), days_worked=7
        )
        adjusted = adjuster.adjust_to_base_salary([income("Cesantías", quantity="30")], context)
        assert adjusted[0].quantity == Decimal("7")
        assert adjusted[0].amount == Decimal("70000.00")

    def test_other_concepts_pass_through(self, adjuster, monthly_context):
        concepts = [
            income("Comisiones", "5000.555"),
            income("Horas diurnas extras (25%)", "1234", "3"),
            income("Bono misterioso", "10"),
        ]
        adjusted = adjuster.adjust_to_base_salary(concepts, monthly_context)
        assert [(c.amount, c.quantity) for c in adjusted] == [
            (c.amount, c.quantity) for c in concepts
        ]

    def test_custom_percentage_respected(self, adjuster, monthly_context):
        adjusted = adjuster.adjust_to_base_salary(
            [deduction("Sindicato", custom_percentage=Decimal("1.5"))], monthly_context
        )
        assert adjusted[0].amount == Decimal("19500.00")

    def test_inputs_not_mutated(self, adjuster, monthly_context):
        concepts = [income("Salario", "1"), income("Cesantías", "1", "1")]
        snapshot = [(c.id, c.amount, c.quantity) for c in concepts]

        adjusted = adjuster.adjust_to_base_salary(concepts, monthly_context)

        assert [(c.id, c.amount, c.quantity) for c in concepts] == snapshot
        assert all(a is not c for a, c in zip(adjusted, concepts))
        assert [a.id for a in adjusted] == [c.id for c in concepts]


class TestRecompute:
    """Test full per-subtype recomputation."""

    def test_recompute_from_quantities(self, adjuster):
        context = ProrationContext(
            salary=Decimal("3600000"), base_salary=Decimal("3600000"), days_worked=30
        )
        concepts = [
            income("Salario", "3600000"),
            income("Horas diurnas extras (25%)", quantity="4"),
            income("Cesantías", quantity="10"),
            income("Intereses a las cesantías"),
            income("Comisiones", "70000"),
        ]
        result = by_key(adjuster.recompute(concepts, context))

        # 3600000 / 240 = 15000 per hour, +25% = 18750, x4
        assert result[(ConceptType.INCOME, "Horas diurnas extras (25%)")].amount == Decimal("75000.00")
        assert result[(ConceptType.INCOME, "Cesantías")].amount == Decimal("100000.00")
        # Interest follows the accrual's 10 days, not the 30 days worked
        assert result[(ConceptType.INCOME, "Intereses a las cesantías")].amount == Decimal("333.33")
        assert result[(ConceptType.INCOME, "Comisiones")].amount == Decimal("70000")
        assert result[(ConceptType.INCOME, "Salario")].amount == Decimal("3600000")


class TestTotals:
    """Test concept set totals."""

    def test_totals(self, adjuster, monthly_context):
        totals = adjuster.totals(adjuster.build_defaults(monthly_context))

        assert totals.total_incomes == Decimal("1679749.99")
        assert totals.total_deductions == Decimal("104000.00")
        assert totals.total == Decimal("1575749.99")
        assert totals.salary == Decimal("1300000")

    def test_empty(self, adjuster):
        totals = adjuster.totals([])
        assert totals.total == Decimal("0")
        assert totals.salary == Decimal("0")


class TestCustomCatalog:
    """Test an adjuster bound to a different catalog."""

    def test_uses_given_catalog(self):
        from finance_engine.payroll.catalog import ConceptCatalog

        catalog = ConceptCatalog((CATALOG.get(ConceptCode.SALARY),))
        adjuster = ConceptAdjuster(catalog)
        assert adjuster.validate([income("Salario", "1")]) == []
        assert [i.kind for i in adjuster.validate([income("Prima")])] == [
            IssueKind.MISSING_REQUIRED_CONCEPT,
            IssueKind.UNKNOWN_CONCEPT,
        ]

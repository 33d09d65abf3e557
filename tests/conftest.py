"""Pytest fixtures for finance engine tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from finance_engine.config import get_settings
from finance_engine.payroll import ConceptAdjuster, ProrationContext


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run every test against default settings."""
    for name in (
        "FINANCE_ENGINE_VERSION",
        "FINANCE_ENGINE_STRICT_PRORATION",
        "FINANCE_ENGINE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def adjuster() -> ConceptAdjuster:
    return ConceptAdjuster()


@pytest.fixture
def monthly_context() -> ProrationContext:
    """Minimum-wage employee paid monthly with transport aid."""
    return ProrationContext(
        salary=Decimal("1300000"),
        base_salary=Decimal("1300000"),
        days_worked=30,
        has_transport_aid=True,
    )


@pytest.fixture
def biweekly_context() -> ProrationContext:
    """Same employee paid every fifteen days."""
    return ProrationContext.from_portion(
        salary=Decimal("650000"),
        days_worked=15,
        has_transport_aid=True,
    )

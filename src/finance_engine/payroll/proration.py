"""Pay-period proration.

Supported pay periods and the number of them in a month:

    Semanal    7 days   x4
    Decadal    10 days  x3
    Quincenal  15 days  x2
    Mensual    30 days  x1
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from finance_engine.calculators.rounding import ZERO, Number, to_decimal
from finance_engine.config import get_settings

logger = logging.getLogger(__name__)


class PeriodFrequency(str, Enum):
    """Pay period frequency."""

    WEEKLY = "Semanal"
    TEN_DAY = "Decadal"
    BIWEEKLY = "Quincenal"
    MONTHLY = "Mensual"


# days worked -> periods per month
PERIODS_PER_MONTH: dict[int, int] = {7: 4, 10: 3, 15: 2, 30: 1}

DAYS_BY_FREQUENCY: dict[PeriodFrequency, int] = {
    PeriodFrequency.WEEKLY: 7,
    PeriodFrequency.TEN_DAY: 10,
    PeriodFrequency.BIWEEKLY: 15,
    PeriodFrequency.MONTHLY: 30,
}


class UnsupportedProrationFrequencyError(Exception):
    """Raised in strict mode for a day count with no period mapping."""

    def __init__(self, days_worked: int):
        self.days_worked = days_worked
        supported = ", ".join(str(d) for d in PERIODS_PER_MONTH)
        super().__init__(
            f"Cannot prorate for {days_worked} days worked; supported: {supported}"
        )


class ProrationHelper:
    """Converts amounts between a pay period and its monthly equivalent.

    Day counts outside 7/10/15/30 return zero and log a warning, unless strict
    mode is on (``strict=True`` or FINANCE_ENGINE_STRICT_PRORATION=true), in
    which case UnsupportedProrationFrequencyError is raised.
    """

    @staticmethod
    def _periods_per_month(days_worked: int, strict: bool | None) -> int | None:
        periods = PERIODS_PER_MONTH.get(days_worked)
        if periods is not None:
            return periods

        if strict is None:
            strict = get_settings().strict_proration
        if strict:
            raise UnsupportedProrationFrequencyError(days_worked)

        logger.warning(
            "Unsupported proration for %s days worked, degrading to 0", days_worked
        )
        return None

    @staticmethod
    def base_salary_from_portion(
        days_worked: int, salary: Number, strict: bool | None = None
    ) -> Decimal:
        """Reconstruct the monthly base from the salary paid for one period."""
        periods = ProrationHelper._periods_per_month(days_worked, strict)
        if periods is None:
            return ZERO
        return to_decimal(salary) * periods

    @staticmethod
    def portion_from_full(
        full_monthly_value: Number, days_worked: int, strict: bool | None = None
    ) -> Decimal:
        """Scale a full-month value down to one pay period."""
        periods = ProrationHelper._periods_per_month(days_worked, strict)
        if periods is None:
            return ZERO
        return to_decimal(full_monthly_value) / periods

    @staticmethod
    def days_worked_for(frequency: PeriodFrequency | str) -> int:
        """Return the day count for a pay frequency."""
        return DAYS_BY_FREQUENCY[PeriodFrequency(frequency)]

    @staticmethod
    def portion_for_frequency(frequency: PeriodFrequency | str, value: Number) -> Decimal:
        """Scale a monthly value to one period of ``frequency``."""
        return ProrationHelper.portion_from_full(
            value, ProrationHelper.days_worked_for(frequency)
        )

    @staticmethod
    def base_for_frequency(frequency: PeriodFrequency | str, value: Number) -> Decimal:
        """Scale a one-period value of ``frequency`` up to a month."""
        return ProrationHelper.base_salary_from_portion(
            ProrationHelper.days_worked_for(frequency), value
        )

    @staticmethod
    def frequency_for_range(
        start: date | datetime, end: date | datetime
    ) -> PeriodFrequency:
        """Infer the pay frequency from a period's start and end dates.

        The span is measured in whole days, rounded up, regardless of order.
        """
        delta = abs(end - start)
        days = delta.days + (1 if delta.seconds or delta.microseconds else 0)

        if days == 7:
            return PeriodFrequency.WEEKLY
        if days == 10:
            return PeriodFrequency.TEN_DAY
        if days <= 16:
            return PeriodFrequency.BIWEEKLY
        return PeriodFrequency.MONTHLY

"""Type definitions for document line calculations."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Any, Mapping

from finance_engine.calculators.rounding import ZERO, Number, to_decimal

# Keys understood by LineItem.from_mapping; everything else lands in ``extra``.
_LINE_KEYS = {
    "price": "price",
    "quantity": "quantity",
    "tax": "tax_percent",
    "tax_percent": "tax_percent",
    "discount": "discount_percent",
    "discount_percent": "discount_percent",
}


@dataclass(frozen=True)
class LineItem:
    """One product or service entry on an invoice, quote or purchase."""

    price: Decimal  # Unit price (signed)
    quantity: Decimal  # Negative quantity marks a refund line
    tax_percent: Decimal = ZERO
    discount_percent: Decimal = ZERO

    # Caller fields carried along but never read by the calculator
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        for name in ("price", "quantity", "tax_percent", "discount_percent"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))

    @property
    def is_refund(self) -> bool:
        return self.quantity < 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LineItem:
        """Build a line from a product dict (``price``, ``quantity``, ``tax``, ``discount``)."""
        kwargs: dict[str, Number] = {}
        extra: dict[str, Any] = {}
        for key, value in data.items():
            target = _LINE_KEYS.get(key)
            if target is None:
                extra[key] = value
            else:
                kwargs[target] = value
        if "price" not in kwargs or "quantity" not in kwargs:
            raise ValueError("line requires 'price' and 'quantity'")
        return cls(extra=extra, **kwargs)  # type: ignore[arg-type]


@dataclass(frozen=True)
class CalculationConfig:
    """Document-level calculation settings."""

    tax_included: bool = False
    retention_percent: Decimal = ZERO

    def __post_init__(self) -> None:
        """Validate configuration."""
        object.__setattr__(
            self, "retention_percent", to_decimal(self.retention_percent)
        )
        if self.retention_percent < 0:
            raise ValueError("retention_percent must be zero or positive")


@dataclass(frozen=True)
class LineTotals:
    """Computed totals for a single line, rounded to cents."""

    total: Decimal = ZERO
    subtotal: Decimal = ZERO
    total_tax: Decimal = ZERO
    total_discount: Decimal = ZERO
    total_retention: Decimal = ZERO

    def to_dict(self) -> dict[str, Decimal]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class DocumentTotals:
    """Totals for a whole document.

    ``total_refunds`` is the sum of ``total`` over negative-quantity lines and
    is already included in ``total``.
    """

    total: Decimal = ZERO
    subtotal: Decimal = ZERO
    total_tax: Decimal = ZERO
    total_discount: Decimal = ZERO
    total_retention: Decimal = ZERO
    total_refunds: Decimal = ZERO

    def to_dict(self) -> dict[str, Decimal]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

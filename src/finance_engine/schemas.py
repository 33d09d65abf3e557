"""Pydantic schemas for caller-supplied concept payloads."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from finance_engine.calculators.rounding import ZERO
from finance_engine.payroll.adjuster import ConceptAdjuster
from finance_engine.payroll.types import Concept, ConceptCode, ConceptType

logger = logging.getLogger(__name__)


class ConceptPayload(BaseModel):
    """Schema for one concept as sent by a payroll form."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    key_name: str = Field(alias="keyName", min_length=1)
    type: ConceptType
    amount: Decimal
    quantity: Decimal = ZERO
    custom_percentage: Decimal | None = Field(default=None, alias="customPercentage")

    def to_concept(self) -> Concept:
        return Concept(
            id=self.id,
            key_name=self.key_name,
            type=self.type,
            amount=self.amount,
            quantity=self.quantity,
            custom_percentage=self.custom_percentage,
        )


_concept_list = TypeAdapter(list[ConceptPayload])


@dataclass
class ParseResult:
    """Outcome of parsing a concept payload."""

    errors: list[str] = field(default_factory=list)
    concepts: list[Concept] = field(default_factory=list)
    salary: Decimal = ZERO

    @property
    def success(self) -> bool:
        return len(self.errors) == 0


def _format_validation_error(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        messages.append(f"{location}: {item['msg']}" if location else item["msg"])
    return messages


def parse_concepts(
    payload: str | bytes | list[Any], adjuster: ConceptAdjuster | None = None
) -> ParseResult:
    """Parse and validate a concept payload.

    ``payload`` is a JSON array (string or bytes) or an already decoded list.
    Shape errors and catalog validation issues are all reported in
    ``errors``; when there are any, no concepts are returned.
    """
    adjuster = adjuster or ConceptAdjuster()

    try:
        data = json.loads(payload) if isinstance(payload, (str, bytes)) else payload
    except json.JSONDecodeError as exc:
        return ParseResult(errors=[f"Invalid JSON: {exc.msg}"])

    try:
        parsed = _concept_list.validate_python(data)
    except ValidationError as exc:
        return ParseResult(errors=_format_validation_error(exc))
    except Exception:
        logger.exception("Unexpected failure decoding concept payload")
        return ParseResult(errors=["Unexpected error while reading concepts"])

    concepts = [item.to_concept() for item in parsed]
    issues = adjuster.validate(concepts)
    if issues:
        return ParseResult(errors=[issue.message for issue in issues])

    salary_definition = adjuster.catalog.get(ConceptCode.SALARY)
    salary = next(
        (
            c.amount
            for c in concepts
            if c.type is salary_definition.type
            and c.normalized_key == salary_definition.normalized_key
        ),
        ZERO,
    )
    return ParseResult(concepts=concepts, salary=salary)

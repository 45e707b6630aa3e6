"""Evaluation of validation plans against plain payloads.

Generated validate operations follow these semantics in every target
language: defaults are substituted in place, checks run in plan order and the
first failing step ends the evaluation with a single error.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from rpc_stubgen.schema_management import TypeKind

from .validation_steps import (
    DefaultSubstitution,
    EnumMembershipCheck,
    NestedElementValidation,
    RequiredCheck,
    ValidationPlan,
    format_element_error,
)

ZERO_INSTANT = "0001-01-01T00:00:00Z"


class PlanEvaluationError(Exception):
    """Raised when a payload cannot be evaluated against a plan."""


def first_validation_failure(
    plan: ValidationPlan,
    payload: dict[str, Any],
    plans: Mapping[str, ValidationPlan],
) -> str | None:
    """Validate payload in place and return the first error, or None on success."""
    for field_validation in plan.fields:
        name = field_validation.field.name
        for step in field_validation.steps:
            value = payload.get(name)
            if isinstance(step, DefaultSubstitution):
                if _is_zero(value, step.field.kind):
                    payload[name] = step.value
            elif isinstance(step, RequiredCheck):
                if _is_zero(value, step.field.kind):
                    return step.error
            elif isinstance(step, EnumMembershipCheck):
                if value not in (None, "") and value not in step.allowed:
                    return step.error
            elif isinstance(step, NestedElementValidation):
                child_error = _first_element_failure(step, value, plans)
                if child_error is not None:
                    return child_error
    return None


def _first_element_failure(
    step: NestedElementValidation, value: Any, plans: Mapping[str, ValidationPlan]
) -> str | None:
    child_plan = plans.get(step.element_type)
    if child_plan is None:
        raise PlanEvaluationError(f"No validation plan for type '{step.element_type}'")
    for index, element in enumerate(value or ()):
        if not isinstance(element, dict):
            raise PlanEvaluationError(
                f"{step.field.name}[{index}] must be a mapping, got {type(element).__name__}"
            )
        child_error = first_validation_failure(child_plan, element, plans)
        if child_error is not None:
            return format_element_error(index, child_error)
    return None


def _is_zero(value: Any, kind: TypeKind) -> bool:
    if value is None:
        return True
    if kind in (TypeKind.INT, TypeKind.FLOAT):
        return bool(value == 0)
    if kind == TypeKind.STRING:
        return bool(value == "")
    if kind == TypeKind.TIMESTAMP:
        if isinstance(value, datetime):
            return value.replace(tzinfo=None) == datetime.min
        return value in ("", ZERO_INSTANT)
    return False

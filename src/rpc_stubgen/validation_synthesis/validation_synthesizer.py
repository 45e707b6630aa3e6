"""Synthesis of ordered validation steps from declarative field constraints."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rpc_stubgen.schema_management import (
    Field,
    Method,
    Schema,
    TypeKind,
    resolve_reference,
)

from .validation_steps import (
    DefaultSubstitution,
    EnumMembershipCheck,
    FieldValidation,
    NestedElementValidation,
    RequiredCheck,
    ValidationPlan,
    ValidationStep,
)

_LOGGER = logging.getLogger(__name__)

REQUIRED_CHECK_KINDS = frozenset(
    {
        TypeKind.INT,
        TypeKind.FLOAT,
        TypeKind.STRING,
        TypeKind.ARRAY,
        TypeKind.OBJECT,
        TypeKind.TIMESTAMP,
    }
)


def synthesize_validation(
    schema: Schema, type_name: str, fields: Sequence[Field]
) -> ValidationPlan:
    """Return the validation plan for an ordered field list.

    Steps per field are emitted in the order default substitution, required
    check, enum membership check, nested element validation. Fields without
    any applicable step are left out of the plan.
    """
    validations: list[FieldValidation] = []
    for field in fields:
        steps = _field_steps(schema, type_name, field)
        if steps:
            validations.append(FieldValidation(field=field, steps=tuple(steps)))
    return ValidationPlan(type_name=type_name, fields=tuple(validations))


def synthesize_type_plans(schema: Schema) -> dict[str, ValidationPlan]:
    """Return validation plans of every declared type, keyed by type name."""
    return {
        type_definition.name: synthesize_validation(
            schema, type_definition.name, type_definition.properties
        )
        for type_definition in schema.types
    }


def synthesize_input_plan(schema: Schema, method: Method) -> ValidationPlan:
    return synthesize_validation(schema, f"{method.name}_input", method.inputs)


def _field_steps(schema: Schema, owner: str, field: Field) -> list[ValidationStep]:
    steps: list[ValidationStep] = []

    default_step = _default_step(owner, field)
    if default_step is not None:
        steps.append(default_step)

    if field.required and field.kind in REQUIRED_CHECK_KINDS:
        steps.append(RequiredCheck(field=field))

    if field.kind == TypeKind.STRING and field.enum:
        steps.append(EnumMembershipCheck(field=field, allowed=field.enum))

    items = field.items
    if field.kind == TypeKind.ARRAY and items is not None and items.reference is not None:
        element_type = resolve_reference(
            schema, items.reference, owner=f"{owner}.{field.name}"
        )
        steps.append(NestedElementValidation(field=field, element_type=element_type.name))

    return steps


def _default_step(owner: str, field: Field) -> DefaultSubstitution | None:
    if field.default is None:
        return None
    default = field.default
    if field.kind == TypeKind.INT and isinstance(default, int) and not isinstance(default, bool):
        return DefaultSubstitution(field=field, value=default)
    if field.kind == TypeKind.STRING and isinstance(default, str):
        return DefaultSubstitution(field=field, value=default)
    if field.kind in (TypeKind.INT, TypeKind.STRING):
        _LOGGER.warning(
            "%s.%s: default %r does not match type %s, ignored",
            owner,
            field.name,
            default,
            field.kind.value,
        )
    else:
        _LOGGER.debug(
            "%s.%s: defaults are not supported for %s fields, ignored",
            owner,
            field.name,
            field.kind.value,
        )
    return None

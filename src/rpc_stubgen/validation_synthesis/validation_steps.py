"""Validation step entities and error message formats."""

from __future__ import annotations

from dataclasses import dataclass

from rpc_stubgen.schema_management import Field

REQUIRED_MESSAGE = "is required"


def format_enum_message(values: tuple[str, ...]) -> str:
    """Return the enum failure message listing allowed values in declaration order."""
    return "must be one of: " + ", ".join(_quote(value) for value in values)


def format_validation_error(field_name: str, message: str) -> str:
    return f"Field: {field_name}, Message: {message}"


def format_element_error(index: int, child_error: str) -> str:
    return f"element {index}: {child_error}"


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class DefaultSubstitution:
    """Replace a zero value with the declared default."""

    field: Field
    value: int | str


@dataclass(frozen=True)
class RequiredCheck:
    """Fail when a required field holds its zero value."""

    field: Field

    @property
    def error(self) -> str:
        return format_validation_error(self.field.name, REQUIRED_MESSAGE)


@dataclass(frozen=True)
class EnumMembershipCheck:
    """Fail when a non-empty string is outside the declared enum."""

    field: Field
    allowed: tuple[str, ...]

    @property
    def error(self) -> str:
        return format_validation_error(self.field.name, format_enum_message(self.allowed))


@dataclass(frozen=True)
class NestedElementValidation:
    """Validate each element of an array of references."""

    field: Field
    element_type: str


ValidationStep = DefaultSubstitution | RequiredCheck | EnumMembershipCheck | NestedElementValidation


@dataclass(frozen=True)
class FieldValidation:
    """Ordered steps applicable to one field."""

    field: Field
    steps: tuple[ValidationStep, ...]


@dataclass(frozen=True)
class ValidationPlan:
    """Ordered field validations of one declared type or method input."""

    type_name: str
    fields: tuple[FieldValidation, ...]

    @property
    def steps(self) -> tuple[ValidationStep, ...]:
        return tuple(step for field in self.fields for step in field.steps)

    @property
    def is_empty(self) -> bool:
        return not self.fields

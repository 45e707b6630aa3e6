"""Go type declarations with validation methods."""

from __future__ import annotations

from rpc_stubgen.naming import NameConvention
from rpc_stubgen.schema_management import Method, TypeKind
from rpc_stubgen.type_mapping import GO_TYPES
from rpc_stubgen.validation_synthesis import (
    REQUIRED_MESSAGE,
    DefaultSubstitution,
    EnumMembershipCheck,
    NestedElementValidation,
    RequiredCheck,
    ValidationPlan,
    ValidationStep,
    format_enum_message,
)

from .emitter_contract import GENERATED_NOTICE, MemberField, SourceEmitter, SourceWriter
from .source_text import double_quoted, field_summary, type_summary

_VALIDATION_HELPERS = """
// ValidationError is returned when a field fails validation.
type ValidationError struct {
	Field   string
	Message string
}

// Error implementation.
func (e ValidationError) Error() string {
	return fmt.Sprintf("Field: %s, Message: %s", e.Field, e.Message)
}

// oneOf returns true if s is in the values.
func oneOf(s string, values []string) bool {
	for _, v := range values {
		if s == v {
			return true
		}
	}
	return false
}
"""

_REQUIRED_CONDITIONS = {
    TypeKind.INT: "{value} == 0",
    TypeKind.FLOAT: "{value} == 0",
    TypeKind.STRING: '{value} == ""',
    TypeKind.ARRAY: "{value} == nil",
    TypeKind.OBJECT: "{value} == nil",
    TypeKind.TIMESTAMP: "{value}.IsZero()",
}


class GoEmitter(SourceEmitter):
    """Go structs for types and method inputs/outputs."""

    type_system = GO_TYPES

    def new_writer(self) -> SourceWriter:
        return SourceWriter(indent_unit="\t")

    def reserved_identifiers(self, convention: NameConvention) -> tuple[str, ...]:
        if convention == NameConvention.TYPE_CASE:
            return ("ValidationError",)
        if convention == NameConvention.FIELD_CASE and self.options.validate:
            return ("Validate",)
        return ()

    def emit_header(self, writer: SourceWriter) -> None:
        writer.line(f"// {GENERATED_NOTICE}")
        writer.line()
        writer.line(f"package {self.options.package}")
        writer.line()
        writer.line("import (")
        writer.line('"fmt"', indent=1)
        if self.uses_kind(TypeKind.TIMESTAMP):
            writer.line('"time"', indent=1)
        writer.line(")")
        writer.line()
        writer.block(_VALIDATION_HELPERS)
        writer.line()

    def emit_type_declaration(
        self, writer: SourceWriter, name: str, description: str, members: list[MemberField]
    ) -> None:
        writer.line(f"// {type_summary(name, description)}")
        self._write_struct(writer, name, members)

    def emit_input_declaration(
        self, writer: SourceWriter, name: str, method: Method, members: list[MemberField]
    ) -> None:
        writer.line(f"// {name} params.")
        self._write_struct(writer, name, members)

    def emit_output_declaration(
        self, writer: SourceWriter, name: str, method: Method, members: list[MemberField]
    ) -> None:
        writer.line(f"// {name} params.")
        self._write_struct(writer, name, members)

    def emit_validation(
        self,
        writer: SourceWriter,
        name: str,
        plan: ValidationPlan,
        members: list[MemberField],
    ) -> None:
        receiver = name[0].lower()
        by_field = {member.field.name: member for member in members}
        writer.line("// Validate implementation.")
        writer.line(f"func ({receiver} *{name}) Validate() error {{")
        for field_validation in plan.fields:
            member = by_field[field_validation.field.name]
            for step in field_validation.steps:
                self._write_step(writer, f"{receiver}.{member.member}", member, step)
        writer.line("return nil", indent=1)
        writer.line("}")

    def _write_struct(self, writer: SourceWriter, name: str, members: list[MemberField]) -> None:
        writer.line(f"type {name} struct {{")
        for index, member in enumerate(members):
            if index:
                writer.line()
            writer.line(f"// {field_summary(member.member, member.field)}", indent=1)
            writer.line(
                f"{member.member} {member.type_expression} {self._tags(member)}", indent=1
            )
        writer.line("}")

    def _tags(self, member: MemberField) -> str:
        pairs = " ".join(f"{tag}:{double_quoted(member.field.name)}" for tag in self.options.tags)
        return f"`{pairs}`"

    def _write_step(
        self, writer: SourceWriter, value: str, member: MemberField, step: ValidationStep
    ) -> None:
        field = member.field
        pointer = member.optional and field.kind not in (TypeKind.ARRAY, TypeKind.OBJECT)

        if isinstance(step, DefaultSubstitution):
            zero = "0" if field.kind == TypeKind.INT else '""'
            if field.kind == TypeKind.INT:
                literal = str(step.value)
            else:
                literal = double_quoted(str(step.value))
            if pointer:
                typed = f"int64({literal})" if field.kind == TypeKind.INT else literal
                writer.line(f"if {value} == nil || *{value} == {zero} {{", indent=1)
                writer.line(f"value := {typed}", indent=2)
                writer.line(f"{value} = &value", indent=2)
            else:
                writer.line(f"if {value} == {zero} {{", indent=1)
                writer.line(f"{value} = {literal}", indent=2)
            writer.line("}", indent=1)
            writer.line()
        elif isinstance(step, RequiredCheck):
            condition = _REQUIRED_CONDITIONS[field.kind].format(value=value)
            writer.line(f"if {condition} {{", indent=1)
            self._write_error(writer, field.name, REQUIRED_MESSAGE)
            writer.line("}", indent=1)
            writer.line()
        elif isinstance(step, EnumMembershipCheck):
            allowed = ", ".join(double_quoted(item) for item in step.allowed)
            if pointer:
                condition = (
                    f'{value} != nil && *{value} != "" && !oneOf(*{value}, []string{{{allowed}}})'
                )
            else:
                condition = f'{value} != "" && !oneOf({value}, []string{{{allowed}}})'
            writer.line(f"if {condition} {{", indent=1)
            self._write_error(writer, field.name, format_enum_message(step.allowed))
            writer.line("}", indent=1)
            writer.line()
        elif isinstance(step, NestedElementValidation):
            writer.line(f"for index := range {value} {{", indent=1)
            writer.line(f"if err := {value}[index].Validate(); err != nil {{", indent=2)
            writer.line('return fmt.Errorf("element %d: %s", index, err.Error())', indent=3)
            writer.line("}", indent=2)
            writer.line("}", indent=1)
            writer.line()

    def _write_error(self, writer: SourceWriter, field_name: str, message: str) -> None:
        writer.line(
            f"return ValidationError{{Field: {double_quoted(field_name)}, "
            f"Message: {double_quoted(message)}}}",
            indent=2,
        )

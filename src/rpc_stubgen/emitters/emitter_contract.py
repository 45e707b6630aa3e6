"""Shared emitter contract and document assembly."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

from rpc_stubgen.naming import IdentifierScope, NameConvention
from rpc_stubgen.schema_management import Field, Method, Schema, TypeDescriptor, TypeKind
from rpc_stubgen.type_mapping import TargetTypeSystem, map_type
from rpc_stubgen.validation_synthesis import (
    ValidationPlan,
    synthesize_input_plan,
    synthesize_type_plans,
)

GENERATED_NOTICE = "Do not edit, this file was generated by rpc-stubgen."


@dataclass(frozen=True)
class EmitterOptions:  # pylint: disable=too-many-instance-attributes
    """Per-run emitter settings."""

    package: str = "api"
    tags: tuple[str, ...] = ("json",)
    validate: bool = True
    include_types: bool = True
    include_client: bool = False
    fetch_library: str = "node-fetch"
    ruby_module: str = "Api"
    ruby_class: str = "Client"


class SourceWriter:
    """Line-oriented text accumulator for one generated document."""

    def __init__(self, indent_unit: str = "  ") -> None:
        self._lines: list[str] = []
        self._indent_unit = indent_unit

    def line(self, text: str = "", indent: int = 0) -> None:
        self._lines.append(f"{self._indent_unit * indent}{text}" if text else "")

    def block(self, text: str) -> None:
        """Append static multi-line boilerplate verbatim."""
        self._lines.extend(text.strip("\n").splitlines())

    def blank(self) -> None:
        """Append one empty line unless the document already ends with one."""
        if self._lines and self._lines[-1] != "":
            self._lines.append("")

    def render(self) -> str:
        lines = list(self._lines)
        while lines and lines[-1] == "":
            lines.pop()
        return "\n".join(lines) + "\n"


@dataclass(frozen=True)
class MemberField:
    """Field paired with its target member identifier and type expression."""

    field: Field
    member: str
    type_expression: str

    @property
    def optional(self) -> bool:
        return not self.field.required


class SourceEmitter(ABC):
    """Renders one target-language document from a schema.

    Subclasses supply the target vocabulary and static boilerplate; the
    iteration over types and methods, name claiming and validation synthesis
    live here so every target renders the same schema-derived declarations.
    """

    type_system: ClassVar[TargetTypeSystem]

    def __init__(self, schema: Schema, options: EmitterOptions) -> None:
        self.schema = schema
        self.options = options
        self._declaration_names = IdentifierScope(
            "type declarations", self.type_system.naming, NameConvention.TYPE_CASE
        )
        self._method_names = IdentifierScope(
            "client methods", self.type_system.naming, NameConvention.MEMBER_CASE
        )
        self._declaration_names.reserve(*self.reserved_identifiers(NameConvention.TYPE_CASE))
        self._method_names.reserve(*self.reserved_identifiers(NameConvention.MEMBER_CASE))
        self._claim_names()

    def emit_document(self) -> str:
        writer = self.new_writer()
        self.emit_header(writer)
        if self.options.include_types:
            self.emit_types(writer)
            self.emit_method_io(writer)
        if self.options.include_client:
            self.emit_client(writer)
        self.emit_footer(writer)
        return writer.render()

    def new_writer(self) -> SourceWriter:
        return SourceWriter()

    def emit_types(self, writer: SourceWriter) -> None:
        plans = synthesize_type_plans(self.schema) if self.options.validate else {}
        for type_definition in self.schema.types:
            name = self.type_name(type_definition.name)
            members = self.members(type_definition.name, type_definition.properties)
            self.emit_type_declaration(writer, name, type_definition.description, members)
            writer.blank()
            if self.options.validate:
                self.emit_validation(writer, name, plans[type_definition.name], members)
                writer.blank()

    def emit_method_io(self, writer: SourceWriter) -> None:
        for method in self.schema.methods:
            if method.inputs:
                name = self.input_name(method)
                members = self.members(f"{method.name} input", method.inputs)
                self.emit_input_declaration(writer, name, method, members)
                writer.blank()
                if self.options.validate:
                    plan = synthesize_input_plan(self.schema, method)
                    self.emit_validation(writer, name, plan, members)
                    writer.blank()
            if method.outputs:
                name = self.output_name(method)
                members = self.members(f"{method.name} output", method.outputs)
                self.emit_output_declaration(writer, name, method, members)
                writer.blank()

    def emit_client(self, writer: SourceWriter) -> None:
        self.emit_client_preamble(writer)
        for method in self.schema.methods:
            self.emit_client_stub(writer, method)
        self.emit_client_postamble(writer)

    def type_name(self, raw_name: str) -> str:
        return self._declaration_names.claim(raw_name)

    def input_name(self, method: Method) -> str:
        return self._declaration_names.claim(f"{method.name}_input")

    def output_name(self, method: Method) -> str:
        return self._declaration_names.claim(f"{method.name}_output")

    def method_name(self, method: Method) -> str:
        return self._method_names.claim(method.name)

    def members(self, owner: str, fields: Sequence[Field]) -> list[MemberField]:
        """Pair fields with collision-checked member names and mapped types."""
        scope = IdentifierScope(
            f"fields of {owner}", self.type_system.naming, NameConvention.FIELD_CASE
        )
        scope.reserve(*self.reserved_identifiers(NameConvention.FIELD_CASE))
        return [
            MemberField(
                field=field,
                member=scope.claim(field.name),
                type_expression=map_type(self.schema, field, self.type_system, owner=owner),
            )
            for field in fields
        ]

    def reserved_identifiers(self, convention: NameConvention) -> tuple[str, ...]:
        """Identifiers the target boilerplate declares in the given position."""
        return ()

    def uses_kind(self, kind: TypeKind) -> bool:
        """Return True when any declared field mentions the given kind."""
        for fields in self._all_field_lists():
            for field in fields:
                descriptor: TypeDescriptor | None = field.type
                while descriptor is not None:
                    if descriptor.kind == kind:
                        return True
                    descriptor = descriptor.items
        return False

    def _all_field_lists(self) -> list[Sequence[Field]]:
        field_lists: list[Sequence[Field]] = [item.properties for item in self.schema.types]
        for method in self.schema.methods:
            field_lists.extend((method.inputs, method.outputs))
        return field_lists

    def _claim_names(self) -> None:
        for type_definition in self.schema.types:
            self.type_name(type_definition.name)
        for method in self.schema.methods:
            self.method_name(method)
            if method.inputs:
                self.input_name(method)
            if method.outputs:
                self.output_name(method)

    @abstractmethod
    def emit_header(self, writer: SourceWriter) -> None:
        """Write the generated-file notice and target preamble."""

    @abstractmethod
    def emit_type_declaration(
        self, writer: SourceWriter, name: str, description: str, members: list[MemberField]
    ) -> None:
        """Write one declared type."""

    @abstractmethod
    def emit_input_declaration(
        self, writer: SourceWriter, name: str, method: Method, members: list[MemberField]
    ) -> None:
        """Write the input structure of a method."""

    @abstractmethod
    def emit_output_declaration(
        self, writer: SourceWriter, name: str, method: Method, members: list[MemberField]
    ) -> None:
        """Write the output structure of a method."""

    @abstractmethod
    def emit_validation(
        self,
        writer: SourceWriter,
        name: str,
        plan: ValidationPlan,
        members: list[MemberField],
    ) -> None:
        """Write the validate operation of a declaration."""

    def emit_client_preamble(self, writer: SourceWriter) -> None:
        raise NotImplementedError(f"{self.type_system.language} emitter has no client")

    def emit_client_stub(self, writer: SourceWriter, method: Method) -> None:
        raise NotImplementedError(f"{self.type_system.language} emitter has no client")

    def emit_client_postamble(self, writer: SourceWriter) -> None:
        raise NotImplementedError(f"{self.type_system.language} emitter has no client")

    def emit_footer(self, writer: SourceWriter) -> None:
        """Write static boilerplate closing the document."""

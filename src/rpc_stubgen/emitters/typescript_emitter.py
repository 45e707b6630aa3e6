"""TypeScript interfaces, validation functions and fetch based client."""

from __future__ import annotations

import re

from rpc_stubgen.naming import NameConvention
from rpc_stubgen.schema_management import Method, TypeKind
from rpc_stubgen.type_mapping import TYPESCRIPT_TYPES
from rpc_stubgen.validation_synthesis import (
    REQUIRED_MESSAGE,
    DefaultSubstitution,
    EnumMembershipCheck,
    NestedElementValidation,
    RequiredCheck,
    ValidationPlan,
    ValidationStep,
    format_enum_message,
    format_validation_error,
)

from .emitter_contract import GENERATED_NOTICE, MemberField, SourceEmitter, SourceWriter
from .source_text import capitalize, double_quoted, field_summary, type_summary

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_ZERO_INSTANT = """
// zeroInstant is 0001-01-01T00:00:00Z in milliseconds.
const zeroInstant = -62135596800000
"""

_CALL = """
/**
 * ClientError is an API client error providing the HTTP status code and error type.
 */
export class ClientError extends Error {
  status: number
  type?: string

  constructor(status: number, message?: string, type?: string) {
    super(message)
    this.status = status
    this.type = type
  }
}

const isoDate = /^\\d{4}-\\d{2}-\\d{2}T\\d{2}:\\d{2}:\\d{2}(\\.\\d+)?(Z|[+-]\\d{2}:\\d{2})$/

/**
 * reviver converts ISO-8601 timestamps into Date instances.
 */
function reviver(_key: string, value: any): any {
  if (typeof value === 'string' && isoDate.test(value)) {
    return new Date(value)
  }
  return value
}

/**
 * Call method with params via a POST request.
 */
async function call(
  url: string,
  authToken: string | undefined,
  method: string,
  params?: any
): Promise<string> {
  const headers: Record<string, string> = {
    'Content-Type': 'application/json'
  }

  if (authToken != null) {
    headers['Authorization'] = `Bearer ${authToken}`
  }

  const res = await fetch(url + '/' + method, {
    method: 'POST',
    body: JSON.stringify(params),
    headers
  })

  // we have an error, try to parse a well-formed json
  // error response, otherwise default to status code
  if (res.status >= 300) {
    let err
    try {
      const { type, message } = await res.json()
      err = new ClientError(res.status, message, type)
    } catch {
      err = new ClientError(res.status, res.statusText)
    }
    throw err
  }

  return res.text()
}
"""

_CLIENT_CLASS = """
/**
 * Client is the API client.
 */
export class Client {

  private url: string
  private authToken?: string

  /**
   * Initialize.
   */
  constructor(params: { url: string, authToken?: string }) {
    this.url = params.url
    this.authToken = params.authToken
  }

  /**
   * Decoder is used as the reviver parameter when decoding responses.
   */
  private decoder(key: string, value: any): any {
    return reviver(key, value)
  }
"""


class TypeScriptEmitter(SourceEmitter):
    """TypeScript interfaces and, for client targets, a Client class."""

    type_system = TYPESCRIPT_TYPES

    def reserved_identifiers(self, convention: NameConvention) -> tuple[str, ...]:
        if not self.options.include_client:
            return ()
        if convention == NameConvention.TYPE_CASE:
            return ("Client", "ClientError")
        if convention == NameConvention.MEMBER_CASE:
            return ("call", "constructor", "url", "authToken", "decoder")
        return ()

    def emit_header(self, writer: SourceWriter) -> None:
        writer.line(f"// {GENERATED_NOTICE}")
        writer.line()
        if self.options.include_client:
            writer.line(f"import fetch from {_single_quoted(self.options.fetch_library)}")
            writer.line()
        if self.options.validate and self.uses_kind(TypeKind.TIMESTAMP):
            writer.block(_ZERO_INSTANT)
            writer.line()

    def emit_type_declaration(
        self, writer: SourceWriter, name: str, description: str, members: list[MemberField]
    ) -> None:
        _write_doc(writer, type_summary(name, description))
        self._write_interface(writer, name, members)

    def emit_input_declaration(
        self, writer: SourceWriter, name: str, method: Method, members: list[MemberField]
    ) -> None:
        _write_doc(writer, f"{name} params.")
        self._write_interface(writer, name, members)

    def emit_output_declaration(
        self, writer: SourceWriter, name: str, method: Method, members: list[MemberField]
    ) -> None:
        _write_doc(writer, f"{name} params.")
        self._write_interface(writer, name, members)

    def emit_validation(
        self,
        writer: SourceWriter,
        name: str,
        plan: ValidationPlan,
        members: list[MemberField],
    ) -> None:
        by_field = {member.field.name: member for member in members}
        _write_doc(writer, f"validate{name} checks value, applying defaults in place.")
        writer.line(f"export function validate{name}(value: {name}): string | undefined {{")
        for field_validation in plan.fields:
            member = by_field[field_validation.field.name]
            for step in field_validation.steps:
                self._write_step(writer, member, step)
        writer.line("return undefined", indent=1)
        writer.line("}")

    def emit_client_preamble(self, writer: SourceWriter) -> None:
        writer.block(_CALL)
        writer.line()
        writer.block(_CLIENT_CLASS)

    def emit_client_stub(self, writer: SourceWriter, method: Method) -> None:
        function = self.method_name(method)
        writer.line()
        _write_doc(writer, capitalize(method.description) or f"{function} calls {method.name}.", 1)
        params = f"params: {self.input_name(method)}" if method.inputs else ""
        result = self.output_name(method) if method.outputs else "void"
        writer.line(f"async {function}({params}): Promise<{result}> {{", indent=1)
        arguments = f"this.url, this.authToken, {_single_quoted(method.name)}"
        if method.inputs:
            arguments += ", params"
        if method.outputs:
            writer.line(f"const res = await call({arguments})", indent=2)
            writer.line(f"const out: {result} = JSON.parse(res, this.decoder)", indent=2)
            writer.line("return out", indent=2)
        else:
            writer.line(f"await call({arguments})", indent=2)
        writer.line("}", indent=1)

    def emit_client_postamble(self, writer: SourceWriter) -> None:
        writer.line("}")

    def _write_interface(self, writer: SourceWriter, name: str, members: list[MemberField]) -> None:
        writer.line(f"export interface {name} {{")
        for index, member in enumerate(members):
            if index:
                writer.line()
            _write_doc(writer, field_summary(member.field.name, member.field), indent=1)
            marker = "?" if member.optional else ""
            writer.line(f"{_property_key(member.member)}{marker}: {member.type_expression}", 1)
        writer.line("}")

    def _write_step(self, writer: SourceWriter, member: MemberField, step: ValidationStep) -> None:
        field = member.field
        value = f"value{_property_access(member.member)}"

        if isinstance(step, DefaultSubstitution):
            if field.kind == TypeKind.INT:
                literal = str(step.value)
            else:
                literal = double_quoted(str(step.value))
            writer.line(f"if (!{value}) {{", indent=1)
            writer.line(f"{value} = {literal}", indent=2)
            writer.line("}", indent=1)
        elif isinstance(step, RequiredCheck):
            writer.line(f"if ({_required_condition(field.kind, value)}) {{", indent=1)
            _write_error(writer, field.name, REQUIRED_MESSAGE)
            writer.line("}", indent=1)
        elif isinstance(step, EnumMembershipCheck):
            allowed = ", ".join(double_quoted(item) for item in step.allowed)
            writer.line(f"if ({value} && ![{allowed}].includes({value})) {{", indent=1)
            _write_error(writer, field.name, format_enum_message(step.allowed))
            writer.line("}", indent=1)
        elif isinstance(step, NestedElementValidation):
            child = self.type_system.type_name(step.element_type)
            writer.line(f"for (const [i, item] of ({value} ?? []).entries()) {{", indent=1)
            writer.line(f"const err = validate{child}(item)", indent=2)
            writer.line("if (err) {", indent=2)
            writer.line("return `element ${i}: ${err}`", indent=3)
            writer.line("}", indent=2)
            writer.line("}", indent=1)
        writer.line()


def _required_condition(kind: TypeKind, value: str) -> str:
    if kind in (TypeKind.ARRAY, TypeKind.OBJECT):
        return f"{value} == null"
    if kind == TypeKind.TIMESTAMP:
        return f"{value} == null || {value}.getTime() === zeroInstant"
    return f"!{value}"


def _write_error(writer: SourceWriter, field_name: str, message: str) -> None:
    writer.line(f"return {double_quoted(format_validation_error(field_name, message))}", indent=2)


def _write_doc(writer: SourceWriter, text: str, indent: int = 0) -> None:
    writer.line("/**", indent=indent)
    writer.line(f" * {text}", indent=indent)
    writer.line(" */", indent=indent)


def _property_key(name: str) -> str:
    return name if _IDENTIFIER.match(name) else double_quoted(name)


def _property_access(name: str) -> str:
    return f".{name}" if _IDENTIFIER.match(name) else f"[{double_quoted(name)}]"


def _single_quoted(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"

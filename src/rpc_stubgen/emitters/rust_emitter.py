"""Rust serde declarations, validation impls and async client."""

from __future__ import annotations

from rpc_stubgen.naming import NameConvention
from rpc_stubgen.schema_management import Method, TypeKind
from rpc_stubgen.type_mapping import RUST_TYPES
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
from .source_text import field_summary, rust_string, type_summary

# 0001-01-01T00:00:00Z, the zero instant shared with the other targets.
_ZERO_INSTANT_SECONDS = -62135596800

_CLIENT_STRUCT = """
// Client is the API client.
#[derive(Debug, Clone)]
pub struct Client {
    client: reqwest::Client,
    endpoint: String,
    auth_token: Option<String>,
}

impl Client {
    pub fn new(client: reqwest::Client, endpoint: &str, auth_token: Option<String>) -> Client {
        Client {
            client,
            endpoint: endpoint.to_string(),
            auth_token,
        }
    }
"""

_CALL = """
    // call implementation.
    async fn call(
        &self,
        method: &str,
        input: Option<Vec<u8>>,
    ) -> Result<bytes::Bytes, ClientError> {
        let uri = format!("{}/{}", self.endpoint, method);

        let mut builder = self
            .client
            .post(&uri)
            .header("Content-Type", "application/json");

        if let Some(data) = input {
            builder = builder.body(data);
        }

        if let Some(token) = &self.auth_token {
            builder = builder.header("Authorization", format!("Bearer {}", token));
        }

        let resp = builder.send().await?;

        let status_code = resp.status();
        if status_code.as_u16() >= 300 {
            let mut e = ClientError {
                ..Default::default()
            };

            if let Some(content_type) = resp.headers().get("Content-Type") {
                if content_type == "application/json" {
                    let body = resp.bytes().await?;
                    e = serde_json::from_slice::<ClientError>(&body)?;
                }
            }

            e.status_code = status_code.as_u16();
            e.status = status_code.canonical_reason().unwrap_or_default().into();

            return Err(e);
        }

        Ok(resp.bytes().await?)
    }
}
"""

_ERROR_HANDLING = """
// ClientError is an error returned by the client.
#[derive(Serialize, Deserialize, Debug, Clone, Default)]
pub struct ClientError {
    #[serde(default)]
    pub status: String,
    #[serde(default)]
    pub status_code: u16,
    #[serde(rename = "type")]
    pub err_type: Option<String>,
    pub message: Option<String>,
}

impl std::fmt::Display for ClientError {
    fn fmt(&self, f: &mut std::fmt::Formatter<'_>) -> std::fmt::Result {
        match (&self.err_type, &self.message) {
            (Some(err_type), Some(message)) => {
                write!(f, "{} response: {}: {}", self.status_code, err_type, message)
            }
            _ => write!(f, "{} response", self.status_code),
        }
    }
}

impl std::error::Error for ClientError {}

impl From<serde_json::error::Error> for ClientError {
    fn from(err: serde_json::error::Error) -> ClientError {
        ClientError {
            status: "Internal Server Error".into(),
            status_code: 500,
            err_type: Some("json".into()),
            message: Some(err.to_string()),
        }
    }
}

impl From<reqwest::Error> for ClientError {
    fn from(err: reqwest::Error) -> ClientError {
        ClientError {
            status: "Internal Server Error".into(),
            status_code: 500,
            err_type: Some("reqwest".into()),
            message: Some(err.to_string()),
        }
    }
}
"""


class RustEmitter(SourceEmitter):
    """Rust structs and, for client targets, a reqwest based client."""

    type_system = RUST_TYPES

    def new_writer(self) -> SourceWriter:
        return SourceWriter(indent_unit="    ")

    def reserved_identifiers(self, convention: NameConvention) -> tuple[str, ...]:
        if convention == NameConvention.TYPE_CASE:
            # Self is a keyword in type position.
            return ("Self", "Client", "ClientError") if self.options.include_client else ("Self",)
        if convention == NameConvention.MEMBER_CASE and self.options.include_client:
            return ("new", "call")
        return ()

    def emit_header(self, writer: SourceWriter) -> None:
        writer.line(f"// {GENERATED_NOTICE}")
        writer.line()
        if self.options.include_types and self.uses_kind(TypeKind.OBJECT):
            writer.line("use std::collections::HashMap;")
            writer.line()
        if self.options.include_types and self.uses_kind(TypeKind.TIMESTAMP):
            writer.line("use chrono::{DateTime, Utc};")
        writer.line("use serde::{Deserialize, Serialize};")
        writer.line()

    def emit_type_declaration(
        self, writer: SourceWriter, name: str, description: str, members: list[MemberField]
    ) -> None:
        writer.line(f"// {type_summary(name, description)}")
        writer.line("#[derive(Serialize, Deserialize, Debug, Clone)]")
        self._write_struct(writer, name, members)

    def emit_input_declaration(
        self, writer: SourceWriter, name: str, method: Method, members: list[MemberField]
    ) -> None:
        writer.line(f"// {name} params.")
        writer.line("#[derive(Serialize, Debug, Clone)]")
        self._write_struct(writer, name, members)

    def emit_output_declaration(
        self, writer: SourceWriter, name: str, method: Method, members: list[MemberField]
    ) -> None:
        writer.line(f"// {name} params.")
        writer.line("#[derive(Deserialize, Debug, Clone)]")
        self._write_struct(writer, name, members)

    def emit_validation(
        self,
        writer: SourceWriter,
        name: str,
        plan: ValidationPlan,
        members: list[MemberField],
    ) -> None:
        by_field = {member.field.name: member for member in members}
        writer.line("// Validate implementation.")
        writer.line(f"impl {name} {{")
        writer.line("pub fn validate(&mut self) -> Result<(), String> {", indent=1)
        for field_validation in plan.fields:
            member = by_field[field_validation.field.name]
            for step in field_validation.steps:
                self._write_step(writer, member, step)
        writer.line("Ok(())", indent=2)
        writer.line("}", indent=1)
        writer.line("}")

    def emit_client_preamble(self, writer: SourceWriter) -> None:
        writer.block(_CLIENT_STRUCT)

    def emit_client_stub(self, writer: SourceWriter, method: Method) -> None:
        function = self.method_name(method)
        writer.line()
        if method.description:
            writer.line(f"// {function} {method.description}", indent=1)
        signature = f"pub async fn {function}(&self"
        if method.inputs:
            signature += f", input: &{self.input_name(method)}"
        if method.outputs:
            signature += f") -> Result<{self.output_name(method)}, ClientError> {{"
        else:
            signature += ") -> Result<(), ClientError> {"
        writer.line(signature, indent=1)

        payload = "None"
        if method.inputs:
            writer.line("let json = serde_json::to_vec(input)?;", indent=2)
            payload = "Some(json)"
        invocation = f"self.call({rust_string(method.name)}, {payload}).await?;"
        if method.outputs:
            writer.line(f"let res: bytes::Bytes = {invocation}", indent=2)
            writer.line(
                f"let output: {self.output_name(method)} = serde_json::from_slice(&res)?;",
                indent=2,
            )
            writer.line("Ok(output)", indent=2)
        else:
            writer.line(invocation, indent=2)
            writer.line("Ok(())", indent=2)
        writer.line("}", indent=1)

    def emit_client_postamble(self, writer: SourceWriter) -> None:
        writer.block(_CALL)
        writer.line()
        writer.block(_ERROR_HANDLING)

    def _write_struct(self, writer: SourceWriter, name: str, members: list[MemberField]) -> None:
        writer.line(f"pub struct {name} {{")
        for index, member in enumerate(members):
            if index:
                writer.line()
            writer.line(f"// {field_summary(member.member, member.field)}", indent=1)
            if member.member.removeprefix("r#") != member.field.name:
                writer.line(f"#[serde(rename = {rust_string(member.field.name)})]", indent=1)
            writer.line(f"pub {member.member}: {member.type_expression},", indent=1)
        writer.line("}")

    def _write_step(self, writer: SourceWriter, member: MemberField, step: ValidationStep) -> None:
        field = member.field
        value = f"self.{member.member}"

        if isinstance(step, DefaultSubstitution):
            if field.kind == TypeKind.INT:
                literal = str(step.value)
                condition = f"{value}.unwrap_or(0) == 0" if member.optional else f"{value} == 0"
            else:
                literal = f"{rust_string(str(step.value))}.to_string()"
                condition = (
                    f'{value}.as_deref().unwrap_or("").is_empty()'
                    if member.optional
                    else f"{value}.is_empty()"
                )
            assigned = f"Some({literal})" if member.optional else literal
            writer.line(f"if {condition} {{", indent=2)
            writer.line(f"{value} = {assigned};", indent=3)
            writer.line("}", indent=2)
            writer.line()
        elif isinstance(step, RequiredCheck):
            condition = _required_condition(field.kind, value)
            if condition is None:
                writer.line(
                    f"// {field.name}: presence is enforced when deserializing.", indent=2
                )
                writer.line()
                return
            writer.line(f"if {condition} {{", indent=2)
            self._write_error(writer, field.name, REQUIRED_MESSAGE, indent=3)
            writer.line("}", indent=2)
            writer.line()
        elif isinstance(step, EnumMembershipCheck):
            allowed = ", ".join(rust_string(item) for item in step.allowed)
            message = format_enum_message(step.allowed)
            if member.optional:
                writer.line(f"if let Some(value) = {value}.as_deref() {{", indent=2)
                writer.line(
                    f"if !value.is_empty() && ![{allowed}].contains(&value) {{", indent=3
                )
                self._write_error(writer, field.name, message, indent=4)
                writer.line("}", indent=3)
                writer.line("}", indent=2)
            else:
                writer.line(
                    f"if !{value}.is_empty() && ![{allowed}].contains(&{value}.as_str()) {{",
                    indent=2,
                )
                self._write_error(writer, field.name, message, indent=3)
                writer.line("}", indent=2)
            writer.line()
        elif isinstance(step, NestedElementValidation):
            depth = 2
            items = f"{value}.iter_mut()"
            if member.optional:
                writer.line(f"if let Some(items) = {value}.as_mut() {{", indent=2)
                depth = 3
                items = "items.iter_mut()"
            writer.line(f"for (i, item) in {items}.enumerate() {{", indent=depth)
            writer.line("if let Err(err) = item.validate() {", indent=depth + 1)
            writer.line('return Err(format!("element {}: {}", i, err));', indent=depth + 2)
            writer.line("}", indent=depth + 1)
            writer.line("}", indent=depth)
            if member.optional:
                writer.line("}", indent=2)
            writer.line()

    def _write_error(
        self, writer: SourceWriter, field_name: str, message: str, indent: int
    ) -> None:
        error = rust_string(format_validation_error(field_name, message))
        writer.line(f"return Err({error}.to_string());", indent=indent)


def _required_condition(kind: TypeKind, value: str) -> str | None:
    if kind == TypeKind.INT:
        return f"{value} == 0"
    if kind == TypeKind.FLOAT:
        return f"{value} == 0.0"
    if kind == TypeKind.STRING:
        return f"{value}.is_empty()"
    if kind == TypeKind.TIMESTAMP:
        return f"{value}.timestamp() == {_ZERO_INSTANT_SECONDS}"
    # required Vec and HashMap members cannot be absent once deserialized
    return None

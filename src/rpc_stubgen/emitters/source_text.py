"""Comment and literal formatting shared by emitters."""

from __future__ import annotations

import json

from rpc_stubgen.schema_management import Field
from rpc_stubgen.validation_synthesis import format_enum_message


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def constraint_extras(field: Field) -> str:
    """Return the sentences documenting a field's enum and default."""
    extras = ""
    if field.enum:
        extras += f" {capitalize(format_enum_message(field.enum))}."
    if field.default is not None:
        extras += f" This field defaults to {json.dumps(field.default, ensure_ascii=False)}."
    return extras


def field_summary(member: str, field: Field) -> str:
    description = field.description or f"the {field.name} field."
    return f"{member} is {description}{constraint_extras(field)}"


def type_summary(name: str, description: str) -> str:
    return f"{name} {description}" if description else name


def double_quoted(value: str) -> str:
    """Double-quoted literal valid in Go, TypeScript and Ruby sources."""
    return json.dumps(value, ensure_ascii=False)


def rust_string(value: str) -> str:
    escaped = []
    for char in value:
        if char in ('"', "\\"):
            escaped.append("\\" + char)
        elif char == "\n":
            escaped.append("\\n")
        elif char == "\r":
            escaped.append("\\r")
        elif char == "\t":
            escaped.append("\\t")
        elif ord(char) < 0x20:
            escaped.append(f"\\u{{{ord(char):x}}}")
        else:
            escaped.append(char)
    return '"' + "".join(escaped) + '"'

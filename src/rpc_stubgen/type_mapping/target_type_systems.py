"""Type systems of the supported target languages."""

from __future__ import annotations

from rpc_stubgen.naming import GO_NAMING, RUBY_NAMING, RUST_NAMING, TYPESCRIPT_NAMING
from rpc_stubgen.schema_management import TypeDescriptor, TypeKind

from .type_mapper import TargetTypeSystem


def _go_optional(expression: str, descriptor: TypeDescriptor) -> str:
    # slices and maps already have a nil value
    if descriptor.kind in (TypeKind.ARRAY, TypeKind.OBJECT):
        return expression
    return f"*{expression}"


GO_TYPES = TargetTypeSystem(
    language="Go",
    primitives={
        TypeKind.STRING: "string",
        TypeKind.INT: "int64",
        TypeKind.FLOAT: "float64",
        TypeKind.BOOL: "bool",
        TypeKind.TIMESTAMP: "time.Time",
        TypeKind.OBJECT: "map[string]interface{}",
    },
    sequence=lambda element: f"[]{element}",
    optional=_go_optional,
    naming=GO_NAMING,
)

RUST_TYPES = TargetTypeSystem(
    language="Rust",
    primitives={
        TypeKind.STRING: "String",
        TypeKind.INT: "i64",
        TypeKind.FLOAT: "f64",
        TypeKind.BOOL: "bool",
        TypeKind.TIMESTAMP: "DateTime<Utc>",
        TypeKind.OBJECT: "HashMap<String, serde_json::Value>",
    },
    sequence=lambda element: f"Vec<{element}>",
    optional=lambda expression, _descriptor: f"Option<{expression}>",
    naming=RUST_NAMING,
)

TYPESCRIPT_TYPES = TargetTypeSystem(
    language="TypeScript",
    primitives={
        TypeKind.STRING: "string",
        TypeKind.INT: "number",
        TypeKind.FLOAT: "number",
        TypeKind.BOOL: "boolean",
        TypeKind.TIMESTAMP: "Date",
        TypeKind.OBJECT: "Record<string, any>",
    },
    sequence=lambda element: f"{element}[]",
    optional=lambda expression, _descriptor: f"{expression} | undefined",
    naming=TYPESCRIPT_NAMING,
)

# YARD type notation used in generated Ruby documentation.
RUBY_TYPES = TargetTypeSystem(
    language="Ruby",
    primitives={
        TypeKind.STRING: "String",
        TypeKind.INT: "Integer",
        TypeKind.FLOAT: "Float",
        TypeKind.BOOL: "Boolean",
        TypeKind.TIMESTAMP: "Time",
        TypeKind.OBJECT: "Hash",
    },
    sequence=lambda element: f"Array<{element}>",
    optional=lambda expression, _descriptor: f"{expression}, nil",
    naming=RUBY_NAMING,
)

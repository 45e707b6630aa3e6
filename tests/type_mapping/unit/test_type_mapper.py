"""Type mapping tests."""

from __future__ import annotations

import pytest
from rpc_stubgen.generation_errors import UnhandledType, UnresolvedReference
from rpc_stubgen.naming import GO_NAMING
from rpc_stubgen.schema_management import (
    Field,
    Schema,
    TypeDefinition,
    TypeDescriptor,
    TypeKind,
    resolve_reference,
)
from rpc_stubgen.type_mapping import (
    GO_TYPES,
    RUBY_TYPES,
    RUST_TYPES,
    TYPESCRIPT_TYPES,
    TargetTypeSystem,
    map_descriptor,
    map_type,
)

_SCHEMA = Schema(
    name="test",
    types=(TypeDefinition(name="user_profile"), TypeDefinition(name="Tag")),
)


def _field(descriptor: TypeDescriptor, required: bool = True) -> Field:
    return Field(name="value", type=descriptor, required=required)


@pytest.mark.parametrize("type_system", [GO_TYPES, RUST_TYPES, TYPESCRIPT_TYPES, RUBY_TYPES])
def test_reference_maps_to_type_case_name_of_resolved_type(
    type_system: TargetTypeSystem,
) -> None:
    field = _field(TypeDescriptor.ref("user_profile"))
    resolved = resolve_reference(_SCHEMA, field.type.reference)  # type: ignore[arg-type]

    assert map_type(_SCHEMA, field, type_system) == type_system.type_name(resolved.name)
    assert map_type(_SCHEMA, field, type_system) == "UserProfile"


@pytest.mark.parametrize(
    ("kind", "go", "rust", "typescript"),
    [
        (TypeKind.STRING, "string", "String", "string"),
        (TypeKind.INT, "int64", "i64", "number"),
        (TypeKind.FLOAT, "float64", "f64", "number"),
        (TypeKind.BOOL, "bool", "bool", "boolean"),
        (TypeKind.TIMESTAMP, "time.Time", "DateTime<Utc>", "Date"),
        (TypeKind.OBJECT, "map[string]interface{}", "HashMap<String, serde_json::Value>",
         "Record<string, any>"),
    ],
)
def test_primitive_table(kind: TypeKind, go: str, rust: str, typescript: str) -> None:
    descriptor = TypeDescriptor.of(kind)

    assert map_descriptor(_SCHEMA, descriptor, GO_TYPES) == go
    assert map_descriptor(_SCHEMA, descriptor, RUST_TYPES) == rust
    assert map_descriptor(_SCHEMA, descriptor, TYPESCRIPT_TYPES) == typescript


def test_arrays_map_recursively() -> None:
    descriptor = TypeDescriptor.array(TypeDescriptor.array(TypeDescriptor.ref("Tag")))

    assert map_descriptor(_SCHEMA, descriptor, GO_TYPES) == "[][]Tag"
    assert map_descriptor(_SCHEMA, descriptor, RUST_TYPES) == "Vec<Vec<Tag>>"
    assert map_descriptor(_SCHEMA, descriptor, TYPESCRIPT_TYPES) == "Tag[][]"
    assert map_descriptor(_SCHEMA, descriptor, RUBY_TYPES) == "Array<Array<Tag>>"


def test_optional_fields_are_wrapped_per_target() -> None:
    scalar = _field(TypeDescriptor.of(TypeKind.INT), required=False)
    listing = _field(TypeDescriptor.array(TypeDescriptor.of(TypeKind.STRING)), required=False)

    assert map_type(_SCHEMA, scalar, GO_TYPES) == "*int64"
    assert map_type(_SCHEMA, listing, GO_TYPES) == "[]string"
    assert map_type(_SCHEMA, scalar, RUST_TYPES) == "Option<i64>"
    assert map_type(_SCHEMA, listing, TYPESCRIPT_TYPES) == "string[] | undefined"
    assert map_type(_SCHEMA, scalar, RUBY_TYPES) == "Integer, nil"


def test_required_fields_are_not_wrapped() -> None:
    field = _field(TypeDescriptor.of(TypeKind.STRING))

    assert map_type(_SCHEMA, field, RUST_TYPES) == "String"


def test_unresolved_reference_aborts_mapping() -> None:
    field = _field(TypeDescriptor.ref("Missing"))

    with pytest.raises(UnresolvedReference, match="User.value: unresolved reference"):
        map_type(_SCHEMA, field, GO_TYPES, owner="User")


def test_kind_missing_from_type_system_is_unhandled() -> None:
    partial = TargetTypeSystem(
        language="Partial",
        primitives={TypeKind.STRING: "str"},
        sequence=lambda element: f"list[{element}]",
        optional=lambda expression, _descriptor: f"{expression} | None",
        naming=GO_NAMING,
    )
    field = _field(TypeDescriptor.array(TypeDescriptor.of(TypeKind.TIMESTAMP)))

    with pytest.raises(UnhandledType) as excinfo:
        map_type(_SCHEMA, field, partial, owner="Event")

    assert excinfo.value.target_language == "Partial"
    assert excinfo.value.owner == "Event.value"


def test_malformed_descriptors_are_unhandled() -> None:
    with pytest.raises(UnhandledType):
        map_descriptor(_SCHEMA, TypeDescriptor(kind=TypeKind.ARRAY), GO_TYPES)
    with pytest.raises(UnhandledType):
        map_descriptor(_SCHEMA, TypeDescriptor(kind=TypeKind.REFERENCE), GO_TYPES)


def test_mapping_does_not_mutate_schema() -> None:
    before = repr(_SCHEMA)

    map_type(_SCHEMA, _field(TypeDescriptor.ref("Tag"), required=False), RUST_TYPES)

    assert repr(_SCHEMA) == before

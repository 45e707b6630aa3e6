"""Reference resolution tests."""

from __future__ import annotations

import pytest
from rpc_stubgen.generation_errors import GenerationError, UnresolvedReference
from rpc_stubgen.schema_management import (
    Field,
    Method,
    Schema,
    TypeDefinition,
    TypeDescriptor,
    TypeKind,
    TypeReference,
    check_references,
    resolve_descriptor_references,
    resolve_reference,
)


def _schema(*types: TypeDefinition, methods: tuple[Method, ...] = ()) -> Schema:
    return Schema(name="test", types=types, methods=methods)


def test_resolves_reference_by_name() -> None:
    group = TypeDefinition(name="Group")
    schema = _schema(TypeDefinition(name="User"), group)

    assert resolve_reference(schema, TypeReference("Group")) is group


def test_unresolved_reference_names_owner_and_missing_type() -> None:
    schema = _schema(TypeDefinition(name="User"))

    with pytest.raises(UnresolvedReference) as excinfo:
        resolve_reference(schema, TypeReference("Group"), owner="User.group")

    assert excinfo.value.owner == "User.group"
    assert excinfo.value.target == "Group"
    assert str(excinfo.value) == "User.group: unresolved reference to type 'Group'"
    assert isinstance(excinfo.value, GenerationError)


def test_resolves_references_nested_in_array_items() -> None:
    tag = TypeDefinition(name="Tag")
    schema = _schema(tag)
    descriptor = TypeDescriptor.array(TypeDescriptor.array(TypeDescriptor.ref("Tag")))

    assert resolve_descriptor_references(schema, descriptor) == [tag]


def test_primitive_descriptor_has_no_references() -> None:
    schema = _schema()

    assert resolve_descriptor_references(schema, TypeDescriptor.of(TypeKind.STRING)) == []


def test_cyclic_named_references_are_legal() -> None:
    node = TypeDefinition(
        name="Node",
        properties=(
            Field(name="children", type=TypeDescriptor.array(TypeDescriptor.ref("Node"))),
            Field(name="parent", type=TypeDescriptor.ref("Node")),
        ),
    )

    check_references(_schema(node))


def test_check_references_reports_type_field_owner() -> None:
    user = TypeDefinition(
        name="User",
        properties=(
            Field(name="id", type=TypeDescriptor.of(TypeKind.INT)),
            Field(name="groups", type=TypeDescriptor.array(TypeDescriptor.ref("Group"))),
        ),
    )

    with pytest.raises(
        UnresolvedReference, match="User.groups: unresolved reference to type 'Group'"
    ):
        check_references(_schema(user))


def test_check_references_reports_method_output_owner() -> None:
    method = Method(
        name="get_user",
        outputs=(Field(name="user", type=TypeDescriptor.ref("User")),),
    )

    with pytest.raises(UnresolvedReference, match="get_user output user"):
        check_references(_schema(methods=(method,)))

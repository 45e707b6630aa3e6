"""Type reference resolution service."""

from __future__ import annotations

from collections.abc import Iterator

from rpc_stubgen.generation_errors import UnresolvedReference

from .schema_models import Field, Schema, TypeDefinition, TypeDescriptor, TypeReference


def resolve_reference(
    schema: Schema, reference: TypeReference, *, owner: str | None = None
) -> TypeDefinition:
    """Return the type a reference points to.

    Raises:
      UnresolvedReference: If the schema declares no type with that name.
    """
    resolved = schema.find_type(reference.target)
    if resolved is None:
        raise UnresolvedReference(owner, reference.target)
    return resolved


def resolve_descriptor_references(
    schema: Schema, descriptor: TypeDescriptor, *, owner: str | None = None
) -> list[TypeDefinition]:
    """Resolve every reference reachable from a descriptor, array items included."""
    resolved: list[TypeDefinition] = []
    current: TypeDescriptor | None = descriptor
    while current is not None:
        if current.reference is not None:
            resolved.append(resolve_reference(schema, current.reference, owner=owner))
        current = current.items
    return resolved


def check_references(schema: Schema) -> None:
    """Resolve every reference in the schema, failing on the first missing type."""
    for owner, field in _iter_owned_fields(schema):
        resolve_descriptor_references(schema, field.type, owner=owner)


def _iter_owned_fields(schema: Schema) -> Iterator[tuple[str, Field]]:
    for type_definition in schema.types:
        for field in type_definition.properties:
            yield f"{type_definition.name}.{field.name}", field
    for method in schema.methods:
        for field in method.inputs:
            yield f"{method.name} input {field.name}", field
        for field in method.outputs:
            yield f"{method.name} output {field.name}", field

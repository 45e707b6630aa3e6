"""Projection of schema field types onto target type expressions."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from rpc_stubgen.generation_errors import UnhandledType
from rpc_stubgen.naming import NameConvention, NamingStyle
from rpc_stubgen.schema_management import (
    Field,
    Schema,
    TypeDescriptor,
    TypeKind,
    resolve_reference,
)


@dataclass(frozen=True)
class TargetTypeSystem:
    """Concrete type vocabulary of one target language."""

    language: str
    primitives: Mapping[TypeKind, str]
    sequence: Callable[[str], str]
    optional: Callable[[str, TypeDescriptor], str]
    naming: NamingStyle

    def type_name(self, raw_name: str) -> str:
        return self.naming.identifier(raw_name, NameConvention.TYPE_CASE)


def map_type(
    schema: Schema, field: Field, type_system: TargetTypeSystem, *, owner: str | None = None
) -> str:
    """Return the target type expression of a field, wrapped when the field is optional."""
    location = f"{owner}.{field.name}" if owner else field.name
    expression = map_descriptor(schema, field.type, type_system, owner=location)
    if field.required:
        return expression
    return type_system.optional(expression, field.type)


def map_descriptor(
    schema: Schema,
    descriptor: TypeDescriptor,
    type_system: TargetTypeSystem,
    *,
    owner: str | None = None,
) -> str:
    """Return the unwrapped target type expression of a descriptor."""
    if descriptor.kind == TypeKind.REFERENCE:
        if descriptor.reference is None:
            raise UnhandledType(descriptor, type_system.language, owner)
        resolved = resolve_reference(schema, descriptor.reference, owner=owner)
        return type_system.type_name(resolved.name)

    if descriptor.kind == TypeKind.ARRAY:
        if descriptor.items is None:
            raise UnhandledType(descriptor, type_system.language, owner)
        element = map_descriptor(schema, descriptor.items, type_system, owner=owner)
        return type_system.sequence(element)

    primitive = type_system.primitives.get(descriptor.kind)
    if primitive is None:
        raise UnhandledType(descriptor, type_system.language, owner)
    return primitive

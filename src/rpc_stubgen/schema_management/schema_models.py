"""Schema model entities."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property


class SchemaError(Exception):
    """Raised for schema parsing or well-formedness failures."""


class TypeKind(str, Enum):
    """Closed set of type descriptor variants."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    TIMESTAMP = "timestamp"
    OBJECT = "object"
    ARRAY = "array"
    REFERENCE = "reference"


PRIMITIVE_KINDS = frozenset(
    {
        TypeKind.STRING,
        TypeKind.INT,
        TypeKind.FLOAT,
        TypeKind.BOOL,
        TypeKind.TIMESTAMP,
        TypeKind.OBJECT,
    }
)


@dataclass(frozen=True)
class TypeReference:
    """By-name pointer to a type declared in the same schema."""

    target: str


@dataclass(frozen=True)
class TypeDescriptor:
    """Type of a field or of an array's elements."""

    kind: TypeKind
    reference: TypeReference | None = None
    items: TypeDescriptor | None = None

    @classmethod
    def of(cls, kind: TypeKind) -> TypeDescriptor:
        return cls(kind=kind)

    @classmethod
    def ref(cls, target: str) -> TypeDescriptor:
        return cls(kind=TypeKind.REFERENCE, reference=TypeReference(target))

    @classmethod
    def array(cls, items: TypeDescriptor) -> TypeDescriptor:
        return cls(kind=TypeKind.ARRAY, items=items)

    @property
    def is_reference(self) -> bool:
        return self.kind == TypeKind.REFERENCE and self.reference is not None


@dataclass(frozen=True)
class Field:
    """Named, typed member of a type or method."""

    name: str
    type: TypeDescriptor
    description: str = ""
    required: bool = False
    default: object | None = None
    enum: tuple[str, ...] | None = None

    @property
    def kind(self) -> TypeKind:
        return self.type.kind

    @property
    def items(self) -> TypeDescriptor | None:
        """Element descriptor of an array field."""
        return self.type.items


@dataclass(frozen=True)
class TypeDefinition:
    """Named object shape with ordered properties."""

    name: str
    description: str = ""
    properties: tuple[Field, ...] = ()


@dataclass(frozen=True)
class Method:
    """Named remote operation with ordered inputs and outputs."""

    name: str
    description: str = ""
    inputs: tuple[Field, ...] = ()
    outputs: tuple[Field, ...] = ()


@dataclass(frozen=True)
class Schema:
    """Root aggregate owning all types and methods.

    Types and methods keep their declaration order. Names must be unique
    within each collection; the schema is treated as immutable after load.
    """

    name: str = ""
    description: str = ""
    types: tuple[TypeDefinition, ...] = ()
    methods: tuple[Method, ...] = ()
    go_tags: tuple[str, ...] = field(default=("json",))

    def __post_init__(self) -> None:
        _ensure_unique((item.name for item in self.types), "type")
        _ensure_unique((item.name for item in self.methods), "method")

    @cached_property
    def types_by_name(self) -> dict[str, TypeDefinition]:
        return {item.name: item for item in self.types}

    def find_type(self, name: str) -> TypeDefinition | None:
        return self.types_by_name.get(name)


def _ensure_unique(names: Iterable[str], label: str) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise SchemaError(f"Duplicate {label} name: {name}")
        seen.add(name)

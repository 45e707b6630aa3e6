"""Schema management exports."""

from .reference_resolution import (
    check_references,
    resolve_descriptor_references,
    resolve_reference,
)
from .schema_loader import load_schema_document, load_schema_file
from .schema_models import (
    Field,
    Method,
    Schema,
    SchemaError,
    TypeDefinition,
    TypeDescriptor,
    TypeKind,
    TypeReference,
)

__all__ = [
    "Field",
    "Method",
    "Schema",
    "SchemaError",
    "TypeDefinition",
    "TypeDescriptor",
    "TypeKind",
    "TypeReference",
    "check_references",
    "load_schema_document",
    "load_schema_file",
    "resolve_descriptor_references",
    "resolve_reference",
]

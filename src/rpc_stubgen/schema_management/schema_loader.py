"""Schema document loading service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .schema_models import (
    Field,
    Method,
    Schema,
    SchemaError,
    TypeDefinition,
    TypeDescriptor,
    TypeKind,
)

_LOGGER = logging.getLogger(__name__)

_REF_PREFIX = "#/types/"
_TYPE_NAMES = {kind.value: kind for kind in TypeKind if kind != TypeKind.REFERENCE}


def load_schema_file(schema_path: Path | str) -> Schema:
    """Read a JSON or YAML schema file into a schema model."""
    path = Path(schema_path)
    if not path.exists():
        raise SchemaError(f"Schema file not found: {path}")
    _LOGGER.debug("loading schema from %s", path)
    return load_schema_document(path.read_text(encoding="utf-8"))


def load_schema_document(text: str) -> Schema:
    """Parse schema text into a schema model."""
    try:
        root = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaError(f"Invalid schema document: {exc}") from exc

    if not isinstance(root, Mapping):
        raise SchemaError("Schema document root must be a mapping.")

    types = tuple(_parse_types(root.get("types")))
    methods = tuple(
        _parse_method(item) for item in _require_sequence(root.get("methods"), "methods")
    )
    schema = Schema(
        name=_optional_text(root.get("name"), "name"),
        description=_optional_text(root.get("description"), "description"),
        types=types,
        methods=methods,
        go_tags=_parse_go_tags(root.get("go")),
    )
    _LOGGER.debug("loaded schema with %d types and %d methods", len(types), len(methods))
    return schema


def _parse_types(value: Any) -> list[TypeDefinition]:
    if value is None:
        return []
    if isinstance(value, Mapping):
        return [_parse_type(name, body) for name, body in value.items()]
    return [
        _parse_type(_require_name(item, "type"), item)
        for item in _require_sequence(value, "types")
    ]


def _parse_type(name: Any, body: Any) -> TypeDefinition:
    type_name = _require_identifier(name, "type name")
    if body is None:
        body = {}
    if not isinstance(body, Mapping):
        raise SchemaError(f"Type '{type_name}' must be a mapping.")
    return TypeDefinition(
        name=type_name,
        description=_optional_text(body.get("description"), f"{type_name}.description"),
        properties=_parse_fields(body.get("properties"), owner=type_name),
    )


def _parse_method(body: Any) -> Method:
    method_name = _require_name(body, "method")
    return Method(
        name=method_name,
        description=_optional_text(body.get("description"), f"{method_name}.description"),
        inputs=_parse_fields(body.get("inputs"), owner=f"{method_name} inputs"),
        outputs=_parse_fields(body.get("outputs"), owner=f"{method_name} outputs"),
    )


def _parse_fields(value: Any, *, owner: str) -> tuple[Field, ...]:
    if value is None:
        return ()
    if isinstance(value, Mapping):
        pairs = [(name, body) for name, body in value.items()]
    elif isinstance(value, Sequence) and not isinstance(value, str):
        pairs = [(_require_name(item, f"{owner} field"), item) for item in value]
    else:
        raise SchemaError(f"{owner}: fields must be a mapping or a list.")

    fields: list[Field] = []
    seen: set[str] = set()
    for name, body in pairs:
        field_name = _require_identifier(name, f"{owner} field name")
        if field_name in seen:
            raise SchemaError(f"{owner}: duplicate field '{field_name}'")
        seen.add(field_name)
        fields.append(_parse_field(field_name, body, owner=owner))
    return tuple(fields)


def _parse_field(name: str, body: Any, *, owner: str) -> Field:
    location = f"{owner}.{name}"
    if not isinstance(body, Mapping):
        raise SchemaError(f"{location}: field definition must be a mapping.")
    required = body.get("required", False)
    if not isinstance(required, bool):
        raise SchemaError(f"{location}: required must be a boolean.")
    return Field(
        name=name,
        description=_optional_text(body.get("description"), f"{location}.description"),
        type=_parse_descriptor(body, location=location),
        required=required,
        default=body.get("default"),
        enum=_parse_enum(body.get("enum"), location=location),
    )


def _parse_descriptor(body: Mapping[str, Any], *, location: str) -> TypeDescriptor:
    ref = body.get("$ref")
    type_name = body.get("type")
    if ref is not None and type_name is not None:
        raise SchemaError(f"{location}: must not set both type and $ref.")
    if ref is not None:
        if not isinstance(ref, str) or not ref.strip():
            raise SchemaError(f"{location}: $ref must be a non-empty string.")
        return TypeDescriptor.ref(ref.strip().removeprefix(_REF_PREFIX))
    if not isinstance(type_name, str):
        raise SchemaError(f"{location}: type or $ref is required.")
    kind = _TYPE_NAMES.get(type_name)
    if kind is None:
        raise SchemaError(f"{location}: unknown type '{type_name}'.")
    if kind != TypeKind.ARRAY:
        return TypeDescriptor.of(kind)
    items = body.get("items")
    if not isinstance(items, Mapping):
        raise SchemaError(f"{location}: array type requires items.")
    return TypeDescriptor.array(_parse_descriptor(items, location=f"{location}[]"))


def _parse_enum(value: Any, *, location: str) -> tuple[str, ...] | None:
    if value is None:
        return None
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise SchemaError(f"{location}: enum must be a list of strings.")
    for item in value:
        if not isinstance(item, str):
            raise SchemaError(f"{location}: enum entries must be strings.")
    return tuple(value)


def _parse_go_tags(value: Any) -> tuple[str, ...]:
    if value is None:
        return ("json",)
    if not isinstance(value, Mapping):
        raise SchemaError("go must be a mapping.")
    tags = value.get("tags")
    if tags is None:
        return ("json",)
    if not isinstance(tags, Sequence) or isinstance(tags, str):
        raise SchemaError("go.tags must be a list of strings.")
    normalized = []
    for tag in tags:
        if not isinstance(tag, str) or not tag.strip():
            raise SchemaError("go.tags entries must be non-empty strings.")
        normalized.append(tag.strip())
    return tuple(normalized)


def _require_sequence(value: Any, label: str) -> Sequence[Any]:
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise SchemaError(f"{label} must be a list.")
    return value


def _require_name(body: Any, label: str) -> str:
    if not isinstance(body, Mapping):
        raise SchemaError(f"Each {label} must be a mapping.")
    return _require_identifier(body.get("name"), f"{label} name")


def _require_identifier(value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise SchemaError(f"{label} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise SchemaError(f"{label} must not be empty.")
    return stripped


def _optional_text(value: Any, label: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SchemaError(f"{label} must be a string.")
    return value.strip()

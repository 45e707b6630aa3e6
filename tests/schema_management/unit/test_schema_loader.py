"""Schema document loading tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from rpc_stubgen.schema_management import (
    SchemaError,
    TypeDescriptor,
    TypeKind,
    load_schema_document,
    load_schema_file,
)


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


_USERS_SCHEMA = """
name: users
description: User management.
types:
  user:
    description: is a user.
    properties:
      id:
        type: int
        required: true
        description: the user id.
      role:
        type: string
        enum: [admin, member]
        default: member
      tags:
        type: array
        items:
          type: string
methods:
  - name: get_user
    description: returns a user.
    inputs:
      - name: id
        type: int
        required: true
    outputs:
      - name: user
        $ref: "#/types/user"
        required: true
"""


def test_loads_yaml_schema_with_types_and_methods(tmp_path: Path) -> None:
    schema = load_schema_file(_write_file(tmp_path / "schema.yaml", _USERS_SCHEMA))

    assert schema.name == "users"
    assert [item.name for item in schema.types] == ["user"]
    user = schema.types[0]
    assert [field.name for field in user.properties] == ["id", "role", "tags"]
    assert user.properties[0].required is True
    assert user.properties[0].kind == TypeKind.INT
    assert user.properties[0].description == "the user id."
    assert user.properties[1].enum == ("admin", "member")
    assert user.properties[1].default == "member"
    assert user.properties[2].items == TypeDescriptor.of(TypeKind.STRING)

    method = schema.methods[0]
    assert method.name == "get_user"
    assert [field.name for field in method.inputs] == ["id"]
    assert method.outputs[0].type == TypeDescriptor.ref("user")
    assert schema.go_tags == ("json",)


def test_loads_json_schema_with_list_form_properties() -> None:
    document = json.dumps(
        {
            "types": [
                {
                    "name": "pet",
                    "properties": [
                        {"name": "name", "type": "string", "required": True},
                        {"name": "born", "type": "timestamp"},
                    ],
                }
            ],
            "go": {"tags": ["json", "yaml"]},
        }
    )

    schema = load_schema_document(document)

    assert schema.types[0].properties[1].kind == TypeKind.TIMESTAMP
    assert schema.methods == ()
    assert schema.go_tags == ("json", "yaml")


def test_accepts_bare_reference_names() -> None:
    schema = load_schema_document(
        """
types:
  group: {}
  user:
    properties:
      groups:
        type: array
        items:
          $ref: group
"""
    )

    groups = schema.find_type("user").properties[0]  # type: ignore[union-attr]
    assert groups.items == TypeDescriptor.ref("group")


def test_missing_schema_file_raises(tmp_path: Path) -> None:
    with pytest.raises(SchemaError, match="Schema file not found"):
        load_schema_file(tmp_path / "missing.yaml")


def test_rejects_non_mapping_root() -> None:
    with pytest.raises(SchemaError, match="root must be a mapping"):
        load_schema_document("- just\n- a list\n")


@pytest.mark.parametrize(
    ("field_body", "message"),
    [
        ("{type: string, $ref: user}", "must not set both type and \\$ref"),
        ("{type: uuid}", "unknown type 'uuid'"),
        ("{type: array}", "array type requires items"),
        ("{description: no type}", "type or \\$ref is required"),
        ("{type: int, required: 'yes'}", "required must be a boolean"),
        ("{type: string, enum: [1, 2]}", "enum entries must be strings"),
    ],
)
def test_rejects_malformed_fields(field_body: str, message: str) -> None:
    document = f"types:\n  user:\n    properties:\n      broken: {field_body}\n"

    with pytest.raises(SchemaError, match=message):
        load_schema_document(document)


def test_rejects_duplicate_field_names() -> None:
    document = """
methods:
  - name: ping
    inputs:
      - {name: id, type: int}
      - {name: id, type: string}
"""
    with pytest.raises(SchemaError, match="duplicate field 'id'"):
        load_schema_document(document)


def test_rejects_duplicate_type_names() -> None:
    document = """
types:
  - {name: user}
  - {name: user}
"""
    with pytest.raises(SchemaError, match="Duplicate type name: user"):
        load_schema_document(document)


def test_rejects_duplicate_method_names() -> None:
    document = """
methods:
  - {name: ping}
  - {name: ping}
"""
    with pytest.raises(SchemaError, match="Duplicate method name: ping"):
        load_schema_document(document)

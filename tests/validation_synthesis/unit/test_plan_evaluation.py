"""Validation plan evaluation tests."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest
from rpc_stubgen.schema_management import Field, Schema, TypeDefinition, TypeDescriptor, TypeKind
from rpc_stubgen.validation_synthesis import (
    PlanEvaluationError,
    first_validation_failure,
    synthesize_type_plans,
)


def _field(name: str, kind: TypeKind, **attributes: Any) -> Field:
    return Field(name=name, type=TypeDescriptor.of(kind), **attributes)


_ITEM = TypeDefinition(
    name="Item",
    properties=(
        _field("id", TypeKind.INT, required=True),
        _field("name", TypeKind.STRING, required=True, enum=("a", "b")),
    ),
)
_ORDER = TypeDefinition(
    name="Order",
    properties=(
        _field("placed_at", TypeKind.TIMESTAMP, required=True),
        _field("status", TypeKind.STRING, default="open"),
        _field("priority", TypeKind.INT, default=3),
        Field(name="items", type=TypeDescriptor.array(TypeDescriptor.ref("Item"))),
    ),
)
_PLANS = synthesize_type_plans(Schema(name="shop", types=(_ITEM, _ORDER)))


def _validate(type_name: str, payload: dict[str, Any]) -> str | None:
    return first_validation_failure(_PLANS[type_name], payload, _PLANS)


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"id": 1, "name": "a"}, None),
        ({"id": 0, "name": "a"}, "Field: id, Message: is required"),
        ({"id": 1, "name": "c"}, 'Field: name, Message: must be one of: "a", "b"'),
    ],
)
def test_round_trip(payload: dict[str, Any], expected: str | None) -> None:
    assert _validate("Item", payload) == expected


def test_fail_fast_reports_only_first_offending_field() -> None:
    error = _validate("Item", {"id": 0, "name": ""})

    assert error == "Field: id, Message: is required"


def test_defaults_are_substituted_in_place() -> None:
    payload: dict[str, Any] = {"placed_at": "2024-01-01T00:00:00Z", "priority": 0}

    assert _validate("Order", payload) is None
    assert payload["status"] == "open"
    assert payload["priority"] == 3


def test_explicit_values_are_not_replaced_by_defaults() -> None:
    payload: dict[str, Any] = {"placed_at": "2024-01-01T00:00:00Z", "status": "closed"}

    assert _validate("Order", payload) is None
    assert payload["status"] == "closed"


@pytest.mark.parametrize(
    "placed_at",
    [None, "", "0001-01-01T00:00:00Z", datetime(1, 1, 1, tzinfo=UTC)],
)
def test_zero_instant_fails_required_timestamp(placed_at: object) -> None:
    assert _validate("Order", {"placed_at": placed_at}) == "Field: placed_at, Message: is required"


def test_nested_element_error_carries_index() -> None:
    payload = {
        "placed_at": datetime(2024, 5, 1, tzinfo=UTC),
        "items": [{"id": 1, "name": "a"}, {"id": 2, "name": "z"}],
    }

    error = _validate("Order", payload)

    assert error == 'element 1: Field: name, Message: must be one of: "a", "b"'


def test_nested_elements_must_be_mappings() -> None:
    payload = {"placed_at": "2024-01-01T00:00:00Z", "items": ["not-an-item"]}

    with pytest.raises(PlanEvaluationError, match="items\\[0\\] must be a mapping"):
        _validate("Order", payload)


def test_missing_child_plan_raises() -> None:
    with pytest.raises(PlanEvaluationError, match="No validation plan for type 'Item'"):
        first_validation_failure(
            _PLANS["Order"],
            {"placed_at": "2024-01-01T00:00:00Z", "items": [{"id": 1}]},
            {"Order": _PLANS["Order"]},
        )

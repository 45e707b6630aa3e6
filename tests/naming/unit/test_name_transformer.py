"""Name transformation tests."""

from __future__ import annotations

import pytest
from rpc_stubgen.generation_errors import GenerationError, NamingConflict
from rpc_stubgen.naming import (
    GO_NAMING,
    RUBY_NAMING,
    RUST_NAMING,
    TYPESCRIPT_NAMING,
    IdentifierScope,
    NameConvention,
    camel_case,
    go_case,
    identifier,
    pascal_case,
    snake_case,
    split_words,
)


@pytest.mark.parametrize(
    ("raw_name", "words"),
    [
        ("get_user", ["get", "user"]),
        ("get-user", ["get", "user"]),
        ("getUser", ["get", "User"]),
        ("HTTPServer", ["HTTP", "Server"]),
        ("user id2", ["user", "id2"]),
    ],
)
def test_split_words(raw_name: str, words: list[str]) -> None:
    assert split_words(raw_name) == words


def test_casing_functions() -> None:
    assert pascal_case("get_user_input") == "GetUserInput"
    assert camel_case("get_user") == "getUser"
    assert snake_case("GetUser") == "get_user"
    assert go_case("user_id") == "UserID"
    assert go_case("api_url") == "APIURL"
    assert go_case("get_user") == "GetUser"


def test_target_conventions() -> None:
    assert identifier("get_user", NameConvention.TYPE_CASE, GO_NAMING) == "GetUser"
    assert identifier("get_user", NameConvention.MEMBER_CASE, RUST_NAMING) == "get_user"
    assert identifier("type", NameConvention.FIELD_CASE, RUST_NAMING) == "r#type"
    assert identifier("get_user", NameConvention.MEMBER_CASE, TYPESCRIPT_NAMING) == "getUser"
    assert identifier("created_at", NameConvention.FIELD_CASE, TYPESCRIPT_NAMING) == "created_at"
    assert identifier("GetUser", NameConvention.MEMBER_CASE, RUBY_NAMING) == "get_user"


def test_identifier_is_deterministic() -> None:
    first = identifier("list_pets", NameConvention.TYPE_CASE, RUST_NAMING)
    second = identifier("list_pets", NameConvention.TYPE_CASE, RUST_NAMING)

    assert first == second == "ListPets"


def test_empty_identifier_is_a_generation_error() -> None:
    with pytest.raises(GenerationError, match="empty Go identifier"):
        identifier("__", NameConvention.TYPE_CASE, GO_NAMING)


def test_scope_returns_same_identifier_for_repeated_claims() -> None:
    scope = IdentifierScope("methods", GO_NAMING, NameConvention.MEMBER_CASE)

    assert scope.claim("get_user") == "GetUser"
    assert scope.claim("get_user") == "GetUser"


def test_scope_rejects_distinct_names_with_same_identifier() -> None:
    scope = IdentifierScope("fields of User", GO_NAMING, NameConvention.FIELD_CASE)
    scope.claim("user_id")

    with pytest.raises(NamingConflict) as excinfo:
        scope.claim("userId")

    assert excinfo.value.first == "user_id"
    assert excinfo.value.second == "userId"
    assert excinfo.value.identifier == "UserID"
    assert "fields of User" in str(excinfo.value)


def test_scopes_are_independent() -> None:
    first = IdentifierScope("fields of A", RUBY_NAMING, NameConvention.FIELD_CASE)
    second = IdentifierScope("fields of B", RUBY_NAMING, NameConvention.FIELD_CASE)

    assert first.claim("user-name") == "user_name"
    assert second.claim("user_name") == "user_name"


@pytest.mark.parametrize(
    ("raw_name", "member"),
    [
        ("try", "r#try"),
        ("yield", "r#yield"),
        ("box", "r#box"),
        ("self", "self_"),
        ("Self", "self_"),
        ("super", "super_"),
        ("crate", "crate_"),
    ],
)
def test_rust_members_escape_reserved_words(raw_name: str, member: str) -> None:
    assert identifier(raw_name, NameConvention.FIELD_CASE, RUST_NAMING) == member


def test_reserved_identifiers_conflict_with_schema_names() -> None:
    scope = IdentifierScope("type declarations", GO_NAMING, NameConvention.TYPE_CASE)
    scope.reserve("ValidationError")

    with pytest.raises(NamingConflict) as excinfo:
        scope.claim("validation_error")

    assert excinfo.value.first == "ValidationError (generated)"
    assert excinfo.value.identifier == "ValidationError"
    assert scope.claim("user") == "User"

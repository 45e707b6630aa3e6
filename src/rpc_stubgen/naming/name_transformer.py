"""Schema identifier to target identifier transformation."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from rpc_stubgen.generation_errors import GenerationError, NamingConflict

_WORD_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

GO_INITIALISMS = frozenset(
    {
        "ACL",
        "API",
        "ASCII",
        "CPU",
        "CSS",
        "DNS",
        "EOF",
        "GUID",
        "HTML",
        "HTTP",
        "HTTPS",
        "ID",
        "IP",
        "JSON",
        "LHS",
        "QPS",
        "RAM",
        "RHS",
        "RPC",
        "SLA",
        "SMTP",
        "SQL",
        "SSH",
        "TCP",
        "TLS",
        "TTL",
        "UDP",
        "UI",
        "UID",
        "URI",
        "URL",
        "UTF8",
        "UUID",
        "VM",
        "XML",
        "XSRF",
        "XSS",
    }
)

RUST_KEYWORDS = frozenset(
    {
        "as",
        "async",
        "await",
        "break",
        "const",
        "continue",
        "dyn",
        "else",
        "enum",
        "extern",
        "false",
        "fn",
        "for",
        "if",
        "impl",
        "in",
        "let",
        "loop",
        "match",
        "mod",
        "move",
        "mut",
        "pub",
        "ref",
        "return",
        "static",
        "struct",
        "trait",
        "true",
        "type",
        "unsafe",
        "use",
        "where",
        "while",
        # Reserved for future use.
        "abstract",
        "become",
        "box",
        "do",
        "final",
        "macro",
        "override",
        "priv",
        "try",
        "typeof",
        "unsized",
        "virtual",
        "yield",
        "gen",
    }
)

# Path keywords cannot be written as raw identifiers.
RUST_PATH_KEYWORDS = frozenset({"self", "super", "crate"})


class NameConvention(str, Enum):
    """Identifier position a name is transformed for."""

    TYPE_CASE = "type_case"
    MEMBER_CASE = "member_case"
    FIELD_CASE = "field_case"


def split_words(raw_name: str) -> list[str]:
    """Split snake, kebab, space and camel case names into words."""
    words: list[str] = []
    for chunk in _WORD_SEPARATORS.split(raw_name):
        if chunk:
            words.extend(part for part in _CAMEL_BOUNDARY.split(chunk) if part)
    return words


def pascal_case(raw_name: str) -> str:
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(raw_name))


def camel_case(raw_name: str) -> str:
    pascal = pascal_case(raw_name)
    return pascal[:1].lower() + pascal[1:]


def snake_case(raw_name: str) -> str:
    return "_".join(word.lower() for word in split_words(raw_name))


def go_case(raw_name: str) -> str:
    """Exported Go identifier with common initialisms upper-cased."""
    parts = []
    for word in split_words(raw_name):
        upper = word.upper()
        parts.append(upper if upper in GO_INITIALISMS else word[:1].upper() + word[1:].lower())
    return "".join(parts)


def rust_member_case(raw_name: str) -> str:
    name = snake_case(raw_name)
    if name in RUST_PATH_KEYWORDS:
        return f"{name}_"
    return f"r#{name}" if name in RUST_KEYWORDS else name


def wire_name(raw_name: str) -> str:
    return raw_name


@dataclass(frozen=True)
class NamingStyle:
    """Casing functions one target language applies per convention."""

    language: str
    type_case: Callable[[str], str]
    member_case: Callable[[str], str]
    field_case: Callable[[str], str]

    def identifier(self, raw_name: str, convention: NameConvention) -> str:
        if convention == NameConvention.TYPE_CASE:
            transformed = self.type_case(raw_name)
        elif convention == NameConvention.MEMBER_CASE:
            transformed = self.member_case(raw_name)
        else:
            transformed = self.field_case(raw_name)
        if not transformed:
            raise GenerationError(
                f"Name '{raw_name}' produces an empty {self.language} identifier."
            )
        return transformed


GO_NAMING = NamingStyle("Go", type_case=go_case, member_case=go_case, field_case=go_case)
RUST_NAMING = NamingStyle(
    "Rust", type_case=pascal_case, member_case=rust_member_case, field_case=rust_member_case
)
TYPESCRIPT_NAMING = NamingStyle(
    "TypeScript", type_case=pascal_case, member_case=camel_case, field_case=wire_name
)
RUBY_NAMING = NamingStyle(
    "Ruby", type_case=pascal_case, member_case=snake_case, field_case=snake_case
)


def identifier(raw_name: str, convention: NameConvention, style: NamingStyle) -> str:
    """Transform a schema name into a target identifier."""
    return style.identifier(raw_name, convention)


@dataclass
class IdentifierScope:
    """Sibling identifiers that must stay distinct after transformation."""

    label: str
    style: NamingStyle
    convention: NameConvention
    _claimed: dict[str, str] = field(default_factory=dict)

    def claim(self, raw_name: str) -> str:
        """Return the identifier for raw_name, failing if another name already maps to it.

        Raises:
          NamingConflict: If a different raw name produced the same identifier.
        """
        transformed = self.style.identifier(raw_name, self.convention)
        owner = self._claimed.setdefault(transformed, raw_name)
        if owner != raw_name:
            raise NamingConflict(self.label, owner, raw_name, transformed)
        return transformed

    def reserve(self, *identifiers: str) -> None:
        """Mark target identifiers declared by generated boilerplate as taken."""
        for reserved in identifiers:
            self._claimed.setdefault(reserved, f"{reserved} (generated)")

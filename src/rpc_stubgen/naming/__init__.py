"""Name transformation exports."""

from .name_transformer import (
    GO_NAMING,
    RUBY_NAMING,
    RUST_NAMING,
    TYPESCRIPT_NAMING,
    IdentifierScope,
    NameConvention,
    NamingStyle,
    camel_case,
    go_case,
    identifier,
    pascal_case,
    snake_case,
    split_words,
)

__all__ = [
    "GO_NAMING",
    "RUBY_NAMING",
    "RUST_NAMING",
    "TYPESCRIPT_NAMING",
    "IdentifierScope",
    "NameConvention",
    "NamingStyle",
    "camel_case",
    "go_case",
    "identifier",
    "pascal_case",
    "snake_case",
    "split_words",
]

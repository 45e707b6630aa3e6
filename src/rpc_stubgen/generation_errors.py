"""Generation-time error taxonomy."""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for errors that abort a generation run."""


class UnresolvedReference(GenerationError):
    """Raised when a type reference names a type absent from the schema."""

    def __init__(self, owner: str | None, target: str) -> None:
        self.owner = owner
        self.target = target
        if owner:
            message = f"{owner}: unresolved reference to type '{target}'"
        else:
            message = f"Unresolved reference to type '{target}'"
        super().__init__(message)


class UnhandledType(GenerationError):
    """Raised when a type descriptor has no mapping in a target type system."""

    def __init__(self, descriptor: object, target_language: str, owner: str | None = None) -> None:
        self.descriptor = descriptor
        self.target_language = target_language
        self.owner = owner
        location = f"{owner}: " if owner else ""
        super().__init__(f"{location}unhandled type {descriptor!r} for {target_language}")


class NamingConflict(GenerationError):
    """Raised when two distinct schema names collide after name transformation."""

    def __init__(self, scope: str, first: str, second: str, identifier: str) -> None:
        self.scope = scope
        self.first = first
        self.second = second
        self.identifier = identifier
        super().__init__(
            f"Naming conflict in {scope}: '{first}' and '{second}' both map to '{identifier}'"
        )

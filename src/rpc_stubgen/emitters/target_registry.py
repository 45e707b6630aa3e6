"""Registry of generation targets."""

from __future__ import annotations

from dataclasses import dataclass

from .emitter_contract import SourceEmitter
from .go_emitter import GoEmitter
from .ruby_emitter import RubyEmitter
from .rust_emitter import RustEmitter
from .typescript_emitter import TypeScriptEmitter


@dataclass(frozen=True)
class TargetDefinition:
    """Emitter selection and section defaults of one target."""

    name: str
    emitter: type[SourceEmitter]
    include_types: bool
    include_client: bool
    validate_by_default: bool
    description: str


TARGETS: dict[str, TargetDefinition] = {
    target.name: target
    for target in (
        TargetDefinition(
            name="go-types",
            emitter=GoEmitter,
            include_types=True,
            include_client=False,
            validate_by_default=True,
            description="Go structs with Validate methods",
        ),
        TargetDefinition(
            name="rust-types",
            emitter=RustEmitter,
            include_types=True,
            include_client=False,
            validate_by_default=True,
            description="Rust serde structs with validate impls",
        ),
        TargetDefinition(
            name="rust-client",
            emitter=RustEmitter,
            include_types=True,
            include_client=True,
            validate_by_default=False,
            description="Rust serde structs and async reqwest client",
        ),
        TargetDefinition(
            name="ts-types",
            emitter=TypeScriptEmitter,
            include_types=True,
            include_client=False,
            validate_by_default=True,
            description="TypeScript interfaces with validate functions",
        ),
        TargetDefinition(
            name="ts-client",
            emitter=TypeScriptEmitter,
            include_types=True,
            include_client=True,
            validate_by_default=False,
            description="TypeScript interfaces and fetch client",
        ),
        TargetDefinition(
            name="ruby-client",
            emitter=RubyEmitter,
            include_types=False,
            include_client=True,
            validate_by_default=False,
            description="Ruby net/http client",
        ),
    )
}

"""Emitter exports."""

from .emitter_contract import (
    GENERATED_NOTICE,
    EmitterOptions,
    MemberField,
    SourceEmitter,
    SourceWriter,
)
from .go_emitter import GoEmitter
from .ruby_emitter import RubyEmitter
from .rust_emitter import RustEmitter
from .target_registry import TARGETS, TargetDefinition
from .typescript_emitter import TypeScriptEmitter

__all__ = [
    "GENERATED_NOTICE",
    "TARGETS",
    "EmitterOptions",
    "GoEmitter",
    "MemberField",
    "RubyEmitter",
    "RustEmitter",
    "SourceEmitter",
    "SourceWriter",
    "TargetDefinition",
    "TypeScriptEmitter",
]

"""Type mapping exports."""

from .target_type_systems import GO_TYPES, RUBY_TYPES, RUST_TYPES, TYPESCRIPT_TYPES
from .type_mapper import TargetTypeSystem, map_descriptor, map_type

__all__ = [
    "GO_TYPES",
    "RUBY_TYPES",
    "RUST_TYPES",
    "TYPESCRIPT_TYPES",
    "TargetTypeSystem",
    "map_descriptor",
    "map_type",
]

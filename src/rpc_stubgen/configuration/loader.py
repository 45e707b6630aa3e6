"""Configuration loader service."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from rpc_stubgen.emitters import TARGETS

from .runtime_settings import Configuration, GeneratorSettings

_GO_PACKAGE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_RUBY_CONSTANT = re.compile(r"^[A-Z][A-Za-z0-9_]*(::[A-Z][A-Za-z0-9_]*)*$")

_KNOWN_KEYS = frozenset(
    {"schema", "target", "output", "package", "fetch_library", "tags", "validate", "ruby"}
)


class ConfigurationError(Exception):
    """Raised when the configuration file or option values are invalid."""


def load_configuration(
    config_path: Path | str, overrides: Mapping[str, Any] | None = None
) -> Configuration:
    """Load and validate the configuration file, applying option overrides."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return build_configuration(parsed, base_path=path.parent, path=path, overrides=overrides)


def build_configuration(
    values: Mapping[str, Any],
    *,
    base_path: Path,
    path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Configuration:
    """Validate raw configuration values; non-None overrides win over file values."""
    unknown = sorted(set(values) - _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    merged = dict(values)
    ruby_section = dict(_optional_mapping(values.get("ruby"), "ruby"))
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if key in ("ruby_module", "ruby_class"):
            ruby_section[key.removeprefix("ruby_")] = value
        else:
            merged[key] = value

    schema_value = _require_non_empty_string(merged.get("schema"), "schema")
    output_value = _optional_string(merged.get("output"), "output")
    generator = GeneratorSettings(
        target=_parse_target(merged.get("target")),
        package=_parse_package(merged.get("package", "api")),
        fetch_library=_require_non_empty_string(
            merged.get("fetch_library", "node-fetch"), "fetch_library"
        ),
        tags=_parse_tags(merged.get("tags")),
        validate=_optional_bool(merged.get("validate"), "validate"),
        ruby_module=_parse_ruby_constant(ruby_section.get("module", "Api"), "ruby.module"),
        ruby_class=_parse_ruby_constant(ruby_section.get("class", "Client"), "ruby.class"),
    )
    return Configuration(
        path=path,
        schema_path=_resolve_path(base_path, schema_value),
        output_path=_resolve_path(base_path, output_value) if output_value else None,
        generator=generator,
    )


def _parse_target(value: Any) -> str:
    target = _require_non_empty_string(value, "target")
    if target not in TARGETS:
        raise ConfigurationError(
            f"Unknown target '{target}'. Expected one of: {', '.join(TARGETS)}"
        )
    return target


def _parse_package(value: Any) -> str:
    package = _require_non_empty_string(value, "package")
    if not _GO_PACKAGE.match(package):
        raise ConfigurationError(f"package '{package}' is not a valid identifier.")
    return package


def _parse_ruby_constant(value: Any, field_name: str) -> str:
    constant = _require_non_empty_string(value, field_name)
    if not _RUBY_CONSTANT.match(constant):
        raise ConfigurationError(f"{field_name} '{constant}' is not a valid Ruby constant name.")
    return constant


def _parse_tags(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        tags = [item.strip() for item in value.split(",") if item.strip()]
    elif isinstance(value, Sequence):
        tags = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError("tags entries must be strings.")
            stripped = item.strip()
            if stripped:
                tags.append(stripped)
    else:
        raise ConfigurationError("tags must be a string or list of strings.")
    if not tags:
        raise ConfigurationError("tags must contain at least one tag.")
    return tuple(tags)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_bool(value: Any, field_name: str) -> bool | None:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value

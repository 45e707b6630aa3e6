"""Generation run entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class GenerationRequest:  # pylint: disable=too-many-instance-attributes
    """Input contract for one generation run; None means not given."""

    config_path: str | None = None
    schema_path: str | None = None
    target: str | None = None
    output_path: str | None = None
    package: str | None = None
    fetch_library: str | None = None
    tags: tuple[str, ...] | None = None
    validate: bool | None = None
    ruby_module: str | None = None
    ruby_class: str | None = None


@dataclass(frozen=True)
class GenerationOutcome:
    """Output contract for one completed generation run."""

    target: str
    document: str
    output_path: Path | None

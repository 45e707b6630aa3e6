"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class GeneratorSettings:
    """Target selection and per-target emitter options."""

    target: str
    package: str = "api"
    fetch_library: str = "node-fetch"
    tags: tuple[str, ...] | None = None
    validate: bool | None = None
    ruby_module: str = "Api"
    ruby_class: str = "Client"


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    schema_path: Path
    output_path: Path | None
    generator: GeneratorSettings

"""Generation use-case service."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from rpc_stubgen.configuration import (
    Configuration,
    ConfigurationError,
    GeneratorSettings,
    build_configuration,
    load_configuration,
)
from rpc_stubgen.emitters import TARGETS, EmitterOptions
from rpc_stubgen.generation_errors import GenerationError
from rpc_stubgen.schema_management import (
    Schema,
    SchemaError,
    check_references,
    load_schema_file,
)

from .generation_contracts import GenerationOutcome, GenerationRequest

_LOGGER = logging.getLogger(__name__)


class GenerationRunError(Exception):
    """Raised when a generation run cannot be completed."""


def generate_document(schema: Schema, settings: GeneratorSettings) -> str:
    """Render the complete document for one target.

    Raises:
      GenerationError: On unresolved references, unhandled types or naming
        conflicts; no partial document is returned.
    """
    target = TARGETS.get(settings.target)
    if target is None:
        raise ValueError(f"Unknown target: {settings.target}")

    check_references(schema)
    options = EmitterOptions(
        package=settings.package,
        tags=settings.tags if settings.tags is not None else schema.go_tags,
        validate=target.validate_by_default if settings.validate is None else settings.validate,
        include_types=target.include_types,
        include_client=target.include_client,
        fetch_library=settings.fetch_library,
        ruby_module=settings.ruby_module,
        ruby_class=settings.ruby_class,
    )
    _LOGGER.debug("generating %s with %s", target.name, options)
    document = target.emitter(schema, options).emit_document()
    _LOGGER.debug("generated %d characters for %s", len(document), target.name)
    return document


def execute_generation(request: GenerationRequest) -> GenerationOutcome:
    """Load configuration and schema, generate and write one document."""
    configuration = _load_run_configuration(request)
    try:
        schema = load_schema_file(configuration.schema_path)
        document = generate_document(schema, configuration.generator)
    except (SchemaError, GenerationError) as exc:
        raise GenerationRunError(str(exc)) from exc

    if configuration.output_path is not None:
        try:
            write_document(configuration.output_path, document)
        except OSError as exc:
            raise GenerationRunError(
                f"Failed to write {configuration.output_path}: {exc}"
            ) from exc

    return GenerationOutcome(
        target=configuration.generator.target,
        document=document,
        output_path=configuration.output_path,
    )


def write_document(destination: Path, document: str) -> None:
    """Replace destination with the complete document in one step."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    descriptor, temporary = tempfile.mkstemp(
        prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
    )
    try:
        with os.fdopen(descriptor, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(document)
        os.replace(temporary, destination)
    except OSError:
        Path(temporary).unlink(missing_ok=True)
        raise
    _LOGGER.debug("wrote %s", destination)


def _load_run_configuration(request: GenerationRequest) -> Configuration:
    # command line paths are relative to the working directory, not the config file
    overrides = {
        "schema": _absolute(request.schema_path),
        "target": request.target,
        "output": _absolute(request.output_path),
        "package": request.package,
        "fetch_library": request.fetch_library,
        "tags": request.tags,
        "validate": request.validate,
        "ruby_module": request.ruby_module,
        "ruby_class": request.ruby_class,
    }
    try:
        if request.config_path is not None:
            return load_configuration(request.config_path, overrides=overrides)
        return build_configuration({}, base_path=Path.cwd(), overrides=overrides)
    except ConfigurationError as exc:
        raise GenerationRunError(str(exc)) from exc


def _absolute(raw_path: str | None) -> str | None:
    if raw_path is None or not raw_path.strip():
        return raw_path
    return str(Path(raw_path).resolve())

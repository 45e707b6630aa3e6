"""Generation domain exports."""

from .generation_contracts import GenerationOutcome, GenerationRequest
from .generation_use_case import (
    GenerationRunError,
    execute_generation,
    generate_document,
    write_document,
)

__all__ = [
    "GenerationOutcome",
    "GenerationRequest",
    "GenerationRunError",
    "execute_generation",
    "generate_document",
    "write_document",
]

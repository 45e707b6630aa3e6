"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "rpc-stubgen.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Generator configuration for rpc-stubgen.
# Replace every <REQUIRED> placeholder before running generate.
# Command line options override the values below.

# Path to the JSON or YAML schema, relative to this file.
schema: "<REQUIRED>"

# One of: go-types, rust-types, rust-client, ts-types, ts-client, ruby-client.
target: "<REQUIRED>"

# Destination of the generated document; omit to print to stdout.
# output: "<OPTIONAL>"

# Go package name (go-types).
package: "api"

# Module import used for fetch (ts-client).
fetch_library: "node-fetch"

# Struct tags written for each Go field; defaults to the schema's go.tags.
# tags:
#   - "json"

# Emit validation operations; defaults depend on the target.
# validate: true

# Ruby module and class names (ruby-client).
ruby:
  module: "Api"
  class: "Client"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML generator configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()

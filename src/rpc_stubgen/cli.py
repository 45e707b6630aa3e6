"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from rpc_stubgen.configuration import DEFAULT_CONFIG_FILENAME, write_placeholder_configuration
from rpc_stubgen.emitters import TARGETS
from rpc_stubgen.generation import GenerationRequest, GenerationRunError, execute_generation


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="rpc-stubgen")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug details to stderr.")
def cli(verbose: bool) -> None:
    """Schema-driven type and client stub generator."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command(name="generate")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a YAML/JSON generator configuration file",
)
@click.option(
    "--schema",
    "schema_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the JSON/YAML schema (overrides configuration)",
)
@click.option(
    "--target",
    required=False,
    type=click.Choice(list(TARGETS)),
    help="Target to generate (overrides configuration)",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="File to write; the document is printed to stdout when omitted",
)
@click.option("--package", required=False, help="Go package name")
@click.option("--fetch-library", required=False, help="Module import for the fetch library")
@click.option(
    "--tag",
    "tags",
    multiple=True,
    help="Serialization tag written for each Go field (repeatable)",
)
@click.option(
    "--validate/--no-validate",
    default=None,
    help="Emit validation operations (target default when omitted)",
)
@click.option("--ruby-module", required=False, help="Ruby module name")
@click.option("--ruby-class", required=False, help="Ruby client class name")
def generate(  # pylint: disable=too-many-arguments
    config_path: str | None,
    schema_path: str | None,
    target: str | None,
    output_path: str | None,
    package: str | None,
    fetch_library: str | None,
    tags: tuple[str, ...],
    validate: bool | None,
    ruby_module: str | None,
    ruby_class: str | None,
) -> None:
    """Generate declarations and client stubs for one target."""
    try:
        outcome = execute_generation(
            GenerationRequest(
                config_path=config_path,
                schema_path=schema_path,
                target=target,
                output_path=output_path,
                package=package,
                fetch_library=fetch_library,
                tags=tags or None,
                validate=validate,
                ruby_module=ruby_module,
                ruby_class=ruby_class,
            )
        )
    except GenerationRunError as exc:
        raise CliError(str(exc)) from exc
    if outcome.output_path is None:
        click.echo(outcome.document, nl=False)
    else:
        click.echo(str(outcome.output_path))


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generator configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML generator configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="targets")
def list_targets() -> None:
    """List the available generation targets."""
    for target in TARGETS.values():
        click.echo(f"{target.name}\t{target.description}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

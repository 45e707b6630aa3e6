"""CLI smoke tests."""

from click.testing import CliRunner
from rpc_stubgen.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate" in result.output
    assert "generate-config" in result.output
    assert "targets" in result.output


def test_generate_help_lists_overrides() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["generate", "-h"])

    assert result.exit_code == 0
    for option in ("--config", "--schema", "--target", "--tag", "--validate / --no-validate"):
        assert option in result.output


def test_targets_command_lists_every_target() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["targets"])

    assert result.exit_code == 0
    names = [line.split("\t")[0] for line in result.output.splitlines()]
    assert names == [
        "go-types",
        "rust-types",
        "rust-client",
        "ts-types",
        "ts-client",
        "ruby-client",
    ]

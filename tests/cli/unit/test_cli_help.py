"""CLI smoke tests."""

from click.testing import CliRunner
from field_group_schema.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "print-schema" in result.output
    assert "list-groups" in result.output
    assert "query" in result.output

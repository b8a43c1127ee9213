"""CLI smoke tests."""

from click.testing import CliRunner
from goodwill_access.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("inspect", "fetch", "list", "publish", "export-workbook", "import-workbook"):
        assert command in result.output

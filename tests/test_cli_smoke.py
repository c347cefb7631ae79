"""Smoke test for the litweave console entry point"""

from typer.testing import CliRunner

from litweave.cli.cli import app


def test_cli_smoke():
    """--help lists both commands and exits cleanly."""
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "weave" in result.output
    assert "macros" in result.output

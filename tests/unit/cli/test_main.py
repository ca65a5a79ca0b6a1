"""Unit tests for the main CLI application."""

import logging

from marklink import __version__
from marklink.cli.main import app, configure_logging
from rich.logging import RichHandler
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"marklink version {__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("scan", "link", "unlink", "links", "config"):
            assert command in result.output

    def test_no_args_shows_help(self) -> None:
        result = runner.invoke(app, [])

        assert "Usage" in result.output


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_verbose_sets_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("marklink").level == logging.DEBUG

        configure_logging(verbose=False)
        assert logging.getLogger("marklink").level == logging.WARNING

    def test_single_handler(self) -> None:
        configure_logging(verbose=False)
        configure_logging(verbose=False)

        handlers = [
            h for h in logging.getLogger("marklink").handlers if isinstance(h, RichHandler)
        ]
        assert len(handlers) == 1

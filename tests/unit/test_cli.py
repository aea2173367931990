"""Unit tests for the masikip CLI."""

from unittest.mock import AsyncMock, patch

import pytest
import structlog
from click.testing import CliRunner

from masikip import __version__
from masikip.cli import main
from masikip.core.config import get_api_endpoint
from masikip.services.note import NoteService

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_setup():
    """Keep the CLI from replacing the test run's log handlers."""
    with patch("masikip.cli.setup_logging") as setup:
        yield setup
    structlog.contextvars.clear_contextvars()


class TestOptions:
    """Tests for option parsing."""

    def test_help(self) -> None:
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "--service" in result.output

    def test_rejects_unknown_service(self) -> None:
        result = runner.invoke(main, ["--service", "web"])
        assert result.exit_code != 0

    @pytest.mark.parametrize(
        "flags,level",
        [([], "WARNING"), (["--verbose"], "INFO"), (["--debug"], "DEBUG")],
    )
    def test_log_level_flags(self, _no_logging_setup, flags, level) -> None:
        runner.invoke(main, ["--service", "info", *flags])
        _no_logging_setup.assert_called_once_with(level=level, format_type="console", enable_console=True)


class TestServices:
    """Tests for each --service."""

    def test_info(self) -> None:
        result = runner.invoke(main, ["--service", "info"])
        assert result.exit_code == 0
        assert f"Masikip Notes {__version__}" in result.output

    def test_config(self) -> None:
        result = runner.invoke(main, ["--service", "config"])
        assert result.exit_code == 0
        assert "api.base_url" in result.output
        assert "localhost:8080" in result.output

    def test_list_prints_groups(self, backend_note) -> None:
        service = AsyncMock(spec=NoteService)
        service.list_notes.return_value = [
            backend_note(noteId=1, content="Groceries\nEggs"),
            backend_note(noteId=2, title="Old", content="Old\nGone", isActive=False),
        ]

        with patch("masikip.cli.NoteService", return_value=service):
            result = runner.invoke(main, ["--service", "list"])

        assert result.exit_code == 0
        assert "GROCERIES" in result.output
        assert "No pinned notes" in result.output
        service.close.assert_awaited_once()

    def test_list_with_search(self, backend_note) -> None:
        service = AsyncMock(spec=NoteService)
        service.list_notes.return_value = [
            backend_note(noteId=1, content="Groceries\nEggs"),
            backend_note(noteId=2, title="Roadmap", content="Roadmap\nShip"),
        ]

        with patch("masikip.cli.NoteService", return_value=service):
            result = runner.invoke(main, ["--service", "list", "--search", "road"])

        assert "ROADMAP" in result.output
        assert "GROCERIES" not in result.output

    def test_tui_keeps_console_logging_off(self, _no_logging_setup) -> None:
        with patch("masikip.tui.app.NotesApp") as app_cls, \
             patch("masikip.cli.NoteService"):
            result = runner.invoke(main, [])

        assert result.exit_code == 0
        app_cls.return_value.run.assert_called_once()
        assert _no_logging_setup.call_args.kwargs["enable_console"] is False

    def test_tui_app_gets_state_and_backend_only(self, _no_logging_setup) -> None:
        with patch("masikip.tui.app.NotesApp") as app_cls, \
             patch("masikip.cli.NoteService"):
            runner.invoke(main, ["--service", "tui", "--debug"])

        kwargs = app_cls.call_args.kwargs
        assert set(kwargs) == {"state", "backend"}
        assert kwargs["backend"] == get_api_endpoint().base_url

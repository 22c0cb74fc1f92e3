"""Tests for the command line entry point."""

import asyncio
import logging
import signal
import sys
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

import sitewatch
from sitewatch.api import ApiError
from sitewatch.models import ProbeResult

URL_A = "https://atlas.example.com/"
URL_B = "https://hermes.example.com/"


@pytest.fixture(autouse=True)
def restore_logger_level():
    """The check command silences the package logger; undo that."""
    logger = logging.getLogger("sitewatch")
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(f"urls:\n  - {URL_A}\n  - {URL_B}\n")
    return path


def result(url: str, is_up: bool) -> ProbeResult:
    return ProbeResult(
        url=url,
        status_code=200 if is_up else 503,
        is_up=is_up,
        response_time_ms=42,
        error_message=None if is_up else "HTTP 503: Service Unavailable",
        checked_at=datetime.now(UTC),
    )


def run_main(monkeypatch, *argv: str) -> None:
    monkeypatch.setattr(sys, "argv", ["sitewatch", *argv])
    sitewatch.main()


class TestCheckCommand:
    """Tests for the check subcommand."""

    def test_all_online_exits_zero(self, monkeypatch, capsys, config_file: Path) -> None:
        """Every URL online prints a summary and returns normally."""
        sweep = AsyncMock(return_value=[result(URL_A, True), result(URL_B, True)])
        with patch("sitewatch._run_single_sweep", sweep):
            run_main(monkeypatch, "check", "-c", str(config_file))

        sweep.assert_awaited_once_with([URL_A, URL_B])
        out = capsys.readouterr().out
        assert f"ONLINE : {URL_A} (200, 42ms)" in out
        assert "Result: 2/2 URLs online" in out

    def test_offline_url_exits_one(self, monkeypatch, capsys, config_file: Path) -> None:
        """Any offline URL makes the command fail."""
        sweep = AsyncMock(return_value=[result(URL_A, True), result(URL_B, False)])
        with patch("sitewatch._run_single_sweep", sweep):
            with pytest.raises(SystemExit) as exc_info:
                run_main(monkeypatch, "check", "-c", str(config_file))

        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert f"OFFLINE: {URL_B} (503, 42ms)" in out
        assert "Result: 1/2 URLs online" in out

    def test_missing_config_exits_one(self, monkeypatch, capsys, tmp_path: Path) -> None:
        """Configuration errors are reported."""
        with pytest.raises(SystemExit) as exc_info:
            run_main(monkeypatch, "check", "-c", str(tmp_path / "missing.yaml"))

        assert exc_info.value.code == 1
        assert "Configuration file not found" in capsys.readouterr().out


class TestRunCommand:
    """Tests for the run subcommand."""

    def test_bind_failure_exits_one(self, monkeypatch, config_file: Path) -> None:
        """A port that cannot be bound is fatal."""
        with patch("sitewatch.signal.signal"), patch(
            "sitewatch.api.serve", AsyncMock(side_effect=ApiError("Port 10000 is already in use."))
        ):
            with pytest.raises(SystemExit) as exc_info:
                run_main(monkeypatch, "run", "-c", str(config_file))

        assert exc_info.value.code == 1

    def test_config_error_exits_one(self, monkeypatch, tmp_path: Path) -> None:
        """Invalid configuration is fatal."""
        path = tmp_path / "config.yaml"
        path.write_text("urls: []\n")

        with pytest.raises(SystemExit) as exc_info:
            run_main(monkeypatch, "run", "-c", str(path))

        assert exc_info.value.code == 1

    def test_graceful_shutdown_returns_normally(self, monkeypatch, config_file: Path) -> None:
        """A normal end of serving exits with status 0."""
        serve = AsyncMock(return_value=None)
        with patch("sitewatch.signal.signal") as mock_signal, patch("sitewatch.api.serve", serve):
            run_main(monkeypatch, "run", "-c", str(config_file))

        serve.assert_awaited_once()
        mock_signal.assert_any_call(signal.SIGTERM, sitewatch._handle_shutdown)
        mock_signal.assert_any_call(signal.SIGINT, sitewatch._handle_shutdown)

    def test_serve_receives_shutdown_event(self, monkeypatch, config_file: Path) -> None:
        """serve() is given the event the signal handler sets."""
        serve = AsyncMock(return_value=None)
        with patch("sitewatch.signal.signal"), patch("sitewatch.api.serve", serve):
            run_main(monkeypatch, "run", "-c", str(config_file))

        shutdown = serve.await_args.kwargs["shutdown"]
        assert isinstance(shutdown, asyncio.Event)
        assert sitewatch._shutdown_event is None


class TestShutdownHandler:
    """Tests for the signal handler."""

    @pytest.mark.asyncio
    async def test_signal_sets_shutdown_event(self, monkeypatch) -> None:
        """A signal outside the server's own handling requests shutdown."""
        event = asyncio.Event()
        monkeypatch.setattr(sitewatch, "_shutdown_event", event)
        monkeypatch.setattr(sitewatch, "_shutdown_loop", asyncio.get_running_loop())

        sitewatch._handle_shutdown(signal.SIGTERM, None)
        await asyncio.wait_for(event.wait(), timeout=1)

        assert event.is_set()

    def test_signal_without_server_only_logs(self, caplog) -> None:
        """No serving run means nothing to stop."""
        caplog.set_level(logging.INFO, logger="sitewatch")
        sitewatch._handle_shutdown(signal.SIGINT, None)
        assert "Received SIGINT, shutting down" in caplog.text


class TestVersion:
    """Tests for --version."""

    def test_prints_version(self, monkeypatch, capsys) -> None:
        """--version prints the package version."""
        with pytest.raises(SystemExit) as exc_info:
            run_main(monkeypatch, "--version")

        assert exc_info.value.code == 0
        assert sitewatch.__version__ in capsys.readouterr().out

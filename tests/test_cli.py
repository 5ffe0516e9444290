import logging
import sys

import pytest
from click.testing import CliRunner

from time_mcp import cli
from time_mcp.cli import configure_logging
from time_mcp.config import ServerSettings
from time_mcp.core import TimeMCP
from time_mcp.errors import TransportInitError
from time_mcp.types import TransportMode, UnknownToolPolicy


@pytest.fixture
def served(monkeypatch: pytest.MonkeyPatch) -> list[tuple[TimeMCP, ServerSettings]]:
    """Replace the transport loop and record what it was asked to serve."""
    calls: list[tuple[TimeMCP, ServerSettings]] = []

    async def fake_serve(mcp: TimeMCP, settings: ServerSettings) -> None:
        calls.append((mcp, settings))

    monkeypatch.setattr(cli, "serve", fake_serve)
    return calls


@pytest.fixture(autouse=True)
def log_levels(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Keep the CLI from reconfiguring the root logger during tests."""
    levels: list[str] = []
    monkeypatch.setattr(cli, "configure_logging", levels.append)
    return levels


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TRANSPORT", "HOST", "PORT", "PATH", "LOG_LEVEL", "UNKNOWN_TOOL"):
        monkeypatch.delenv(f"TIME_MCP_{name}", raising=False)


def test_version() -> None:
    result = CliRunner().invoke(cli.main, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_defaults_to_stdio(served: list[tuple[TimeMCP, ServerSettings]]) -> None:
    result = CliRunner().invoke(cli.main, [])
    assert result.exit_code == 0, result.output

    [(mcp, settings)] = served
    assert settings.transport == TransportMode.STDIO
    assert mcp.dispatcher.unknown_tool_policy == UnknownToolPolicy.RESULT


def test_options(served: list[tuple[TimeMCP, ServerSettings]], log_levels: list[str]) -> None:
    result = CliRunner().invoke(
        cli.main,
        [
            "--transport",
            "sse",
            "--host",
            "0.0.0.0",
            "--port",
            "9000",
            "--path",
            "/time",
            "--log-level",
            "debug",
            "--unknown-tool",
            "raise",
        ],
    )
    assert result.exit_code == 0, result.output

    [(mcp, settings)] = served
    assert settings.transport == TransportMode.SSE
    assert settings.host == "0.0.0.0"
    assert settings.port == 9000
    assert settings.path == "/time"
    assert settings.log_level == "DEBUG"
    assert log_levels == ["DEBUG"]
    assert mcp.dispatcher.unknown_tool_policy == UnknownToolPolicy.RAISE


def test_environment_is_used(served: list[tuple[TimeMCP, ServerSettings]]) -> None:
    result = CliRunner().invoke(cli.main, [], env={"TIME_MCP_TRANSPORT": "sse", "TIME_MCP_PORT": "9001"})
    assert result.exit_code == 0, result.output

    [(_, settings)] = served
    assert settings.transport == TransportMode.SSE
    assert settings.port == 9001


def test_invalid_configuration_exits_with_error(served: list[tuple[TimeMCP, ServerSettings]]) -> None:
    result = CliRunner().invoke(cli.main, ["--path", "no-slash"])
    assert result.exit_code == 1
    assert "Error: Invalid configuration: path" in result.output
    assert served == []


def test_invalid_choice_is_rejected_by_click(served: list[tuple[TimeMCP, ServerSettings]]) -> None:
    result = CliRunner().invoke(cli.main, ["--transport", "carrier-pigeon"])
    assert result.exit_code == 2
    assert served == []


def test_transport_failure_exits_non_zero(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    async def failing_serve(mcp: TimeMCP, settings: ServerSettings) -> None:
        raise TransportInitError("stdio", "stdin is closed")

    monkeypatch.setattr(cli, "serve", failing_serve)

    with caplog.at_level(logging.CRITICAL, logger="time_mcp.cli"), pytest.raises(SystemExit) as exc_info:
        cli.run(ServerSettings())

    assert exc_info.value.code == 1
    assert "Fatal error starting server: Failed to start stdio transport: stdin is closed" in caplog.text


def test_configure_logging_uses_stderr() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging("WARNING")
        assert root.level == logging.WARNING
        stream_handlers = [handler for handler in root.handlers if isinstance(handler, logging.StreamHandler)]
        assert stream_handlers
        assert all(handler.stream is sys.stderr for handler in stream_handlers)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

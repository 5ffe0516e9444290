import pytest

from time_mcp.config import ServerSettings, load_settings
from time_mcp.errors import ConfigError
from time_mcp.types import TransportMode, UnknownToolPolicy


def test_defaults() -> None:
    settings = load_settings(env={})
    assert settings == ServerSettings()
    assert settings.transport == TransportMode.STDIO
    assert settings.host == "127.0.0.1"
    assert settings.port == 8080
    assert settings.path == "/mcp"
    assert settings.log_level == "INFO"
    assert settings.unknown_tool == UnknownToolPolicy.RESULT


def test_environment() -> None:
    settings = load_settings(
        env={
            "TIME_MCP_TRANSPORT": "sse",
            "TIME_MCP_HOST": "0.0.0.0",
            "TIME_MCP_PORT": "9000",
            "TIME_MCP_PATH": "/time",
            "TIME_MCP_LOG_LEVEL": "debug",
            "TIME_MCP_UNKNOWN_TOOL": "raise",
        }
    )
    assert settings.transport == TransportMode.SSE
    assert settings.host == "0.0.0.0"
    assert settings.port == 9000
    assert settings.path == "/time"
    assert settings.log_level == "DEBUG"
    assert settings.unknown_tool == UnknownToolPolicy.RAISE


def test_empty_environment_values_are_ignored() -> None:
    settings = load_settings(env={"TIME_MCP_PORT": "", "TIME_MCP_TRANSPORT": ""})
    assert settings.port == 8080
    assert settings.transport == TransportMode.STDIO


def test_overrides_win_over_environment() -> None:
    settings = load_settings(env={"TIME_MCP_PORT": "9000", "TIME_MCP_HOST": "0.0.0.0"}, port=9100, host=None)
    assert settings.port == 9100
    assert settings.host == "0.0.0.0"


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIME_MCP_TRANSPORT", "sse")
    assert load_settings().transport == TransportMode.SSE


@pytest.mark.parametrize(
    ("env", "field"),
    [
        ({"TIME_MCP_PORT": "http"}, "port"),
        ({"TIME_MCP_PORT": "70000"}, "port"),
        ({"TIME_MCP_TRANSPORT": "carrier-pigeon"}, "transport"),
        ({"TIME_MCP_LOG_LEVEL": "LOUD"}, "log_level"),
        ({"TIME_MCP_PATH": "mcp"}, "path"),
        ({"TIME_MCP_UNKNOWN_TOOL": "ignore"}, "unknown_tool"),
    ],
)
def test_invalid_values(env: dict[str, str], field: str) -> None:
    with pytest.raises(ConfigError, match=f"Invalid configuration: {field}"):
        load_settings(env=env)


def test_unknown_override() -> None:
    with pytest.raises(ConfigError, match="color"):
        load_settings(env={}, color="blue")


def test_settings_are_frozen() -> None:
    settings = ServerSettings()
    with pytest.raises(ValueError):
        settings.port = 1  # type: ignore[misc]

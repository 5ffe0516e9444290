"""Exception hierarchy for the time MCP server.

    TimeMCPError
    ├── ToolExecutionError
    │   ├── UnknownToolError(name)
    │   └── InvalidTimezoneError(timezone)
    ├── TransportInitError(transport, reason)
    └── ConfigError
"""

__all__ = [
    "ConfigError",
    "InvalidTimezoneError",
    "TimeMCPError",
    "ToolExecutionError",
    "TransportInitError",
    "UnknownToolError",
]

TIMEZONE_EXAMPLES = "'America/New_York', 'Europe/London', 'UTC'"


class TimeMCPError(Exception):
    """Base exception for all time MCP server errors."""


class ToolExecutionError(TimeMCPError):
    """A tool call could not produce a result."""


class UnknownToolError(ToolExecutionError):
    """The requested tool is not in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidTimezoneError(ToolExecutionError):
    """The timezone identifier is not a recognized IANA zone."""

    def __init__(self, timezone: str) -> None:
        self.timezone = timezone
        super().__init__(
            f"Invalid timezone: {timezone}. "
            f"Please provide a valid IANA timezone identifier (e.g., {TIMEZONE_EXAMPLES})."
        )


class TransportInitError(TimeMCPError):
    """The message channel could not be established."""

    def __init__(self, transport: str, reason: str) -> None:
        self.transport = transport
        self.reason = reason
        super().__init__(f"Failed to start {transport} transport: {reason}")


class ConfigError(TimeMCPError):
    """Invalid server configuration."""

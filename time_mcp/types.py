from enum import Enum

from mcp.types import *  # noqa: F403

__all__ = ["TransportMode", "UnknownToolPolicy"]


class TransportMode(str, Enum):
    """Transports the time server can be served over."""

    STDIO = "stdio"
    SSE = "sse"

    def __str__(self) -> str:
        return self.value


class UnknownToolPolicy(str, Enum):
    """How the dispatcher answers a call to a tool that is not registered."""

    RESULT = "result"
    RAISE = "raise"

    def __str__(self) -> str:
        return self.value

import logging
from collections.abc import Mapping
from typing import Any

from mcp.types import CallToolResult, TextContent, Tool

from .errors import ToolExecutionError, UnknownToolError
from .registry import ToolRegistry
from .types import UnknownToolPolicy

__all__ = ["Dispatcher", "error_result", "text_result"]

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


def text_result(text: str) -> CallToolResult:
    """Wrap a tool's output into a successful response."""
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=False)


def error_result(message: str) -> CallToolResult:
    """Wrap a failure message into a structured error response."""
    return CallToolResult(content=[TextContent(type="text", text=f"Error: {message}")], isError=True)


class Dispatcher:
    """Routes list and call requests to the tool registry.

    Every call produces exactly one ``CallToolResult``. Failures inside a tool
    are reported as data with ``isError=True`` so the caller can inspect the
    message and retry with corrected arguments.
    """

    __slots__ = ("_registry", "_unknown_tool_policy")

    def __init__(
        self,
        registry: ToolRegistry,
        unknown_tool_policy: UnknownToolPolicy = UnknownToolPolicy.RESULT,
    ) -> None:
        self._registry = registry
        self._unknown_tool_policy = unknown_tool_policy

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def unknown_tool_policy(self) -> UnknownToolPolicy:
        return self._unknown_tool_policy

    def list_tools(self) -> list[Tool]:
        """Return all registered tool descriptors."""
        return self._registry.tools

    def call_tool(self, name: str, arguments: Mapping[str, Any] | None = None) -> CallToolResult:
        """Execute a tool and normalize the outcome into a response.

        Raises:
            UnknownToolError: Only when the policy is ``UnknownToolPolicy.RAISE``.
        """
        entry = self._registry.get(name)
        if entry is None:
            err = UnknownToolError(name)
            if self._unknown_tool_policy == UnknownToolPolicy.RAISE:
                raise err
            logger.warning("Call to unknown tool: %s", name)
            return error_result(str(err))

        logger.debug("Calling tool %s with arguments: %s", name, arguments)
        try:
            text = entry.handler(arguments or {})
        except ToolExecutionError as err:
            logger.info("Tool %s failed: %s", name, err)
            return error_result(str(err))
        except Exception as err:
            logger.exception("Unexpected error in tool %s", name)
            return error_result(str(err) or UNKNOWN_ERROR_MESSAGE)

        logger.debug("Tool %s returned: %s", name, text)
        return text_result(text)

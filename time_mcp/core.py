import logging
from collections.abc import Mapping
from typing import Any

from mcp.server.lowlevel import Server
from mcp.types import CallToolResult, Tool

from .config import SERVER_NAME, SERVER_VERSION
from .dispatcher import Dispatcher
from .registry import ToolRegistry
from .tools import default_registry
from .types import UnknownToolPolicy

__all__ = ["TimeMCP"]

logger = logging.getLogger(__name__)


class TimeMCP:
    """MCP server exposing the tools of a registry through a dispatcher."""

    __slots__ = ("_dispatcher", "_server")

    def __init__(
        self,
        name: str = SERVER_NAME,
        version: str = SERVER_VERSION,
        instructions: str | None = None,
        registry: ToolRegistry | None = None,
        unknown_tool_policy: UnknownToolPolicy = UnknownToolPolicy.RESULT,
    ) -> None:
        self._dispatcher = Dispatcher(registry if registry is not None else default_registry(), unknown_tool_policy)
        self._server: Server[Any] = Server(name, version=version, instructions=instructions)

        # Arguments are checked by the tools themselves, not against the input schema
        self._server.list_tools()(self.list_tools)
        self._server.call_tool(validate_input=False)(self.call_tool)

    @property
    def server(self) -> Server[Any]:
        return self._server

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    async def list_tools(self) -> list[Tool]:
        """List all available tools."""
        return self._dispatcher.list_tools()

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None) -> CallToolResult:
        """Call a tool by name with arguments."""
        return self._dispatcher.call_tool(name, arguments)

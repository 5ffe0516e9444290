import logging

from aiohttp import web

from .core import TimeMCP
from .transport import EventSourceResponse, SSEServerTransport
from .types import TransportMode

__all__ = ["AppBuilder", "build_mcp_app", "setup_mcp_subapp"]

logger = logging.getLogger(__name__)


class AppBuilder:
    """Aiohttp application builder for the time MCP server."""

    __slots__ = ("_mcp", "_path", "_sse")

    def __init__(
        self,
        mcp: TimeMCP,
        path: str = "/mcp",
        transport_mode: TransportMode = TransportMode.SSE,
        send_timeout: float | None = None,
    ) -> None:
        if transport_mode != TransportMode.SSE:
            raise ValueError(f"Unsupported transport mode for an HTTP application: {transport_mode}")
        self._mcp = mcp
        self._path = path
        self._sse = SSEServerTransport(path, send_timeout=send_timeout)

    @property
    def path(self) -> str:
        """Return the path for the MCP server."""
        return self._path

    @property
    def transport(self) -> SSEServerTransport:
        return self._sse

    def build(self, is_subapp: bool = False) -> web.Application:
        """Build the MCP server application."""
        app = web.Application()
        # A sub-application is mounted under the prefix, so its routes are relative to it
        self.setup_routes(app, path="" if is_subapp else self._path)
        return app

    def setup_routes(self, app: web.Application, path: str) -> None:
        """GET opens the SSE stream, POST delivers client messages."""
        app.router.add_get(path, self.sse_handler)
        app.router.add_post(path, self.message_handler)

    async def sse_handler(self, request: web.Request) -> EventSourceResponse:
        """Handle the SSE connection and run an MCP session over it."""
        server = self._mcp.server
        async with self._sse.connect_sse(request) as connection:
            await server.run(
                read_stream=connection.read_stream,
                write_stream=connection.write_stream,
                initialization_options=server.create_initialization_options(),
                raise_exceptions=False,
            )
        return connection.response

    async def message_handler(self, request: web.Request) -> web.Response:
        """Handle incoming messages from the client."""
        return await self._sse.handle_post_message(request)


def build_mcp_app(
    mcp: TimeMCP,
    path: str = "/mcp",
    is_subapp: bool = False,
    send_timeout: float | None = None,
) -> web.Application:
    """Build a standalone aiohttp application serving the MCP server over SSE."""
    return AppBuilder(mcp, path, send_timeout=send_timeout).build(is_subapp=is_subapp)


def setup_mcp_subapp(app: web.Application, mcp: TimeMCP, prefix: str = "/mcp") -> None:
    """Mount the MCP server into an existing application under ``prefix``."""
    mcp_app = build_mcp_app(mcp, prefix, is_subapp=True)
    app.add_subapp(prefix, mcp_app)
    logger.debug("Mounted MCP sub-application at %s", prefix)

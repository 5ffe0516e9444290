import logging
from contextlib import AsyncExitStack

import anyio
from aiohttp import web
from mcp.server.stdio import stdio_server

from .app import build_mcp_app
from .config import ServerSettings
from .core import TimeMCP
from .errors import TransportInitError
from .types import TransportMode

__all__ = ["run_sse", "run_stdio", "serve"]

logger = logging.getLogger(__name__)


async def run_stdio(mcp: TimeMCP) -> None:
    """Serve over stdin/stdout until the client closes the stream.

    Raises:
        TransportInitError: If the standard streams cannot be opened.
    """
    async with AsyncExitStack() as stack:
        try:
            read_stream, write_stream = await stack.enter_async_context(stdio_server())
        except (AttributeError, OSError, ValueError) as err:
            raise TransportInitError(str(TransportMode.STDIO), str(err)) from err

        # stdout carries the protocol, so diagnostics only ever go to stderr
        logger.info("Time MCP Server running on stdio")
        await mcp.server.run(
            read_stream,
            write_stream,
            mcp.server.create_initialization_options(),
        )
    logger.info("stdio stream closed, shutting down")


async def run_sse(mcp: TimeMCP, host: str, port: int, path: str = "/mcp") -> None:
    """Serve over HTTP+SSE until cancelled.

    Raises:
        TransportInitError: If the HTTP listener cannot be started.
    """
    runner = web.AppRunner(build_mcp_app(mcp, path=path))
    await runner.setup()
    try:
        site = web.TCPSite(runner, host, port)
        try:
            await site.start()
        except OSError as err:
            raise TransportInitError(str(TransportMode.SSE), f"cannot listen on {host}:{port}: {err}") from err

        logger.info("Time MCP Server running on http://%s:%s%s", host, port, path)
        await anyio.sleep_forever()
    finally:
        with anyio.CancelScope(shield=True):
            await runner.cleanup()


async def serve(mcp: TimeMCP, settings: ServerSettings) -> None:
    """Run the server over the transport selected in ``settings``."""
    if settings.transport == TransportMode.STDIO:
        await run_stdio(mcp)
    elif settings.transport == TransportMode.SSE:
        await run_sse(mcp, settings.host, settings.port, settings.path)
    else:
        raise ValueError(f"Unsupported transport mode: {settings.transport}")

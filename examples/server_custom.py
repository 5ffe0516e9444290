import logging

from aiohttp import web

from time_mcp import AppBuilder, TimeMCP
from time_mcp.transport import EventSourceResponse

logger = logging.getLogger(__name__)

mcp = TimeMCP()
app_builder = AppBuilder(mcp, path="/mcp")


async def handle_sse(request: web.Request) -> EventSourceResponse:
    """Custom handler for SSE connection."""
    logger.info("SSE client connected: %s", request.remote)
    response = await app_builder.sse_handler(request)
    logger.info("SSE client disconnected: %s", request.remote)
    return response


async def handle_message(request: web.Request) -> web.Response:
    """Custom handler for incoming messages."""
    return await app_builder.message_handler(request)


app = web.Application()
app.router.add_get(app_builder.path, handle_sse)
app.router.add_post(app_builder.path, handle_message)

logging.basicConfig(level=logging.INFO)
web.run_app(app)

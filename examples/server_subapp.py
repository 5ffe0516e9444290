from aiohttp import web

from time_mcp import TimeMCP, setup_mcp_subapp

mcp = TimeMCP()


async def index(request: web.Request) -> web.Response:
    return web.Response(text="Time MCP server is mounted at /mcp")


app = web.Application()
app.router.add_get("/", index)
setup_mcp_subapp(app, mcp, prefix="/mcp")
web.run_app(app)

from aiohttp import web

from time_mcp import TimeMCP, build_mcp_app

mcp = TimeMCP()

app = build_mcp_app(mcp, path="/mcp")
web.run_app(app)

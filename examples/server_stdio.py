import anyio

from time_mcp import TimeMCP
from time_mcp.cli import configure_logging
from time_mcp.runner import run_stdio

configure_logging("INFO")
anyio.run(run_stdio, TimeMCP())

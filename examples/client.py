import asyncio
import sys

from mcp import ClientSession
from mcp.client.sse import sse_client
from mcp.types import TextContent

MCP_SERVER_URL = "http://localhost:8080/mcp"


async def main(timezones: list[str]) -> None:
    async with sse_client(MCP_SERVER_URL) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()

            tools = (await session.list_tools()).tools
            print("Connected to server with tools:", [tool.name for tool in tools])

            for timezone in timezones or [""]:
                arguments = {"timezone": timezone} if timezone else {}
                result = await session.call_tool("getCurrentTime", arguments)
                text = "".join(item.text for item in result.content if isinstance(item, TextContent))
                status = "error" if result.isError else "ok"
                print(f"{timezone or 'UTC':<20} [{status}] {text}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))

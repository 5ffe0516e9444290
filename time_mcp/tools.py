import logging
from collections.abc import Mapping
from typing import Any

from mcp.types import Tool

from .clock import current_time
from .registry import ToolEntry, ToolRegistry

__all__ = ["GET_CURRENT_TIME_TOOL", "default_registry", "get_current_time"]

logger = logging.getLogger(__name__)

GET_CURRENT_TIME_TOOL = Tool(
    name="getCurrentTime",
    description=(
        "Returns the current date and time in ISO 8601 format. "
        "Optionally accepts a timezone parameter to return the time in a specific timezone "
        "(e.g., 'America/New_York', 'Europe/London', 'Asia/Tokyo')."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "timezone": {
                "type": "string",
                "description": (
                    "Optional IANA timezone identifier (e.g., 'America/New_York', 'Europe/London', 'UTC'). "
                    "If not provided, returns time in UTC."
                ),
            },
        },
    },
)


def get_current_time(arguments: Mapping[str, Any]) -> str:
    """Handle a ``getCurrentTime`` call."""
    tz_name = arguments.get("timezone")
    if tz_name is not None and not isinstance(tz_name, str):
        logger.warning("Ignoring non-string timezone argument: %r", tz_name)
        tz_name = None
    return current_time(tz_name)


def default_registry() -> ToolRegistry:
    """Build the registry served by default."""
    return ToolRegistry([ToolEntry(GET_CURRENT_TIME_TOOL, get_current_time)])

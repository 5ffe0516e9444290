from .app import AppBuilder, build_mcp_app, setup_mcp_subapp
from .clock import current_time
from .config import SERVER_VERSION, ServerSettings, load_settings
from .core import TimeMCP
from .dispatcher import Dispatcher
from .errors import (
    ConfigError,
    InvalidTimezoneError,
    TimeMCPError,
    TransportInitError,
    UnknownToolError,
)
from .registry import ToolEntry, ToolRegistry
from .tools import GET_CURRENT_TIME_TOOL, default_registry
from .types import TransportMode, UnknownToolPolicy

__version__ = SERVER_VERSION

__all__ = [
    "GET_CURRENT_TIME_TOOL",
    "AppBuilder",
    "ConfigError",
    "Dispatcher",
    "InvalidTimezoneError",
    "ServerSettings",
    "TimeMCP",
    "TimeMCPError",
    "ToolEntry",
    "ToolRegistry",
    "TransportInitError",
    "TransportMode",
    "UnknownToolError",
    "UnknownToolPolicy",
    "build_mcp_app",
    "current_time",
    "default_registry",
    "load_settings",
    "setup_mcp_subapp",
]

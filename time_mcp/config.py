"""Server configuration.

Sources, later overrides earlier:
    1. Model defaults
    2. ``TIME_MCP_*`` environment variables
    3. Explicit overrides (CLI options)
"""

import logging
import os
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .types import TransportMode, UnknownToolPolicy

__all__ = [
    "ENV_PREFIX",
    "SERVER_NAME",
    "SERVER_VERSION",
    "LogLevel",
    "ServerSettings",
    "load_settings",
]

logger = logging.getLogger(__name__)

SERVER_NAME = "time-mcp-server"
SERVER_VERSION = "1.0.0"

ENV_PREFIX = "TIME_MCP_"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ServerSettings(BaseModel):
    """Validated settings for one server process."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    transport: TransportMode = TransportMode.STDIO
    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=0, le=65535)
    path: str = "/mcp"
    log_level: LogLevel = "INFO"
    unknown_tool: UnknownToolPolicy = UnknownToolPolicy.RESULT

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("path must start with '/'")
        return value


def _from_env(env: Mapping[str, str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for field_name in ServerSettings.model_fields:
        env_name = f"{ENV_PREFIX}{field_name.upper()}"
        if env.get(env_name):
            values[field_name] = env[env_name]
            logger.debug("Using %s from environment", env_name)
    return values


def load_settings(env: Mapping[str, str] | None = None, **overrides: Any) -> ServerSettings:
    """Build settings from the environment and explicit overrides.

    Overrides set to ``None`` are ignored so unset CLI options fall through.

    Raises:
        ConfigError: If any value fails validation.
    """
    values: dict[str, Any] = _from_env(os.environ if env is None else env)
    values.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return ServerSettings.model_validate(values)
    except ValidationError as err:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc']) or 'settings'}: {error['msg']}" for error in err.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from err

"""Command-line entry point: ``time-mcp`` and ``python -m time_mcp``."""

import logging
import sys
from typing import NoReturn

import anyio
import click

from .config import SERVER_VERSION, ServerSettings, load_settings
from .core import TimeMCP
from .errors import ConfigError, TransportInitError
from .runner import serve
from .types import TransportMode, UnknownToolPolicy

__all__ = ["configure_logging", "main", "run"]

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level: str) -> None:
    """Send all log records to stderr, keeping stdout free for the protocol."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--transport",
    type=click.Choice([mode.value for mode in TransportMode]),
    default=None,
    help="Transport to serve over (default: stdio).",
)
@click.option("--host", default=None, help="Host to bind for the sse transport.")
@click.option("--port", type=int, default=None, help="Port to bind for the sse transport.")
@click.option("--path", default=None, help="URL path of the MCP endpoint for the sse transport.")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (logs always go to stderr).",
)
@click.option(
    "--unknown-tool",
    type=click.Choice([policy.value for policy in UnknownToolPolicy]),
    default=None,
    help="Answer calls to unknown tools with an error result, or raise.",
)
@click.version_option(SERVER_VERSION, prog_name="time-mcp")
def main(
    transport: str | None,
    host: str | None,
    port: int | None,
    path: str | None,
    log_level: str | None,
    unknown_tool: str | None,
) -> None:
    """Serve the getCurrentTime tool over the Model Context Protocol."""
    try:
        settings = load_settings(
            transport=transport,
            host=host,
            port=port,
            path=path,
            log_level=log_level,
            unknown_tool=unknown_tool,
        )
    except ConfigError as err:
        _fail(str(err))

    configure_logging(settings.log_level)
    run(settings)


def run(settings: ServerSettings) -> None:
    """Run the server until the transport closes; exit 1 if it cannot start."""
    mcp = TimeMCP(unknown_tool_policy=settings.unknown_tool)
    try:
        anyio.run(serve, mcp, settings)
    except TransportInitError as err:
        logger.critical("Fatal error starting server: %s", err)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")

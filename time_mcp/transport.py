import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote
from uuid import UUID, uuid4

import anyio
from aiohttp import web
from aiohttp_sse import EventSourceResponse, sse_response
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream
from mcp.shared.message import ServerMessageMetadata, SessionMessage
from mcp.types import JSONRPCMessage
from pydantic import ValidationError

__all__ = [
    "Event",
    "EventSourceResponse",
    "EventType",
    "SSEConnection",
    "SSEServerTransport",
]

logger = logging.getLogger(__name__)

ReadStream = MemoryObjectReceiveStream[SessionMessage | Exception]
WriteStream = MemoryObjectSendStream[SessionMessage]


class EventType(str, Enum):
    """Event types sent over the SSE stream."""

    ENDPOINT = "endpoint"
    MESSAGE = "message"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Event:
    event_type: EventType
    data: str

    @classmethod
    def from_message(cls, message: SessionMessage) -> "Event":
        data = message.message.model_dump_json(by_alias=True, exclude_none=True)
        return cls(event_type=EventType.MESSAGE, data=data)


@dataclass(frozen=True, slots=True, kw_only=True)
class SSEConnection:
    """Streams handed to the MCP server for one SSE client."""

    read_stream: ReadStream
    write_stream: WriteStream
    request: web.Request
    response: EventSourceResponse


class SSEServerTransport:
    """Serves MCP sessions over Server-Sent Events.

    The client opens a long-lived GET stream and receives an ``endpoint`` event
    with the URI to POST its messages to. Server messages go back over the
    stream as ``message`` events.
    """

    __slots__ = ("_message_path", "_sessions", "_send_timeout")

    def __init__(self, message_path: str, send_timeout: float | None = None) -> None:
        self._message_path = message_path
        self._send_timeout = send_timeout
        self._sessions: dict[UUID, MemoryObjectSendStream[SessionMessage | Exception]] = {}

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    def session_uri(self, session_id: UUID) -> str:
        return f"{quote(self._message_path)}?session_id={session_id.hex}"

    @asynccontextmanager
    async def connect_sse(self, request: web.Request) -> AsyncIterator[SSEConnection]:
        session_id = uuid4()
        logger.info("Opening SSE session %s", session_id)

        # client -> server
        client_writer, server_reader = anyio.create_memory_object_stream[SessionMessage | Exception](0)
        # server -> client
        server_writer, events_reader = anyio.create_memory_object_stream[SessionMessage](0)

        self._sessions[session_id] = client_writer

        async def _forward_events(response: EventSourceResponse) -> None:
            endpoint = Event(event_type=EventType.ENDPOINT, data=self.session_uri(session_id))
            await response.send(data=endpoint.data, event=endpoint.event_type)
            logger.debug("Sent endpoint event: %s", endpoint.data)

            async with events_reader:
                async for message in events_reader:
                    event = Event.from_message(message)
                    with anyio.move_on_after(self._send_timeout) as scope:
                        await response.send(data=event.data, event=event.event_type)
                    if scope.cancel_called:
                        raise TimeoutError(f"Timed out sending event to SSE session {session_id}")
                    logger.debug("Sent event: %s", event.data)

        async with sse_response(request) as response:
            async with anyio.create_task_group() as tg:

                async def _run_until_done() -> None:
                    await _forward_events(response)
                    tg.cancel_scope.cancel()

                tg.start_soon(_run_until_done)
                try:
                    yield SSEConnection(
                        read_stream=server_reader,
                        write_stream=server_writer,
                        request=request,
                        response=response,
                    )
                finally:
                    del self._sessions[session_id]
                    client_writer.close()
                    server_writer.close()
                    tg.cancel_scope.cancel()
                    logger.info("Closed SSE session %s", session_id)

    def _find_session(
        self, request: web.Request
    ) -> MemoryObjectSendStream[SessionMessage | Exception] | web.Response:
        raw_session_id = request.query.get("session_id")
        if raw_session_id is None:
            logger.warning("Received message without session ID")
            return web.Response(text="No session ID provided", status=400)

        try:
            session_id = UUID(hex=raw_session_id)
        except ValueError:
            logger.warning("Received invalid session ID: %s", raw_session_id)
            return web.Response(text="Invalid session ID", status=400)

        writer = self._sessions.get(session_id)
        if writer is None:
            logger.warning("Could not find session for ID: %s", session_id)
            return web.Response(text="Could not find session", status=404)
        return writer

    async def handle_post_message(self, request: web.Request) -> web.Response:
        """Accept one JSON-RPC message from the client and pass it to its session."""
        found = self._find_session(request)
        if isinstance(found, web.Response):
            return found

        body = await request.text()
        logger.debug("Received message: %s", body)
        try:
            message = JSONRPCMessage.model_validate_json(body)
        except ValidationError as err:
            logger.error("Failed to parse message: %s", err)
            if not await self._deliver(found, err):
                return web.Response(text="Could not find session", status=404)
            return web.Response(text="Could not parse message", status=400)

        session_message = SessionMessage(message, metadata=ServerMessageMetadata(request_context=request))
        if not await self._deliver(found, session_message):
            return web.Response(text="Could not find session", status=404)
        return web.Response(text="Accepted", status=202)

    async def _deliver(
        self,
        writer: MemoryObjectSendStream[SessionMessage | Exception],
        item: SessionMessage | Exception,
    ) -> bool:
        # The session may close between lookup and send
        try:
            await writer.send(item)
        except (anyio.ClosedResourceError, anyio.BrokenResourceError):
            logger.warning("Session closed before message could be delivered")
            return False
        return True


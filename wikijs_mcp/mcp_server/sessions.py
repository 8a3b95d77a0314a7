"""Session registry for the streamable HTTP transport.

Each MCP session owns one ``StreamableHTTPServerTransport`` and one server
loop running inside the registry's task group. The registry is the only
shared mutable state in HTTP mode.
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

import anyio
from anyio.abc import TaskGroup, TaskStatus
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.streamable_http import StreamableHTTPServerTransport

logger = logging.getLogger(__name__)

TransportFactory = Callable[..., StreamableHTTPServerTransport]


class SessionRegistry:
    """Maps session IDs to live transports."""

    def __init__(
        self,
        server: Server,
        init_options: InitializationOptions | None = None,
        transport_factory: TransportFactory = StreamableHTTPServerTransport,
    ):
        self.server = server
        self.init_options = init_options
        self._transport_factory = transport_factory
        self._transports: dict[str, StreamableHTTPServerTransport] = {}
        self._lock = anyio.Lock()
        self._task_group: TaskGroup | None = None

    @asynccontextmanager
    async def run(self) -> AsyncIterator["SessionRegistry"]:
        """Own the task group that hosts the per-session server loops."""
        async with anyio.create_task_group() as tg:
            self._task_group = tg
            logger.info("Session registry started")
            try:
                yield self
            finally:
                tg.cancel_scope.cancel()
                self._task_group = None
                self._transports.clear()
                logger.info("Session registry stopped")

    def get(self, session_id: str) -> StreamableHTTPServerTransport | None:
        return self._transports.get(session_id)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._transports

    def __len__(self) -> int:
        return len(self._transports)

    @property
    def session_ids(self) -> list[str]:
        return list(self._transports)

    async def create(self) -> StreamableHTTPServerTransport:
        """Create a session with a fresh ID and start its server loop."""
        if self._task_group is None:
            raise RuntimeError("Session registry is not running")

        async with self._lock:
            session_id = uuid4().hex
            while session_id in self._transports:
                session_id = uuid4().hex

            transport = self._transport_factory(
                mcp_session_id=session_id,
                is_json_response_enabled=False,
                event_store=None,
            )
            self._transports[session_id] = transport

        await self._task_group.start(self._serve, transport)
        logger.info("Session created", extra={"extra_data": {"session_id": session_id}})
        return transport

    async def remove(self, session_id: str) -> bool:
        """Drop a session binding. Returns False if it was already gone."""
        async with self._lock:
            transport = self._transports.pop(session_id, None)

        if transport is None:
            return False
        logger.info("Session closed", extra={"extra_data": {"session_id": session_id}})
        return True

    async def _serve(
        self,
        transport: StreamableHTTPServerTransport,
        *,
        task_status: TaskStatus = anyio.TASK_STATUS_IGNORED,
    ) -> None:
        session_id = transport.mcp_session_id
        try:
            async with transport.connect() as (read_stream, write_stream):
                task_status.started()
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.init_options or self.server.create_initialization_options(),
                    stateless=False,
                )
        except Exception:
            logger.exception(f"Session {session_id} crashed")
        finally:
            # Transport closed; unbind so later calls with this ID are rejected
            with anyio.CancelScope(shield=True):
                await self.remove(session_id)

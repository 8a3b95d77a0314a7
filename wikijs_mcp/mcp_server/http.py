"""FastAPI application serving MCP over streamable HTTP."""

import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mcp.server import Server
from mcp.server.streamable_http import MCP_SESSION_ID_HEADER
from starlette.requests import Request
from starlette.types import Message, Receive, Scope, Send

from wikijs_mcp.mcp_server.config import Config
from wikijs_mcp.mcp_server.errors import ProtocolError
from wikijs_mcp.mcp_server.main import initialization_options
from wikijs_mcp.mcp_server.sessions import SessionRegistry
from wikijs_mcp.models.api.system import HealthResponse

logger = logging.getLogger(__name__)


def is_initialize_request(body: bytes) -> bool:
    """True if the JSON-RPC body (single or batch) contains an ``initialize`` call."""
    try:
        message = json.loads(body)
    except ValueError:
        return False

    messages = message if isinstance(message, list) else [message]
    return any(
        isinstance(m, dict) and m.get("method") == "initialize" for m in messages
    )


def _replay(body: bytes, receive: Receive) -> Receive:
    """Hand an already consumed request body to the transport again."""
    sent = False

    async def replay_receive() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay_receive


class StreamableHTTPEndpoint:
    """ASGI endpoint for ``/mcp`` routing requests to their session transport.

    - a request carrying a known ``mcp-session-id`` goes to that transport
    - a POST without session ID whose body is ``initialize`` opens a session
    - everything else is rejected with a JSON-RPC error
    """

    def __init__(self, sessions: SessionRegistry):
        self.sessions = sessions

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        session_id = request.headers.get(MCP_SESSION_ID_HEADER)

        if session_id:
            transport = self.sessions.get(session_id)
            if transport is None:
                await self._reject(
                    "Bad Request: No valid session ID provided", scope, receive, send
                )
                return

            await transport.handle_request(scope, receive, send)
            if request.method == "DELETE":
                await self.sessions.remove(session_id)
            return

        if request.method == "POST":
            body = await request.body()
            if is_initialize_request(body):
                transport = await self.sessions.create()
                await transport.handle_request(scope, _replay(body, receive), send)
                return

        await self._reject(
            "Bad Request: No valid session ID provided", scope, receive, send
        )

    async def _reject(self, message: str, scope: Scope, receive: Receive, send: Send) -> None:
        error = ProtocolError(message)
        logger.warning(f"Rejected MCP request: {message}")
        response = JSONResponse(status_code=400, content=error.to_jsonrpc())
        await response(scope, receive, send)


def create_app(server: Server, config: Config) -> FastAPI:
    """Create the FastAPI app exposing ``/health`` and ``/mcp``."""
    sessions = SessionRegistry(server, init_options=initialization_options(server, config))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(f"Starting {config.mcp_server_name} HTTP transport")
        async with sessions.run():
            yield
        logger.info(f"{config.mcp_server_name} HTTP transport shutdown complete")

    app = FastAPI(
        title="Wiki.js MCP Server",
        description="Wiki.js search and retrieval over the Model Context Protocol",
        version=config.mcp_server_version,
        lifespan=lifespan,
    )
    app.state.sessions = sessions

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
        expose_headers=[MCP_SESSION_ID_HEADER],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(service=config.mcp_server_name, mode="http")

    app.add_route(
        "/mcp",
        StreamableHTTPEndpoint(sessions),
        methods=["GET", "POST", "DELETE"],
    )

    return app

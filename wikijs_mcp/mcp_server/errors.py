"""Exception types for the Wiki.js MCP server."""

# JSON-RPC error code used for session-less or malformed transport calls
SESSION_ERROR_CODE = -32000


class WikiMcpError(Exception):
    """Base class for all Wiki.js MCP server errors."""


class ConfigurationError(WikiMcpError):
    """Raised when required startup configuration is missing or invalid."""


class UpstreamError(WikiMcpError):
    """Exception raised when the Wiki.js GraphQL API call fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class UpstreamTransportError(UpstreamError):
    """The Wiki.js endpoint could not be reached (DNS, refused, timeout, HTTP error)."""


class UpstreamQueryError(UpstreamError):
    """Wiki.js answered with a non-empty GraphQL error list."""

    def __init__(self, errors: list, status_code: int | None = None):
        self.errors = errors
        super().__init__(
            f"GraphQL errors: {errors}",
            status_code=status_code,
            details={"errors": errors},
        )


class AdapterError(WikiMcpError):
    """A content adapter operation failed.

    The message always starts with a stable, operation specific prefix such
    as ``"Wiki.JS search failed: "``.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class NotFoundError(AdapterError):
    """The requested wiki page does not exist."""


class ProtocolError(WikiMcpError):
    """A call was rejected at the transport boundary."""

    def __init__(self, message: str, code: int = SESSION_ERROR_CODE):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_jsonrpc(self) -> dict:
        """Render the structured JSON-RPC error body (request id is unknown)."""
        return {
            "jsonrpc": "2.0",
            "error": {"code": self.code, "message": self.message},
            "id": None,
        }


class ToolExecutionError(WikiMcpError):
    """A tool call failed; reported to the caller as an error result."""

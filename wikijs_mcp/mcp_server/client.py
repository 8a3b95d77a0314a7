"""GraphQL client for Wiki.js API communication."""

import json
import logging

import httpx

from wikijs_mcp.mcp_server.config import Config
from wikijs_mcp.mcp_server.errors import (
    UpstreamError,
    UpstreamQueryError,
    UpstreamTransportError,
)

logger = logging.getLogger(__name__)


class WikiJsClient:
    """Simple GraphQL client for the Wiki.js API.

    Every call is a single POST to ``{base_url}/graphql`` with a fixed
    timeout. There is no retry.
    """

    def __init__(self, config: Config, transport: httpx.AsyncBaseTransport | None = None):
        """Initialize the client with configuration."""
        self.config = config
        self.url = config.graphql_url
        self._transport = transport

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.wiki_js_api_key}",
            "Content-Type": "application/json",
        }

    async def execute(self, query: str, variables: dict | None = None) -> dict:
        """Execute a GraphQL query and return its ``data`` object.

        Raises:
            UpstreamTransportError: If Wiki.js cannot be reached or answers
                with an HTTP error status
            UpstreamQueryError: If the response carries GraphQL errors
        """
        variables = variables or {}
        logger.debug(f"Executing GraphQL query: {query.strip()[:100]}...")
        logger.debug(f"Variables: {json.dumps(variables)}")

        try:
            async with httpx.AsyncClient(
                timeout=self.config.request_timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.url,
                    json={"query": query, "variables": variables},
                    headers=self.headers,
                )
                payload = self._handle_response(response)

        except httpx.TimeoutException:
            raise UpstreamTransportError(f"Request timeout: {self.url}")
        except httpx.ConnectError:
            raise UpstreamTransportError(
                f"Cannot connect to Wiki.js at {self.config.wiki_js_base_url}"
            )
        except httpx.RequestError as e:
            raise UpstreamTransportError(f"GraphQL request failed: {e}")

        errors = payload.get("errors")
        if errors:
            logger.error(f"GraphQL errors: {json.dumps(errors)}")
            raise UpstreamQueryError(errors, status_code=response.status_code)

        return payload.get("data") or {}

    def _handle_response(self, response: httpx.Response) -> dict:
        """Check the HTTP status and extract the JSON body."""
        if response.status_code >= 400:
            error_details = {}
            try:
                error_data = response.json()
                error_details = error_data if isinstance(error_data, dict) else {}
            except ValueError:
                pass

            error_message = error_details.get("message", f"HTTP {response.status_code}")
            logger.error(f"GraphQL request failed: {error_message}")
            raise UpstreamTransportError(
                f"GraphQL request failed: {error_message}",
                status_code=response.status_code,
                details=error_details,
            )

        try:
            payload = response.json()
        except ValueError:
            raise UpstreamError(
                "Failed to parse response: body is not JSON",
                status_code=response.status_code,
            )

        if not isinstance(payload, dict):
            raise UpstreamError(
                "Failed to parse response: expected a JSON object",
                status_code=response.status_code,
            )
        return payload

"""Configuration for the MCP server."""

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wikijs_mcp.mcp_server.errors import ConfigurationError

# Default configuration
DEFAULT_CONFIG = {
    "mcp_server_name": "avr-docs-mcp",
    "mcp_server_version": "1.0.0",
    "request_timeout": 10.0,
    "default_locale": "en",
}


class Config(BaseSettings):
    """MCP server configuration.

    Values come from the environment (or a ``.env`` file); keyword overrides
    take precedence, which is how tests build configurations.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # Wiki.js connection
    wiki_js_base_url: str = ""
    wiki_js_api_key: str = ""

    # Server settings
    log_level: str = "INFO"
    mcp_transport: Literal["stdio", "http"] = "stdio"
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)

    mcp_server_name: str = DEFAULT_CONFIG["mcp_server_name"]
    mcp_server_version: str = DEFAULT_CONFIG["mcp_server_version"]
    request_timeout: float = Field(default=DEFAULT_CONFIG["request_timeout"], gt=0)

    @field_validator("wiki_js_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove surrounding whitespace and a trailing slash from the base URL."""
        return v.strip().rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level == "WARN":
            level = "WARNING"
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("mcp_transport", mode="before")
    @classmethod
    def normalize_transport(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @property
    def graphql_url(self) -> str:
        """Full URL of the Wiki.js GraphQL endpoint."""
        return f"{self.wiki_js_base_url}/graphql"

    def require(self) -> "Config":
        """Fail fast if required connection settings are absent."""
        if not self.wiki_js_base_url:
            raise ConfigurationError(
                "WIKI_JS_BASE_URL environment variable is required"
            )
        if not self.wiki_js_api_key:
            raise ConfigurationError("WIKI_JS_API_KEY environment variable is required")
        return self

    @classmethod
    def load(cls, **overrides) -> "Config":
        """Load and validate configuration from the environment."""
        try:
            config = cls(**overrides)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
        return config.require()

    def __repr__(self) -> str:
        return (
            f"Config(wiki_js_base_url='{self.wiki_js_base_url}', "
            f"mcp_transport='{self.mcp_transport}')"
        )

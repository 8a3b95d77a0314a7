"""System and monitoring related API models."""

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response model for the HTTP health check."""

    status: str = "healthy"
    service: str
    mode: Literal["stdio", "http"] = "http"


__all__ = ["HealthResponse"]

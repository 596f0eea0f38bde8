"""
Noteful Backend — Shared Response Schemas
==========================================

What:  Error envelope used by every failing endpoint, and the health payload.

Error format:
    {"error": {"message": "Folder doesn't exist"}}
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    message: str = Field(description="Human-readable error description")


class ErrorResponse(BaseModel):
    """Standard error envelope. Documented in OpenAPI for 400/404/500 responses."""
    error: ErrorDetail


class HealthResponse(BaseModel):
    """
    Returned by GET /health for container and load balancer probes.

    A backend that can't reach its database can't serve a single route,
    so the database check decides the overall status.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

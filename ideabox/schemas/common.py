"""
Idea Box API: Shared Response Schemas
=====================================

What:  Error and health payloads used across routers.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Error format for all API errors.

    Example:
        {"error": "box not found"}
    """
    error: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and container probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

"""Health check models."""

from pydantic import BaseModel


class VercelConnection(BaseModel):
    """Upstream connectivity as seen by the liveness probe."""

    connected: bool
    user: str | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    uptime: float
    timestamp: str
    vercel: VercelConnection

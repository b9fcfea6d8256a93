"""Liveness probe against the Vercel identity endpoint."""

import time
from datetime import datetime, timezone

from app.models.health import HealthResponse, VercelConnection
from app.services.vercel import VercelClient
from app.utils.logging import get_logger

logger = get_logger(__name__)


async def probe_upstream(client: VercelClient, started_at: float) -> HealthResponse:
    """Report process uptime and whether Vercel answers with our token.

    Never raises: any failure is reported as ``status="unhealthy"``.
    """
    try:
        data = await client.get_user()
        connection = VercelConnection(connected=True, user=data["user"]["username"])
        status = "healthy"
    except Exception as e:
        logger.error("health.check_failed", error=str(e) or type(e).__name__)
        connection = VercelConnection(connected=False, error=str(e) or "Unknown error")
        status = "unhealthy"

    return HealthResponse(
        status=status,
        uptime=round(time.monotonic() - started_at, 3),
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        vercel=connection,
    )

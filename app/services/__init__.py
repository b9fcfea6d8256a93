"""Services for the deploy gateway."""

from app.services.deployments import DeploymentService
from app.services.health import probe_upstream
from app.services.vercel import VercelAPIError, VercelClient

__all__ = [
    "DeploymentService",
    "VercelAPIError",
    "VercelClient",
    "probe_upstream",
]

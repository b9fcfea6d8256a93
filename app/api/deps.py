"""Dependency injection for API endpoints."""

from typing import Annotated

from fastapi import Depends, Request

from app.services.deployments import DeploymentService
from app.services.vercel import VercelClient


async def get_vercel_client(request: Request) -> VercelClient:
    """Get the shared Vercel client."""
    return request.app.state.vercel_client


async def get_deployment_service(request: Request) -> DeploymentService:
    """Get the deployment service."""
    return request.app.state.deployment_service


# Type aliases for cleaner signatures
VercelClientDep = Annotated[VercelClient, Depends(get_vercel_client)]
DeploymentServiceDep = Annotated[DeploymentService, Depends(get_deployment_service)]

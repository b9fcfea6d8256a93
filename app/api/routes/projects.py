"""Project, environment variable and domain endpoints."""

from fastapi import APIRouter

from app.api.deps import DeploymentServiceDep
from app.models.base import ErrorEnvelope
from app.models.project import (
    DomainRequest,
    DomainResponse,
    EnvUpdateRequest,
    EnvUpdateResponse,
    ProjectsResponse,
)

router = APIRouter(
    responses={
        400: {"model": ErrorEnvelope},
        401: {"model": ErrorEnvelope},
        500: {"model": ErrorEnvelope},
    }
)


@router.get(
    "/projects",
    response_model=ProjectsResponse,
    response_model_exclude_none=True,
)
async def list_projects(service: DeploymentServiceDep) -> ProjectsResponse:
    """List projects (first page only)."""
    return await service.list_projects()


@router.post(
    "/projects/{project_id}/domain",
    response_model=DomainResponse,
    summary="Attach a domain to a project",
)
async def add_domain(
    project_id: str,
    body: DomainRequest,
    service: DeploymentServiceDep,
) -> DomainResponse:
    return await service.add_domain(project_id, body)


@router.post(
    "/env",
    response_model=EnvUpdateResponse,
    response_model_exclude_none=True,
    summary="Set environment variables on a project",
)
async def set_env_vars(
    body: EnvUpdateRequest,
    service: DeploymentServiceDep,
) -> EnvUpdateResponse:
    return await service.set_env_vars(body)

"""Deployment endpoints."""

from fastapi import APIRouter

from app.api.deps import DeploymentServiceDep
from app.models.base import ErrorEnvelope
from app.models.deployment import (
    DeploymentActionResponse,
    DeploymentCreate,
    DeploymentStatusResponse,
    DeploymentTriggerResponse,
    ErrorsResponse,
    LogsResponse,
)

router = APIRouter(
    responses={
        400: {"model": ErrorEnvelope},
        401: {"model": ErrorEnvelope},
        500: {"model": ErrorEnvelope},
    }
)


@router.post(
    "",
    response_model=DeploymentTriggerResponse,
    response_model_exclude_none=True,
    summary="Trigger a preview deployment",
)
async def trigger_deployment(
    body: DeploymentCreate,
    service: DeploymentServiceDep,
) -> DeploymentTriggerResponse:
    return await service.trigger_deployment(body)


@router.get(
    "/{deployment_id}/status",
    response_model=DeploymentStatusResponse,
    response_model_exclude_none=True,
)
async def get_deployment_status(
    deployment_id: str,
    service: DeploymentServiceDep,
) -> DeploymentStatusResponse:
    return await service.get_status(deployment_id)


@router.get("/{deployment_id}/logs", response_model=LogsResponse)
async def get_deployment_logs(
    deployment_id: str,
    service: DeploymentServiceDep,
) -> LogsResponse:
    return await service.get_logs(deployment_id)


@router.get(
    "/{deployment_id}/errors",
    response_model=ErrorsResponse,
    summary="Extract likely build errors from the event stream",
)
async def get_deployment_errors(
    deployment_id: str,
    service: DeploymentServiceDep,
) -> ErrorsResponse:
    return await service.get_errors(deployment_id)


@router.post(
    "/{deployment_id}/promote",
    response_model=DeploymentActionResponse,
    summary="Promote a deployment to production",
)
async def promote_deployment(
    deployment_id: str,
    service: DeploymentServiceDep,
) -> DeploymentActionResponse:
    return await service.promote(deployment_id)


@router.delete("/{deployment_id}", response_model=DeploymentActionResponse)
async def cancel_deployment(
    deployment_id: str,
    service: DeploymentServiceDep,
) -> DeploymentActionResponse:
    return await service.cancel(deployment_id)

"""Deployment operations exposed by the gateway.

Each public method validates its input, calls Vercel through
:class:`VercelClient`, and reshapes the answer into the gateway's response
models. Failures leave a method only as a :class:`GatewayError`.
"""

import asyncio
import functools
from typing import Any, Awaitable, Callable, TypeVar

from app.config import Settings
from app.core.exceptions import GatewayError, UpstreamError, ValidationError
from app.models.deployment import (
    DeploymentActionResponse,
    DeploymentCreate,
    DeploymentStatus,
    DeploymentStatusResponse,
    DeploymentSummary,
    DeploymentTriggerResponse,
    ErrorsResponse,
    LogsResponse,
)
from app.models.project import (
    DomainRequest,
    DomainResponse,
    EnvUpdateRequest,
    EnvUpdateResponse,
    EnvWriteResult,
    ProjectsResponse,
    ProjectSummary,
)
from app.services.events import extract_errors, to_log_entries
from app.services.vercel import VercelAPIError, VercelClient
from app.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Deployments created through the gateway always start as previews
DEPLOYMENT_TARGET = "preview"
ENV_VAR_TYPE = "encrypted"
ENV_VAR_TARGETS = ["production", "preview"]


def upstream_operation(
    summary: str, event: str
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Convert any upstream failure inside the wrapped call to UpstreamError.

    ``summary`` becomes the envelope's ``error``; the Vercel error message (or
    the local exception text for malformed bodies) becomes ``details``.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except GatewayError:
                raise
            except VercelAPIError as e:
                logger.error(
                    f"{event}.failed",
                    error=e.body if e.body is not None else e.message,
                    status_code=e.status_code,
                )
                raise UpstreamError(summary, details=e.message) from e
            except (KeyError, TypeError, AttributeError, ValueError) as e:
                # Body did not have the shape Vercel documents
                logger.error(f"{event}.failed", error=str(e), malformed=True)
                raise UpstreamError(summary, details=str(e)) from e

        return wrapper

    return decorator


def build_deployment_payload(request: DeploymentCreate) -> dict[str, Any]:
    """Build the ``POST /v13/deployments`` body.

    Raises ValidationError when ``name`` or ``gitSource.repo`` is missing.
    ``envVariables`` is folded into one mapping; on duplicate keys the last
    entry wins.
    """
    if not request.name:
        raise ValidationError("Project name is required")
    if request.git_source is None or not request.git_source.repo:
        raise ValidationError("Git source is required")

    payload: dict[str, Any] = {
        "name": request.name,
        "gitSource": {
            "type": request.git_source.type,
            "repo": request.git_source.repo,
            "ref": request.git_source.ref,
        },
        "target": DEPLOYMENT_TARGET,
    }
    if request.framework:
        payload["framework"] = request.framework
    if request.build_command:
        payload["buildCommand"] = request.build_command
    if request.env_variables is not None:
        env: dict[str, Any] = {}
        for variable in request.env_variables:
            env[variable.key] = variable.value
        payload["env"] = env
    return payload


class DeploymentService:
    """Operation handlers backed by the Vercel API."""

    def __init__(self, client: VercelClient, settings: Settings):
        self._client = client
        self._env_write_concurrency = settings.env_write_concurrency

    @upstream_operation("Failed to trigger deployment", "deployment.trigger")
    async def trigger_deployment(
        self, request: DeploymentCreate
    ) -> DeploymentTriggerResponse:
        payload = build_deployment_payload(request)
        logger.info(
            "deployment.triggering",
            name=payload["name"],
            repo=payload["gitSource"]["repo"],
            ref=payload["gitSource"]["ref"],
        )

        data = await self._client.create_deployment(payload)
        deployment = DeploymentSummary.from_vercel(data)

        logger.info(
            "deployment.triggered",
            deployment_id=deployment.id,
            url=deployment.url,
        )
        return DeploymentTriggerResponse(deployment=deployment)

    @upstream_operation("Failed to get deployment status", "deployment.status")
    async def get_status(self, deployment_id: str) -> DeploymentStatusResponse:
        data = await self._client.get_deployment(deployment_id)
        return DeploymentStatusResponse(deployment=DeploymentStatus.from_vercel(data))

    @upstream_operation("Failed to get deployment logs", "deployment.logs")
    async def get_logs(self, deployment_id: str) -> LogsResponse:
        events = await self._client.get_deployment_events(deployment_id)
        return LogsResponse(logs=to_log_entries(events))

    @upstream_operation("Failed to parse build errors", "deployment.errors")
    async def get_errors(self, deployment_id: str) -> ErrorsResponse:
        events = await self._client.get_deployment_events(deployment_id)
        errors = extract_errors(events)
        return ErrorsResponse(errors=errors, has_errors=len(errors) > 0)

    @upstream_operation("Failed to promote deployment", "deployment.promote")
    async def promote(self, deployment_id: str) -> DeploymentActionResponse:
        """Promote a deployment by patching its project.

        Only the project's ``framework`` is re-sent, taken from the
        deployment. Whether Vercel then serves this deployment on the
        production domain is up to Vercel; no alias is set here.
        """
        logger.info("deployment.promoting", deployment_id=deployment_id)

        deployment = await self._client.get_deployment(deployment_id)
        project_id = deployment["projectId"]
        await self._client.update_project(
            project_id, {"framework": deployment.get("framework")}
        )

        logger.info(
            "deployment.promoted", deployment_id=deployment_id, project_id=project_id
        )
        return DeploymentActionResponse(
            message="Deployment promoted to production",
            deployment_id=deployment_id,
        )

    @upstream_operation("Failed to cancel deployment", "deployment.cancel")
    async def cancel(self, deployment_id: str) -> DeploymentActionResponse:
        logger.info("deployment.cancelling", deployment_id=deployment_id)
        await self._client.cancel_deployment(deployment_id)
        logger.info("deployment.cancelled", deployment_id=deployment_id)
        return DeploymentActionResponse(
            message="Deployment cancelled",
            deployment_id=deployment_id,
        )

    @upstream_operation("Failed to list projects", "projects.list")
    async def list_projects(self) -> ProjectsResponse:
        # TODO: follow pagination.next once callers need more than the first page
        data = await self._client.list_projects()
        return ProjectsResponse(
            projects=[ProjectSummary.from_vercel(p) for p in data["projects"]]
        )

    @upstream_operation("Failed to set environment variables", "env.set")
    async def set_env_vars(self, request: EnvUpdateRequest) -> EnvUpdateResponse:
        """Write every variable in ``request.env`` to the project.

        Writes run concurrently, at most ``env_write_concurrency`` at a time.
        Any failed write fails the whole call, but writes that succeeded are
        not rolled back; ``results`` tells the caller which keys landed.
        """
        if not request.project_id or request.env is None:
            raise ValidationError("Project ID and environment variables are required")

        project_id = request.project_id
        logger.info("env.setting", project_id=project_id, count=len(request.env))

        semaphore = asyncio.Semaphore(self._env_write_concurrency)

        async def write(key: str, value: Any) -> EnvWriteResult:
            async with semaphore:
                try:
                    await self._client.create_env_var(
                        project_id,
                        {
                            "key": key,
                            "value": value,
                            "type": ENV_VAR_TYPE,
                            "target": list(ENV_VAR_TARGETS),
                        },
                    )
                except VercelAPIError as e:
                    return EnvWriteResult(key=key, success=False, error=e.message)
            return EnvWriteResult(key=key, success=True)

        results = await asyncio.gather(
            *(write(key, value) for key, value in request.env.items())
        )
        failures = [r for r in results if not r.success]
        if failures:
            logger.error(
                "env.set.failed",
                project_id=project_id,
                failed_keys=[r.key for r in failures],
                total=len(results),
            )
            raise UpstreamError(
                "Failed to set environment variables",
                details=failures[0].error,
                extra={
                    "results": [
                        r.model_dump(by_alias=True, exclude_none=True) for r in results
                    ]
                },
            )

        logger.info("env.set.completed", project_id=project_id, count=len(results))
        return EnvUpdateResponse(
            message="Environment variables set successfully",
            results=list(results),
        )

    @upstream_operation("Failed to add domain", "domain.add")
    async def add_domain(self, project_id: str, request: DomainRequest) -> DomainResponse:
        if not request.domain:
            raise ValidationError("Domain is required")

        logger.info("domain.adding", project_id=project_id, domain=request.domain)
        await self._client.add_domain(project_id, request.domain)
        logger.info("domain.added", project_id=project_id, domain=request.domain)

        return DomainResponse(message="Domain added successfully", domain=request.domain)

"""Data models for the deploy gateway."""

from app.models.base import CamelModel, ErrorEnvelope
from app.models.deployment import (
    BuildError,
    CommitMeta,
    DeploymentActionResponse,
    DeploymentCreate,
    DeploymentStatus,
    DeploymentStatusResponse,
    DeploymentSummary,
    DeploymentTriggerResponse,
    EnvVariable,
    ErrorsResponse,
    GitSource,
    LogEntry,
    LogsResponse,
)
from app.models.health import HealthResponse, VercelConnection
from app.models.project import (
    DomainRequest,
    DomainResponse,
    EnvUpdateRequest,
    EnvUpdateResponse,
    EnvWriteResult,
    LatestDeployment,
    ProjectsResponse,
    ProjectSummary,
)

__all__ = [
    "CamelModel",
    "ErrorEnvelope",
    # Deployment models
    "GitSource",
    "EnvVariable",
    "DeploymentCreate",
    "DeploymentSummary",
    "DeploymentTriggerResponse",
    "CommitMeta",
    "DeploymentStatus",
    "DeploymentStatusResponse",
    "LogEntry",
    "LogsResponse",
    "BuildError",
    "ErrorsResponse",
    "DeploymentActionResponse",
    # Project models
    "LatestDeployment",
    "ProjectSummary",
    "ProjectsResponse",
    "EnvUpdateRequest",
    "EnvWriteResult",
    "EnvUpdateResponse",
    "DomainRequest",
    "DomainResponse",
    # Health models
    "VercelConnection",
    "HealthResponse",
]

"""Deployment request and response models."""

from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from app.models.base import CamelModel
from app.utils.urls import with_scheme


class GitSource(CamelModel):
    """Git repository to build from."""

    type: str = "github"
    repo: str | None = None
    ref: str = "main"

    @field_validator("type", "ref", mode="before")
    @classmethod
    def blank_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        if not v:
            return cls.model_fields[info.field_name].default
        return v


class EnvVariable(CamelModel):
    """One key/value pair for a deployment's build environment."""

    key: str
    value: Any = None


class DeploymentCreate(CamelModel):
    """Request body for triggering a deployment.

    ``name`` and ``git_source.repo`` are required, but their absence is
    reported by the service as a 400 with a specific message rather than by
    schema validation.
    """

    name: str | None = None
    git_source: GitSource | None = None
    framework: str | None = None
    build_command: str | None = None
    env_variables: list[EnvVariable] | None = None

    @field_validator("env_variables", mode="before")
    @classmethod
    def ignore_non_list(cls, v: Any) -> Any:
        return v if isinstance(v, list) else None


class DeploymentSummary(CamelModel):
    """Deployment as returned right after creation."""

    id: str | None = None
    url: str | None = None
    status: str | None = None
    inspector_url: str | None = None

    @classmethod
    def from_vercel(cls, data: dict[str, Any]) -> "DeploymentSummary":
        return cls(
            id=data.get("id"),
            url=with_scheme(data.get("url")),
            status=data.get("readyState"),
            inspector_url=data.get("inspectorUrl"),
        )


class DeploymentTriggerResponse(CamelModel):
    success: bool = True
    deployment: DeploymentSummary


class CommitMeta(CamelModel):
    """Subset of the git commit metadata Vercel attaches to a deployment."""

    github_commit_ref: str | None = None
    github_commit_message: str | None = None
    github_commit_author_name: str | None = None


class DeploymentStatus(CamelModel):
    """Fixed projection of a Vercel deployment record.

    Fields missing upstream stay ``None`` and are dropped from the JSON.
    """

    id: str | None = None
    url: str | None = None
    status: str | None = None
    state: str | None = None
    ready: Any = None
    created_at: Any = None
    building_at: Any = None
    ready_at: Any = None
    creator: str | None = None
    meta: CommitMeta = Field(default_factory=CommitMeta)

    @classmethod
    def from_vercel(cls, data: dict[str, Any]) -> "DeploymentStatus":
        creator = data.get("creator") or {}
        meta = data.get("meta") or {}
        return cls(
            id=data.get("id"),
            url=with_scheme(data.get("url")),
            status=data.get("readyState"),
            state=data.get("state"),
            ready=data.get("ready"),
            created_at=data.get("createdAt"),
            building_at=data.get("buildingAt"),
            ready_at=data.get("readyAt"),
            creator=creator.get("username"),
            meta=CommitMeta(
                github_commit_ref=meta.get("githubCommitRef"),
                github_commit_message=meta.get("githubCommitMessage"),
                github_commit_author_name=meta.get("githubCommitAuthorName"),
            ),
        )


class DeploymentStatusResponse(CamelModel):
    success: bool = True
    deployment: DeploymentStatus


class LogEntry(CamelModel):
    """One build/runtime event."""

    timestamp: Any = None
    type: str | None = None
    payload: Any = None


class LogsResponse(CamelModel):
    success: bool = True
    logs: list[LogEntry]


class BuildError(CamelModel):
    """An event classified as an error."""

    timestamp: Any = None
    message: str


class ErrorsResponse(CamelModel):
    success: bool = True
    errors: list[BuildError]
    has_errors: bool


class DeploymentActionResponse(CamelModel):
    """Acknowledgement for promote and cancel."""

    success: bool = True
    message: str
    deployment_id: str

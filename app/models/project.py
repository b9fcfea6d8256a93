"""Project, environment variable and domain models."""

from typing import Any

from pydantic import Field

from app.models.base import CamelModel
from app.utils.urls import with_scheme


class LatestDeployment(CamelModel):
    id: str | None = None
    url: str | None = None
    ready: Any = None
    created_at: Any = None

    @classmethod
    def from_vercel(cls, data: dict[str, Any]) -> "LatestDeployment":
        return cls(
            id=data.get("id"),
            url=with_scheme(data.get("url")),
            ready=data.get("ready"),
            created_at=data.get("createdAt"),
        )


class ProjectSummary(CamelModel):
    """Subset of a Vercel project."""

    id: str | None = None
    name: str | None = None
    framework: str | None = None
    created_at: Any = None
    updated_at: Any = None
    link: dict[str, Any] | None = None
    latest_deployments: list[LatestDeployment] | None = None

    @classmethod
    def from_vercel(cls, data: dict[str, Any]) -> "ProjectSummary":
        latest = data.get("latestDeployments")
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            framework=data.get("framework"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            link=data.get("link"),
            latest_deployments=(
                [LatestDeployment.from_vercel(d) for d in latest]
                if latest is not None
                else None
            ),
        )


class ProjectsResponse(CamelModel):
    success: bool = True
    projects: list[ProjectSummary]


class EnvUpdateRequest(CamelModel):
    """Bulk environment variable write for one project."""

    project_id: str | None = None
    env: dict[str, Any] | None = None


class EnvWriteResult(CamelModel):
    """Outcome of a single environment variable write."""

    key: str
    success: bool
    error: str | None = None


class EnvUpdateResponse(CamelModel):
    success: bool = True
    message: str
    results: list[EnvWriteResult] = Field(default_factory=list)


class DomainRequest(CamelModel):
    domain: str | None = None


class DomainResponse(CamelModel):
    success: bool = True
    message: str
    domain: str

"""Unit tests for data models."""

from app.models.deployment import (
    DeploymentCreate,
    DeploymentStatus,
    DeploymentSummary,
    GitSource,
)
from app.models.project import EnvUpdateRequest, ProjectSummary


class TestDeploymentModels:
    """Tests for deployment models."""

    def test_git_source_defaults(self):
        source = GitSource(repo="org/repo")
        assert source.type == "github"
        assert source.ref == "main"

    def test_git_source_blank_values_fall_back_to_defaults(self):
        source = GitSource.model_validate({"repo": "org/repo", "type": "", "ref": None})
        assert source.type == "github"
        assert source.ref == "main"

    def test_deployment_create_accepts_camel_case(self):
        request = DeploymentCreate.model_validate(
            {
                "name": "app",
                "gitSource": {"repo": "org/repo", "ref": "dev", "type": "gitlab"},
                "buildCommand": "npm run build",
                "envVariables": [{"key": "A", "value": "1"}],
            }
        )

        assert request.git_source.ref == "dev"
        assert request.git_source.type == "gitlab"
        assert request.build_command == "npm run build"
        assert request.env_variables[0].key == "A"

    def test_non_list_env_variables_are_ignored(self):
        request = DeploymentCreate.model_validate(
            {"name": "app", "envVariables": {"A": "1"}}
        )
        assert request.env_variables is None

    def test_summary_prefixes_url(self):
        summary = DeploymentSummary.from_vercel(
            {"id": "dpl_1", "url": "a.vercel.app", "readyState": "QUEUED"}
        )
        dumped = summary.model_dump(by_alias=True, exclude_none=True)

        assert dumped == {"id": "dpl_1", "url": "https://a.vercel.app", "status": "QUEUED"}

    def test_status_projection(self, deployment_payload):
        status = DeploymentStatus.from_vercel(deployment_payload)
        dumped = status.model_dump(by_alias=True, exclude_none=True)

        assert dumped["url"] == "https://my-app-abc123.vercel.app"
        assert dumped["status"] == "READY"
        assert dumped["creator"] == "octocat"
        assert dumped["createdAt"] == 1700000000000
        assert dumped["meta"] == {
            "githubCommitRef": "main",
            "githubCommitMessage": "Fix header",
            "githubCommitAuthorName": "Octo Cat",
        }
        assert "projectId" not in dumped

    def test_status_projection_leaves_missing_fields_absent(self):
        status = DeploymentStatus.from_vercel({"id": "dpl_1", "ready": False})
        dumped = status.model_dump(by_alias=True, exclude_none=True)

        assert dumped == {"id": "dpl_1", "ready": False, "meta": {}}


class TestProjectModels:
    """Tests for project models."""

    def test_project_summary_with_latest_deployments(self):
        project = ProjectSummary.from_vercel(
            {
                "id": "prj_1",
                "name": "site",
                "framework": "nextjs",
                "createdAt": 1,
                "updatedAt": 2,
                "link": {"type": "github", "repo": "site"},
                "accountId": "acc_1",
                "latestDeployments": [
                    {"id": "dpl_1", "url": "site-1.vercel.app", "ready": 5, "createdAt": 4, "target": None}
                ],
            }
        )
        dumped = project.model_dump(by_alias=True, exclude_none=True)

        assert "accountId" not in dumped
        assert dumped["latestDeployments"] == [
            {"id": "dpl_1", "url": "https://site-1.vercel.app", "ready": 5, "createdAt": 4}
        ]

    def test_project_summary_without_latest_deployments(self):
        project = ProjectSummary.from_vercel({"id": "prj_1", "name": "site"})
        dumped = project.model_dump(by_alias=True, exclude_none=True)

        assert dumped == {"id": "prj_1", "name": "site"}

    def test_env_update_request_aliases(self):
        request = EnvUpdateRequest.model_validate({"projectId": "prj_1", "env": {"A": "1"}})
        assert request.project_id == "prj_1"
        assert request.env == {"A": "1"}

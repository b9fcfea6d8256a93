"""Vercel REST API client.

Thin async wrapper over ``httpx.AsyncClient`` bound to the Vercel base URL and
bearer token. Every method returns the decoded JSON body; failures surface as
:class:`VercelAPIError`.
"""

from typing import Any
from urllib.parse import quote

import httpx

from app.config import Settings
from app.utils.logging import get_logger

logger = get_logger(__name__)


class VercelAPIError(Exception):
    """Raised for any failed Vercel call."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


def extract_error_message(body: Any) -> str | None:
    """Return ``error.message`` from a Vercel error body, if there is one."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if message:
            return str(message)
    return None


def path_segment(value: str) -> str:
    """Percent-encode ``value`` so it stays a single URL path segment.

    ``/``, ``?`` and ``#`` are escaped by ``quote``; the dot segments ``.``
    and ``..`` are escaped too, otherwise they would be resolved away.
    """
    if not value:
        raise VercelAPIError("Identifier must not be empty")
    segment = quote(str(value), safe="")
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    return segment


class VercelClient:
    """Async client for the subset of the Vercel API the gateway exposes."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._token = settings.vercel_token
        self._team_id = settings.vercel_team_id
        self._http = httpx.AsyncClient(
            base_url=settings.vercel_api_url,
            headers={
                "Authorization": f"Bearer {settings.vercel_token}",
                "Content-Type": "application/json",
            },
            timeout=settings.vercel_timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        if not self._token:
            raise VercelAPIError("VERCEL_TOKEN not configured")

        params = {"teamId": self._team_id} if self._team_id else None
        try:
            response = await self._http.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.warning("vercel.transport_error", method=method, path=path, error=str(e))
            raise VercelAPIError(str(e) or type(e).__name__) from e

        body: Any = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = response.text

        if response.is_error:
            message = extract_error_message(body) or (
                f"Request failed with status code {response.status_code}"
            )
            logger.warning(
                "vercel.request_failed",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise VercelAPIError(message, status_code=response.status_code, body=body)

        return body

    # Identity

    async def get_user(self) -> dict[str, Any]:
        return await self._request("GET", "/v2/user")

    # Deployments

    async def create_deployment(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/v13/deployments", json=payload)

    async def get_deployment(self, deployment_id: str) -> dict[str, Any]:
        return await self._request(
            "GET", f"/v13/deployments/{path_segment(deployment_id)}"
        )

    async def get_deployment_events(self, deployment_id: str) -> list[dict[str, Any]]:
        return await self._request(
            "GET", f"/v2/deployments/{path_segment(deployment_id)}/events"
        )

    async def cancel_deployment(self, deployment_id: str) -> dict[str, Any]:
        return await self._request(
            "PATCH", f"/v12/deployments/{path_segment(deployment_id)}/cancel"
        )

    # Projects

    async def list_projects(self) -> dict[str, Any]:
        return await self._request("GET", "/v9/projects")

    async def update_project(
        self, project_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._request(
            "PATCH", f"/v9/projects/{path_segment(project_id)}", json=payload
        )

    async def create_env_var(
        self, project_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._request(
            "POST", f"/v9/projects/{path_segment(project_id)}/env", json=payload
        )

    async def add_domain(self, project_id: str, domain: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"/v9/projects/{path_segment(project_id)}/domains",
            json={"name": domain},
        )

"""Pytest configuration and fixtures."""

from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app
from app.services.vercel import VercelClient
from tests.fakes import API_KEY, VERCEL_TOKEN, FakeVercel


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the host environment."""
    return Settings(
        _env_file=None,
        app_env="production",
        gateway_api_key=API_KEY,
        vercel_token=VERCEL_TOKEN,
        vercel_api_url="https://api.vercel.test",
        vercel_team_id=None,
        rate_limit_requests=1000,
        rate_limit_window_seconds=3600,
        env_write_concurrency=5,
    )


@pytest.fixture
def fake_vercel() -> FakeVercel:
    return FakeVercel()


@pytest.fixture
async def vercel_client(settings: Settings, fake_vercel: FakeVercel) -> VercelClient:
    client = VercelClient(settings, transport=fake_vercel.transport)
    yield client
    await client.aclose()


@pytest.fixture
def app(settings: Settings, fake_vercel: FakeVercel) -> FastAPI:
    return create_app(settings, transport=fake_vercel.transport)


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Authenticated async test client."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"X-API-Key": API_KEY},
    ) as ac:
        yield ac


@pytest.fixture
async def anon_client(app: FastAPI) -> AsyncClient:
    """Async test client without the shared secret."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def deployment_payload() -> dict[str, Any]:
    """A Vercel deployment object as returned by GET /v13/deployments/:id."""
    return {
        "id": "dpl_abc123",
        "url": "my-app-abc123.vercel.app",
        "readyState": "READY",
        "state": "READY",
        "ready": 1700000300000,
        "createdAt": 1700000000000,
        "buildingAt": 1700000100000,
        "readyAt": 1700000300000,
        "projectId": "prj_123",
        "framework": "nextjs",
        "inspectorUrl": "https://vercel.com/team/my-app/abc123",
        "creator": {"uid": "u_1", "username": "octocat"},
        "meta": {
            "githubCommitRef": "main",
            "githubCommitMessage": "Fix header",
            "githubCommitAuthorName": "Octo Cat",
        },
    }

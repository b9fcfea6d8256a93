"""Unit tests for the Vercel client."""

import httpx
import pytest

from app.config import Settings
from app.services.vercel import VercelAPIError, VercelClient, extract_error_message
from tests.fakes import VERCEL_TOKEN, FakeVercel, request_json


class TestVercelClient:
    """Tests for VercelClient."""

    async def test_sends_bearer_token(self, vercel_client: VercelClient, fake_vercel: FakeVercel):
        fake_vercel.add("GET", "/v2/user", json={"user": {"username": "octocat"}})

        data = await vercel_client.get_user()

        assert data["user"]["username"] == "octocat"
        request = fake_vercel.requests[0]
        assert request.headers["Authorization"] == f"Bearer {VERCEL_TOKEN}"
        assert str(request.url).startswith("https://api.vercel.test/v2/user")
        assert "teamId" not in request.url.params

    async def test_team_id_is_sent_when_configured(
        self, settings: Settings, fake_vercel: FakeVercel
    ):
        fake_vercel.add("GET", "/v9/projects", json={"projects": []})
        scoped = settings.model_copy(update={"vercel_team_id": "team_42"})
        client = VercelClient(scoped, transport=fake_vercel.transport)

        await client.list_projects()
        await client.aclose()

        assert fake_vercel.requests[0].url.params["teamId"] == "team_42"

    async def test_posts_json_body(self, vercel_client: VercelClient, fake_vercel: FakeVercel):
        fake_vercel.add("POST", "/v9/projects/prj_1/domains", json={"name": "example.com"})

        await vercel_client.add_domain("prj_1", "example.com")

        assert request_json(fake_vercel.requests[0]) == {"name": "example.com"}

    async def test_error_body_message_is_surfaced(
        self, vercel_client: VercelClient, fake_vercel: FakeVercel
    ):
        fake_vercel.fail("GET", "/v13/deployments/dpl_x", "The deployment was not found", 404)

        with pytest.raises(VercelAPIError) as exc:
            await vercel_client.get_deployment("dpl_x")

        assert exc.value.message == "The deployment was not found"
        assert exc.value.status_code == 404
        assert exc.value.body["error"]["code"] == "bad_request"

    async def test_error_without_body_uses_status(
        self, vercel_client: VercelClient, fake_vercel: FakeVercel
    ):
        fake_vercel.add(
            "PATCH",
            "/v12/deployments/dpl_x/cancel",
            handler=lambda request: httpx.Response(502, text="Bad Gateway"),
        )

        with pytest.raises(VercelAPIError) as exc:
            await vercel_client.cancel_deployment("dpl_x")

        assert exc.value.message == "Request failed with status code 502"
        assert exc.value.body == "Bad Gateway"

    async def test_transport_error(self, vercel_client: VercelClient, fake_vercel: FakeVercel):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        fake_vercel.add("GET", "/v2/user", handler=refuse)

        with pytest.raises(VercelAPIError) as exc:
            await vercel_client.get_user()

        assert "connection refused" in exc.value.message
        assert exc.value.status_code is None

    async def test_missing_token_never_calls_out(
        self, settings: Settings, fake_vercel: FakeVercel
    ):
        client = VercelClient(
            settings.model_copy(update={"vercel_token": ""}),
            transport=fake_vercel.transport,
        )

        with pytest.raises(VercelAPIError, match="VERCEL_TOKEN not configured"):
            await client.get_user()
        await client.aclose()

        assert fake_vercel.requests == []

    @pytest.mark.parametrize(
        "deployment_id, raw_path",
        [
            ("abc/def", "/v13/deployments/abc%2Fdef"),
            ("abc?teamId=evil", "/v13/deployments/abc%3FteamId%3Devil"),
            ("abc#frag", "/v13/deployments/abc%23frag"),
            ("..", "/v13/deployments/%2E%2E"),
        ],
    )
    async def test_deployment_id_stays_one_path_segment(
        self,
        vercel_client: VercelClient,
        fake_vercel: FakeVercel,
        deployment_id: str,
        raw_path: str,
    ):
        with pytest.raises(VercelAPIError):
            await vercel_client.get_deployment(deployment_id)

        request = fake_vercel.requests[0]
        assert request.url.raw_path.decode("ascii") == raw_path
        assert "teamId" not in request.url.params

    async def test_project_id_cannot_reach_another_endpoint(
        self, vercel_client: VercelClient, fake_vercel: FakeVercel
    ):
        fake_vercel.add("GET", "/v2/user", json={"user": {"username": "octocat"}})

        with pytest.raises(VercelAPIError):
            await vercel_client.create_env_var("../../v2/user#", {"key": "A"})

        request = fake_vercel.requests[0]
        assert request.url.raw_path == b"/v9/projects/..%2F..%2Fv2%2Fuser%23/env"
        assert fake_vercel.calls(path="/v2/user") == []

    async def test_empty_id_is_rejected_before_sending(
        self, vercel_client: VercelClient, fake_vercel: FakeVercel
    ):
        with pytest.raises(VercelAPIError, match="must not be empty"):
            await vercel_client.cancel_deployment("")

        assert fake_vercel.requests == []


class TestExtractErrorMessage:
    """Tests for extract_error_message."""

    def test_nested_message(self):
        assert extract_error_message({"error": {"message": "nope"}}) == "nope"

    def test_unexpected_shapes(self):
        assert extract_error_message(None) is None
        assert extract_error_message("text") is None
        assert extract_error_message({"error": "flat"}) is None
        assert extract_error_message({"error": {"code": "x"}}) is None

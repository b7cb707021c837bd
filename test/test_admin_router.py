"""
API tests for the admin surface.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from meeting_feedback.admin.router import parse_limit, parse_page
from meeting_feedback.config import Settings
from meeting_feedback.main import create_app
from meeting_feedback.notifications.mock_provider import MockEmailProvider
from meeting_feedback.shared.database import DatabaseManager
from meeting_feedback.surveys.session import SurveySession

ADMIN_TOKEN = "test-admin-token"


@pytest_asyncio.fixture
async def secured_client(
    settings_factory: Callable[..., Settings],
    db: DatabaseManager,
    email_provider: MockEmailProvider,
) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(
        settings=settings_factory(admin_token=ADMIN_TOKEN),
        db=db,
        email_provider=email_provider,
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost:3000") as client:
        yield client


@pytest_asyncio.fixture
async def response_ids(db: DatabaseManager, make_invite, valid_answers: dict[str, Any]) -> list[int]:
    ids = []
    for email, title in [("alice@corp.test", "Pricing"), ("bob@corp.test", "Onboarding")]:
        _, _, token = await make_invite(email=email, title=title)
        ids.append((await SurveySession(db).submit(token, valid_answers)).response_id)
    return ids


class TestQueryParsing:
    @pytest.mark.parametrize(("raw", "expected"), [(None, 1), ("", 1), ("abc", 1), ("0", 1), ("-3", 1), ("4", 4)])
    def test_parse_page(self, raw: str | None, expected: int) -> None:
        assert parse_page(raw) == expected

    @pytest.mark.parametrize(("raw", "expected"), [(None, 50), ("x", 50), ("0", 50), ("-5", 1), ("10", 10), ("999", 200)])
    def test_parse_limit(self, raw: str | None, expected: int) -> None:
        assert parse_limit(raw) == expected


class TestListResponses:
    @pytest.mark.asyncio
    async def test_open_when_no_token_configured(self, client: AsyncClient, response_ids: list[int]) -> None:
        response = await client.get("/api/admin/responses")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["page"] == 1
        assert data["limit"] == 50
        assert data["total"] == 2
        assert {r["id"] for r in data["results"]} == set(response_ids)
        assert {r["meeting_title"] for r in data["results"]} == {"Pricing", "Onboarding"}

    @pytest.mark.asyncio
    async def test_search_and_lenient_paging(self, client: AsyncClient, response_ids: list[int]) -> None:
        response = await client.get(
            "/api/admin/responses",
            params={"q": "  ALICE ", "page": "zero", "limit": "1000"},
        )

        data = response.json()
        assert data["page"] == 1
        assert data["limit"] == 200
        assert data["total"] == 1
        assert data["results"][0]["participant_email"] == "alice@corp.test"

    @pytest.mark.asyncio
    async def test_single_lookup(self, client: AsyncClient, response_ids: list[int]) -> None:
        response = await client.get("/admin/responses", params={"id": str(response_ids[1])})

        assert response.status_code == 200
        result = response.json()["result"]
        assert result["id"] == response_ids[1]
        assert result["participant_email"] == "bob@corp.test"
        assert result["meeting_data"]["title"] == "Onboarding"

    @pytest.mark.asyncio
    async def test_single_lookup_missing(self, client: AsyncClient) -> None:
        response = await client.get("/api/admin/responses", params={"id": "12345"})

        assert response.status_code == 404
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_single_lookup_non_numeric(self, client: AsyncClient) -> None:
        response = await client.get("/api/admin/responses", params={"id": "abc"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_single_lookup_beyond_id_range(self, client: AsyncClient) -> None:
        response = await client.get("/api/admin/responses", params={"id": "9" * 30})

        assert response.status_code == 404
        assert response.json()["error"] == "Not found"

    @pytest.mark.asyncio
    async def test_page_beyond_offset_range(self, client: AsyncClient) -> None:
        response = await client.get("/api/admin/responses", params={"page": "99999999999999999999"})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "page is out of range",
            "code": "VALIDATION_ERROR",
        }


class TestAdminAuth:
    @pytest.mark.asyncio
    async def test_rejects_missing_token(self, secured_client: AsyncClient) -> None:
        response = await secured_client.get("/api/admin/responses")

        assert response.status_code == 401
        assert response.json()["success"] is False
        assert response.json()["error"] == "Unauthorized"

    @pytest.mark.asyncio
    async def test_rejects_wrong_token(self, secured_client: AsyncClient) -> None:
        response = await secured_client.get("/api/admin/responses", headers={"x-admin-token": "nope"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_accepts_header(self, secured_client: AsyncClient) -> None:
        response = await secured_client.get("/api/admin/responses", headers={"x-admin-token": ADMIN_TOKEN})

        assert response.status_code == 200
        assert response.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_accepts_query_token(self, secured_client: AsyncClient) -> None:
        response = await secured_client.get("/admin/responses", params={"token": ADMIN_TOKEN})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_dashboard_is_not_gated(self, secured_client: AsyncClient) -> None:
        response = await secured_client.get("/admin")

        assert response.status_code == 200
        assert "Survey Responses" in response.text


class TestDashboard:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/admin", "/admin/", "/api/admin"])
    async def test_dashboard_served(self, client: AsyncClient, path: str) -> None:
        response = await client.get(path)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "/api/admin/responses?" in response.text

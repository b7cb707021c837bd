"""
API tests for the public survey pages.
"""

from typing import Any
from unittest.mock import patch

import pytest
from httpx import AsyncClient

from meeting_feedback.shared.exceptions import StorageError
from meeting_feedback.surveys.session import SurveySession


class TestShowSurvey:
    @pytest.mark.asyncio
    async def test_form_for_pending_invite(self, client: AsyncClient, make_invite) -> None:
        _, _, token = await make_invite(name="Ann <script>", title="Q3 & Beyond")

        response = await client.get(f"/api/survey/{token}")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        body = response.text
        assert "Hi Ann &lt;script&gt;" in body
        assert "Q3 &amp; Beyond" in body
        assert f'action="/api/survey/{token}"' in body
        for name in ("punctuality", "listening_understanding", "knowledge_expertise",
                     "clarity_answers", "overall_value"):
            assert body.count(f'name="{name}"') == 5
        assert "{{" not in body

    @pytest.mark.asyncio
    async def test_completed_page(
        self,
        client: AsyncClient,
        make_invite,
        valid_answers: dict[str, Any],
    ) -> None:
        _, _, token = await make_invite()
        await client.post(f"/api/survey/{token}", json=valid_answers)

        response = await client.get(f"/api/survey/{token}")

        assert response.status_code == 200
        assert "Survey Already Completed" in response.text
        assert "Submitted on:" in response.text

    @pytest.mark.asyncio
    async def test_unknown_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/survey/nope")

        assert response.status_code == 404
        assert "Survey not found" in response.text
        assert "This survey link is invalid or has expired." in response.text

    @pytest.mark.asyncio
    async def test_storage_failure_page(self, client: AsyncClient) -> None:
        with patch.object(SurveySession, "view", side_effect=StorageError("down")):
            response = await client.get("/api/survey/any")

        assert response.status_code == 500
        assert "Failed to load survey" in response.text


class TestSubmitSurvey:
    @pytest.mark.asyncio
    async def test_json_submission(
        self,
        client: AsyncClient,
        make_invite,
        valid_answers: dict[str, Any],
    ) -> None:
        _, _, token = await make_invite()

        response = await client.post(f"/api/survey/{token}", json=valid_answers)

        assert response.status_code == 200
        assert "Thank You!" in response.text

    @pytest.mark.asyncio
    async def test_form_submission(
        self,
        client: AsyncClient,
        make_invite,
        valid_answers: dict[str, Any],
    ) -> None:
        _, _, token = await make_invite()
        form = {key: str(value) for key, value in valid_answers.items()}

        response = await client.post(f"/api/survey/{token}", data=form)

        assert response.status_code == 200
        assert "Thank You!" in response.text

    @pytest.mark.asyncio
    async def test_resubmission_conflict(
        self,
        client: AsyncClient,
        make_invite,
        valid_answers: dict[str, Any],
    ) -> None:
        _, _, token = await make_invite()
        await client.post(f"/api/survey/{token}", json=valid_answers)

        response = await client.post(f"/api/survey/{token}", json=valid_answers)

        assert response.status_code == 409
        assert response.json() == {"success": False, "error": "Survey already completed", "code": "CONFLICT"}

    @pytest.mark.asyncio
    async def test_out_of_range_rating(
        self,
        client: AsyncClient,
        make_invite,
        valid_answers: dict[str, Any],
    ) -> None:
        _, _, token = await make_invite()
        valid_answers["punctuality"] = 6

        response = await client.post(f"/api/survey/{token}", json=valid_answers)

        assert response.status_code == 400
        assert response.json()["error"] == "All ratings must be between 1 and 5"

    @pytest.mark.asyncio
    async def test_missing_rating(self, client: AsyncClient, make_invite) -> None:
        _, _, token = await make_invite()

        response = await client.post(f"/api/survey/{token}", json={"punctuality": 3})

        assert response.status_code == 400
        assert response.json()["error"] == "All rating questions are required"

    @pytest.mark.asyncio
    async def test_unknown_token(self, client: AsyncClient, valid_answers: dict[str, Any]) -> None:
        response = await client.post("/api/survey/nope", json=valid_answers)

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["error"] == "Survey not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"{not json", b"[1, 2]"])
    async def test_invalid_body(self, client: AsyncClient, make_invite, body: bytes) -> None:
        _, _, token = await make_invite()

        response = await client.post(
            f"/api/survey/{token}",
            content=body,
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"

    @pytest.mark.asyncio
    async def test_overlong_rating_in_form(
        self,
        client: AsyncClient,
        make_invite,
        valid_answers: dict[str, Any],
    ) -> None:
        _, _, token = await make_invite()
        form = {key: str(value) for key, value in valid_answers.items()}
        form["punctuality"] = "9" * 5000

        response = await client.post(f"/api/survey/{token}", data=form)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "All ratings must be between 1 and 5",
            "code": "VALIDATION_ERROR",
        }

    @pytest.mark.asyncio
    async def test_overlong_json_number(self, client: AsyncClient, make_invite) -> None:
        _, _, token = await make_invite()

        response = await client.post(
            f"/api/survey/{token}",
            content=b'{"punctuality": ' + b"9" * 5000 + b"}",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"

"""
Pytest configuration and fixtures.

Storage is a file-backed SQLite database per test (aiosqlite), so concurrent
sessions behave like separate connections against one database.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from uuid import uuid4

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

import meeting_feedback.models  # noqa: F401
from meeting_feedback.config import Settings
from meeting_feedback.invites.issuer import InviteIssuer
from meeting_feedback.invites.repository import InviteRepository
from meeting_feedback.main import create_app
from meeting_feedback.meetings.repository import MeetingRepository
from meeting_feedback.notifications.dispatcher import NotificationDispatcher
from meeting_feedback.notifications.mock_provider import MockEmailProvider
from meeting_feedback.shared.database import DatabaseManager
from meeting_feedback.surveys.session import SurveySession

VALID_ANSWERS: dict[str, Any] = {
    "punctuality": 5,
    "listening_understanding": 4,
    "knowledge_expertise": 3,
    "clarity_answers": 2,
    "overall_value": 1,
    "most_valuable": "Clear roadmap",
    "improvements": "Shorter intro",
}


def make_settings(tmp_path: Path, **overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        "email_provider": "mock",
        "base_url": "https://feedback.example.com/",
        "from_name": "Acme Sales",
        "from_email": "sales@acme.test",
        "admin_token": "",
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings_factory(tmp_path: Path) -> Callable[..., Settings]:
    def _factory(**overrides: Any) -> Settings:
        return make_settings(tmp_path, **overrides)

    return _factory


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest_asyncio.fixture
async def db(settings: Settings) -> AsyncGenerator[DatabaseManager, None]:
    manager = DatabaseManager(settings.database_url)
    await manager.create_all()
    yield manager
    await manager.drop_all()
    await manager.close()


@pytest_asyncio.fixture
async def db_session(db: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    async with db.session() as session:
        yield session


@pytest.fixture
def email_provider() -> MockEmailProvider:
    return MockEmailProvider()


@pytest.fixture
def issuer(db: DatabaseManager) -> InviteIssuer:
    return InviteIssuer(db)


@pytest.fixture
def dispatcher(
    email_provider: MockEmailProvider,
    db: DatabaseManager,
    settings: Settings,
) -> NotificationDispatcher:
    return NotificationDispatcher(provider=email_provider, db=db, settings=settings)


@pytest.fixture
def surveys(db: DatabaseManager) -> SurveySession:
    return SurveySession(db)


@pytest.fixture
def app(settings: Settings, db: DatabaseManager, email_provider: MockEmailProvider) -> FastAPI:
    return create_app(settings=settings, db=db, email_provider=email_provider)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://localhost:3000",
    ) as client:
        yield client


@pytest.fixture
def valid_answers() -> dict[str, Any]:
    return dict(VALID_ANSWERS)


@pytest.fixture
def make_invite(db: DatabaseManager) -> Callable[..., Awaitable[tuple[int, int, str]]]:
    """Store a meeting with one invite; the factory returns (meeting_id, invite_id, token)."""

    async def _make(
        *,
        email: str = "alice@example.com",
        name: str | None = "Alice",
        title: str = "Quarterly Review",
        session_id: str | None = None,
    ) -> tuple[int, int, str]:
        async with db.session() as session:
            meeting = await MeetingRepository(session).upsert(
                session_id,
                {"title": title, "participants": [{"name": name, "email": email}]},
            )
            invite = await InviteRepository(session).upsert(
                meeting_id=meeting.id,
                participant_name=name,
                participant_email=email,
                token=str(uuid4()),
                sent_at=datetime.now(timezone.utc),
            )
            return meeting.id, invite.id, invite.token

    return _make

"""
Meeting repository for database operations.
"""

from typing import Any
from uuid import uuid4

from sqlalchemy import select

from meeting_feedback.meetings.models import Meeting
from meeting_feedback.shared.database import BaseRepository


class MeetingRepository(BaseRepository):
    """Repository for meeting database operations."""

    async def upsert(self, session_id: str | None, meeting_data: dict[str, Any]) -> Meeting:
        """Insert a meeting or overwrite the payload of the one sharing ``session_id``.

        Args:
            session_id: Natural key; a random one is generated when absent.
            meeting_data: Full payload document. Replaces any previous one.

        Returns:
            The persisted meeting.
        """
        stmt = self.insert(Meeting).values(
            session_id=session_id or str(uuid4()),
            meeting_data=meeting_data,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Meeting.session_id],
            set_={"meeting_data": stmt.excluded.meeting_data},
        ).returning(Meeting)

        result = await self._execute(
            stmt.execution_options(populate_existing=True),
            "upsert meeting",
        )
        return result.scalar_one()

    async def get_by_id(self, meeting_id: int) -> Meeting | None:
        result = await self._execute(
            select(Meeting).where(Meeting.id == meeting_id),
            "get meeting",
        )
        return result.scalar_one_or_none()

    async def get_by_session_id(self, session_id: str) -> Meeting | None:
        result = await self._execute(
            select(Meeting).where(Meeting.session_id == session_id),
            "get meeting by session",
        )
        return result.scalar_one_or_none()

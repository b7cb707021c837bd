"""
Survey invite repository for database operations.
"""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import selectinload

from meeting_feedback.invites.models import SurveyInvite
from meeting_feedback.shared.database import BaseRepository


class InviteRepository(BaseRepository):
    """Repository for survey invite database operations."""

    async def upsert(
        self,
        *,
        meeting_id: int,
        participant_name: str | None,
        participant_email: str,
        token: str,
        sent_at: datetime,
    ) -> SurveyInvite:
        """Create the invite for (meeting, email) or re-issue it with a new token.

        Re-issuing replaces the token, resets ``sent_at`` and clears the
        previous delivery id, so the old link stops resolving. The returned
        row is read back from the database and is what must be emailed.
        """
        stmt = self.insert(SurveyInvite).values(
            meeting_id=meeting_id,
            participant_name=participant_name,
            participant_email=participant_email,
            token=token,
            sent_at=sent_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[SurveyInvite.meeting_id, SurveyInvite.participant_email],
            set_={
                "token": stmt.excluded.token,
                "sent_at": stmt.excluded.sent_at,
                "delivery_id": None,
            },
        ).returning(SurveyInvite)

        result = await self._execute(
            stmt.execution_options(populate_existing=True),
            "upsert survey invite",
        )
        return result.scalar_one()

    async def get_by_token(self, token: str) -> SurveyInvite | None:
        """Get an invite and its meeting by token."""
        stmt = (
            select(SurveyInvite)
            .options(selectinload(SurveyInvite.meeting))
            .where(SurveyInvite.token == token)
        )
        result = await self._execute(stmt, "get survey invite by token")
        return result.scalar_one_or_none()

    async def get_by_meeting_and_email(self, meeting_id: int, email: str) -> SurveyInvite | None:
        stmt = select(SurveyInvite).where(
            SurveyInvite.meeting_id == meeting_id,
            SurveyInvite.participant_email == email,
        )
        result = await self._execute(stmt, "get survey invite")
        return result.scalar_one_or_none()

    async def list_by_meeting(self, meeting_id: int) -> list[SurveyInvite]:
        stmt = (
            select(SurveyInvite)
            .where(SurveyInvite.meeting_id == meeting_id)
            .order_by(SurveyInvite.id)
        )
        result = await self._execute(stmt, "list survey invites")
        return list(result.scalars().all())

    async def set_delivery_id(self, token: str, delivery_id: str) -> bool:
        """Record the provider message id against the invite holding ``token``.

        Keyed by token so a delivery id from a superseded email is never
        attached to a re-issued invite.
        """
        stmt = (
            update(SurveyInvite)
            .where(SurveyInvite.token == token)
            .values(delivery_id=delivery_id)
        )
        result = await self._execute(stmt, "record delivery id")
        return result.rowcount == 1

    async def mark_completed(self, invite_id: int, completed_at: datetime) -> bool:
        """Move a pending invite to completed.

        Single conditional UPDATE; returns False when the invite was already
        completed (or is gone), which is how concurrent submissions lose.
        """
        stmt = (
            update(SurveyInvite)
            .where(
                SurveyInvite.id == invite_id,
                SurveyInvite.completed_at.is_(None),
            )
            .values(completed_at=completed_at)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt, "complete survey invite")
        return result.rowcount == 1

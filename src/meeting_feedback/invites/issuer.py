"""
Invite issuing: one survey invite per emailable participant of a meeting.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol
from uuid import uuid4

from meeting_feedback.invites.repository import InviteRepository
from meeting_feedback.shared.database import DatabaseManager
from meeting_feedback.shared.exceptions import StorageError
from meeting_feedback.shared.logging import get_logger

logger = get_logger(__name__)

INVITE_FAILED_MESSAGE = "Failed to create survey invite"


class ParticipantLike(Protocol):
    name: str | None
    email: str | None


def generate_token() -> str:
    """Opaque, unguessable survey token."""
    return str(uuid4())


@dataclass(frozen=True)
class IssueResult:
    """Outcome of issuing one participant's invite.

    ``token`` is the value read back from storage, never the speculative one.
    """

    participant_email: str
    participant_name: str | None
    meeting_id: int
    invite_id: int | None = None
    token: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.token is not None


class InviteIssuer:
    """Creates or refreshes survey invites.

    Each participant is written in its own transaction, so a failure for one
    participant never rolls back the others.
    """

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def issue_invites(
        self,
        meeting_id: int,
        participants: Iterable[ParticipantLike],
    ) -> list[IssueResult]:
        """Issue one invite per participant that has an email.

        Participants without an email are skipped silently, as are repeats of
        an email already handled in this batch. No email is sent here.
        """
        results: list[IssueResult] = []
        seen: set[str] = set()
        for participant in participants:
            if not participant.email or participant.email in seen:
                continue
            seen.add(participant.email)
            results.append(await self._issue_one(meeting_id, participant.name, participant.email))
        return results

    async def _issue_one(self, meeting_id: int, name: str | None, email: str) -> IssueResult:
        try:
            async with self._db.session() as session:
                invite = await InviteRepository(session).upsert(
                    meeting_id=meeting_id,
                    participant_name=name,
                    participant_email=email,
                    token=generate_token(),
                    sent_at=datetime.now(timezone.utc),
                )
                result = IssueResult(
                    participant_email=invite.participant_email,
                    participant_name=invite.participant_name,
                    meeting_id=meeting_id,
                    invite_id=invite.id,
                    token=invite.token,
                )
        except StorageError as exc:
            logger.error(
                "Survey invite could not be issued",
                extra={"meeting_id": meeting_id, "participant_email": email, "error": exc.message},
            )
            return IssueResult(
                participant_email=email,
                participant_name=name,
                meeting_id=meeting_id,
                error=INVITE_FAILED_MESSAGE,
            )

        logger.info(
            "Survey invite issued",
            extra={"meeting_id": meeting_id, "invite_id": result.invite_id},
        )
        return result

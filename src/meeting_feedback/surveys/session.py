"""
Survey state machine.

An invite is PENDING until its survey is submitted, then COMPLETED for good.
The transition is a conditional UPDATE on ``completed_at IS NULL`` executed
in the same transaction as the response insert, so of two concurrent
submissions for one token exactly one commits.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from meeting_feedback.invites.models import InviteState
from meeting_feedback.invites.repository import InviteRepository
from meeting_feedback.meetings.models import DEFAULT_MEETING_TITLE
from meeting_feedback.shared.database import DatabaseManager
from meeting_feedback.shared.exceptions import ConflictError, NotFoundError
from meeting_feedback.shared.logging import get_logger
from meeting_feedback.surveys.models import SurveyResponse
from meeting_feedback.surveys.schemas import SurveyAnswers, parse_submission

logger = get_logger(__name__)

SURVEY_NOT_FOUND_MESSAGE = "Survey not found"
ALREADY_COMPLETED_MESSAGE = "Survey already completed"


@dataclass(frozen=True)
class SurveyView:
    """What the survey page needs to know about a token."""

    token: str
    state: InviteState
    participant_name: str | None
    meeting_title: str
    completed_at: datetime | None = None


@dataclass(frozen=True)
class SubmissionReceipt:
    response_id: int
    invite_id: int
    submitted_at: datetime


class SurveySession:
    """View and submit surveys by invite token."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def view(self, token: str) -> SurveyView:
        """Resolve a token to its current survey state.

        Raises:
            NotFoundError: No invite holds this token.
        """
        async with self._db.session() as session:
            invite = await InviteRepository(session).get_by_token(token)
            if invite is None:
                raise NotFoundError(SURVEY_NOT_FOUND_MESSAGE)
            title = invite.meeting.title if invite.meeting else DEFAULT_MEETING_TITLE
            return SurveyView(
                token=token,
                state=invite.state,
                participant_name=invite.participant_name,
                meeting_title=title,
                completed_at=invite.completed_at,
            )

    async def submit(self, token: str, raw: Mapping[str, Any]) -> SubmissionReceipt:
        """Validate and store a submission, completing the invite.

        Raises:
            ValidationError: The ratings are missing or invalid.
            NotFoundError: No invite holds this token.
            ConflictError: The invite is already completed.
        """
        answers = parse_submission(raw)

        async with self._db.session() as session:
            invites = InviteRepository(session)
            invite = await invites.get_by_token(token)
            if invite is None:
                raise NotFoundError(SURVEY_NOT_FOUND_MESSAGE)

            submitted_at = datetime.now(timezone.utc)
            if not await invites.mark_completed(invite.id, submitted_at):
                raise ConflictError(
                    ALREADY_COMPLETED_MESSAGE,
                    details={"invite_id": invite.id},
                )

            response = self._build_response(invite.id, answers, submitted_at)
            session.add(response)
            await session.flush()
            receipt = SubmissionReceipt(
                response_id=response.id,
                invite_id=invite.id,
                submitted_at=submitted_at,
            )

        logger.info(
            "Survey completed",
            extra={
                "invite_id": receipt.invite_id,
                "response_id": receipt.response_id,
                "meeting_id": invite.meeting_id,
            },
        )
        return receipt

    @staticmethod
    def _build_response(invite_id: int, answers: SurveyAnswers, submitted_at: datetime) -> SurveyResponse:
        return SurveyResponse(
            survey_invite_id=invite_id,
            **answers.ratings,
            most_valuable=answers.most_valuable,
            improvements=answers.improvements,
            response_data=answers.raw,
            submitted_at=submitted_at,
        )

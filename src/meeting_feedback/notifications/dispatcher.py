"""
Survey email dispatch.

One email per issued invite. Sends for a meeting run concurrently and are
joined together; a failure is reported for that participant only.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass

from meeting_feedback.config import Settings
from meeting_feedback.invites.issuer import IssueResult
from meeting_feedback.invites.repository import InviteRepository
from meeting_feedback.meetings.models import DEFAULT_MEETING_TITLE
from meeting_feedback.notifications.interfaces import EmailProvider, OutgoingEmail
from meeting_feedback.notifications.templates import SURVEY_EMAIL
from meeting_feedback.shared.database import DatabaseManager
from meeting_feedback.shared.exceptions import DeliveryError, StorageError
from meeting_feedback.shared.logging import get_logger
from meeting_feedback.shared.templating import EmailTemplate

logger = get_logger(__name__)

UNEXPECTED_DISPATCH_ERROR = "Unexpected error while sending survey email"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of sending one survey email."""

    email: str
    ok: bool
    provider_handle: str | None = None
    error: str | None = None


class NotificationDispatcher:
    """Sends survey invitation emails and records delivery ids."""

    def __init__(
        self,
        provider: EmailProvider,
        db: DatabaseManager,
        settings: Settings,
        template: EmailTemplate = SURVEY_EMAIL,
    ) -> None:
        self._provider = provider
        self._db = db
        self._settings = settings
        self._template = template

    def build_message(self, invite: IssueResult, meeting_title: str | None) -> OutgoingEmail:
        rendered = self._template.render(
            {
                "participant_name": invite.participant_name or "there",
                "meeting_title": meeting_title or DEFAULT_MEETING_TITLE,
                "survey_url": self._settings.survey_url(invite.token or ""),
                "sender_name": self._settings.from_name,
            },
        )
        return OutgoingEmail(
            recipient=invite.participant_email,
            subject=rendered.subject,
            html=rendered.html,
            text=rendered.text,
            sender=self._settings.sender,
        )

    async def dispatch(self, invite: IssueResult, meeting_title: str | None = None) -> DispatchResult:
        """Send one invite's survey link.

        On failure the invite is left untouched; its token stays valid.
        """
        if not invite.ok:
            return DispatchResult(email=invite.participant_email, ok=False, error=invite.error)

        message = self.build_message(invite, meeting_title)
        try:
            result = await self._provider.send(message)
        except DeliveryError as exc:
            logger.warning(
                "Survey email failed",
                extra={"invite_id": invite.invite_id, "to": invite.participant_email, "error": exc.message},
            )
            return DispatchResult(email=invite.participant_email, ok=False, error=exc.message)

        if result.message_id:
            await self._record_delivery_id(invite, result.message_id)

        logger.info(
            "Survey email sent",
            extra={"invite_id": invite.invite_id, "provider_message_id": result.message_id},
        )
        return DispatchResult(
            email=invite.participant_email,
            ok=True,
            provider_handle=result.message_id,
        )

    async def dispatch_all(
        self,
        invites: Sequence[IssueResult],
        meeting_title: str | None = None,
    ) -> list[DispatchResult]:
        """Send every invite concurrently; results keep the input order."""
        outcomes = await asyncio.gather(
            *(self.dispatch(invite, meeting_title) for invite in invites),
            return_exceptions=True,
        )

        results: list[DispatchResult] = []
        for invite, outcome in zip(invites, outcomes):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            if isinstance(outcome, BaseException):
                logger.error(
                    "Survey email dispatch crashed",
                    exc_info=outcome,
                    extra={"invite_id": invite.invite_id},
                )
                outcome = DispatchResult(
                    email=invite.participant_email,
                    ok=False,
                    error=UNEXPECTED_DISPATCH_ERROR,
                )
            results.append(outcome)
        return results

    async def _record_delivery_id(self, invite: IssueResult, delivery_id: str) -> None:
        # Best effort: the email is already out.
        try:
            async with self._db.session() as session:
                await InviteRepository(session).set_delivery_id(invite.token or "", delivery_id)
        except StorageError as exc:
            logger.warning(
                "Could not record delivery id",
                extra={"invite_id": invite.invite_id, "error": exc.message},
            )

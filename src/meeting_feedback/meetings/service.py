"""
Meeting ingestion workflow: store the meeting, issue invites, send emails.
"""

from dataclasses import dataclass

from meeting_feedback.invites.issuer import InviteIssuer
from meeting_feedback.meetings.repository import MeetingRepository
from meeting_feedback.meetings.schemas import DeliveryDetail, MeetingPayload, WebhookResponse
from meeting_feedback.notifications.dispatcher import DispatchResult, NotificationDispatcher
from meeting_feedback.shared.database import DatabaseManager
from meeting_feedback.shared.logging import get_logger

logger = get_logger(__name__)

NO_PARTICIPANTS_MESSAGE = "Meeting data stored, but no participants with email found"
SENT_MESSAGE = "Meeting data received and survey emails sent"


@dataclass
class MeetingIngestionService:
    """Runs one webhook delivery end to end."""

    db: DatabaseManager
    issuer: InviteIssuer
    dispatcher: NotificationDispatcher

    async def ingest(self, payload: MeetingPayload) -> WebhookResponse:
        logger.info(
            "Webhook received",
            extra={
                "session_id": payload.session_id,
                "trigger": payload.extra.get("trigger"),
                "participants": len(payload.participants),
            },
        )

        # Committed before any invite references it.
        async with self.db.session() as session:
            meeting = await MeetingRepository(session).upsert(
                payload.session_id,
                payload.to_document(),
            )
            meeting_id = meeting.id
            meeting_title = meeting.title

        logger.info("Meeting stored", extra={"meeting_id": meeting_id, "session_id": meeting.session_id})

        participants = payload.emailable_participants
        if not participants:
            return WebhookResponse(message=NO_PARTICIPANTS_MESSAGE, meeting_id=meeting_id)

        issued = await self.issuer.issue_invites(meeting_id, participants)
        dispatched = await self.dispatcher.dispatch_all(issued, meeting_title)

        details = [self._detail(result) for result in dispatched]
        sent = sum(1 for d in details if d.status == "sent")
        failed = len(details) - sent

        logger.info(
            "Survey emails dispatched",
            extra={"meeting_id": meeting_id, "emails_sent": sent, "emails_failed": failed},
        )
        return WebhookResponse(
            message=SENT_MESSAGE,
            meeting_id=meeting_id,
            emails_sent=sent,
            emails_failed=failed,
            details=details,
        )

    @staticmethod
    def _detail(result: DispatchResult) -> DeliveryDetail:
        if result.ok:
            return DeliveryDetail(email=result.email, status="sent", email_id=result.provider_handle)
        return DeliveryDetail(email=result.email, status="failed", error=result.error)

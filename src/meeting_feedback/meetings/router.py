"""
FastAPI router for the meeting webhook.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from meeting_feedback.invites.issuer import InviteIssuer
from meeting_feedback.meetings.schemas import WEBHOOK_USAGE, MeetingPayload, WebhookResponse
from meeting_feedback.meetings.service import MeetingIngestionService
from meeting_feedback.notifications.dispatcher import NotificationDispatcher
from meeting_feedback.shared.database import DatabaseManager, get_database_manager

router = APIRouter(prefix="/api/webhook", tags=["webhook"])


def get_ingestion_service(
    request: Request,
    db: Annotated[DatabaseManager, Depends(get_database_manager)],
) -> MeetingIngestionService:
    """Dependency for the ingestion service."""
    dispatcher = NotificationDispatcher(
        provider=request.app.state.email_provider,
        db=db,
        settings=request.app.state.settings,
    )
    return MeetingIngestionService(db=db, issuer=InviteIssuer(db), dispatcher=dispatcher)


@router.post(
    "",
    response_model=WebhookResponse,
    summary="Receive a meeting record",
    description="Stores the meeting, issues one survey invite per participant "
    "with an email and sends each of them a survey link.",
)
async def receive_meeting(
    payload: MeetingPayload,
    service: Annotated[MeetingIngestionService, Depends(get_ingestion_service)],
) -> WebhookResponse:
    return await service.ingest(payload)


@router.get("", summary="Webhook usage")
async def webhook_usage() -> dict[str, Any]:
    return WEBHOOK_USAGE

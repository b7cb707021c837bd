"""
Pydantic schemas for meeting ingestion.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Participant(BaseModel):
    """A meeting participant as delivered by the webhook."""

    model_config = ConfigDict(extra="allow")

    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Email address; participants without one are skipped")

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class MeetingPayload(BaseModel):
    """Inbound meeting record.

    ``title`` and ``participants`` are typed; anything else the sender
    includes is kept verbatim in ``extra`` and stored with the meeting.
    """

    model_config = ConfigDict(extra="allow")

    session_id: str | None = Field(default=None, max_length=255)
    title: str | None = None
    participants: list[Participant] = Field(default_factory=list)

    @field_validator("session_id", mode="before")
    @classmethod
    def coerce_session_id(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("participants", mode="before")
    @classmethod
    def null_participants(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    @property
    def emailable_participants(self) -> list[Participant]:
        return [p for p in self.participants if p.email]

    def to_document(self) -> dict[str, Any]:
        """Payload as stored in ``meetings.meeting_data``; keys the sender left out stay out."""
        return self.model_dump(mode="json", exclude_unset=True)


class DeliveryDetail(BaseModel):
    """Outcome of one participant's invitation."""

    email: str
    status: Literal["sent", "failed"]
    email_id: str | None = None
    error: str | None = None


class WebhookResponse(BaseModel):
    success: bool = True
    message: str
    meeting_id: int
    emails_sent: int = 0
    emails_failed: int = 0
    details: list[DeliveryDetail] = Field(default_factory=list)


WEBHOOK_USAGE: dict[str, Any] = {
    "message": "Webhook endpoint is active",
    "usage": "Send POST request with meeting data",
    "example": {
        "session_id": "unique-session-id",
        "title": "Meeting Title",
        "participants": [{"name": "John Doe", "email": "john@example.com"}],
    },
}

"""
SQLAlchemy models for meetings.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meeting_feedback.shared.database import Base

if TYPE_CHECKING:
    from meeting_feedback.invites.models import SurveyInvite

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests).
JSONDocument = JSON().with_variant(JSONB(), "postgresql")

DEFAULT_MEETING_TITLE = "Recent Meeting"


class Meeting(Base):
    """A meeting record received from the webhook."""

    __tablename__ = "meetings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str | None] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
        index=True,
    )
    meeting_data: Mapped[dict[str, Any]] = mapped_column(JSONDocument, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    invites: Mapped[list["SurveyInvite"]] = relationship(
        "SurveyInvite",
        back_populates="meeting",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def title(self) -> str:
        return (self.meeting_data or {}).get("title") or DEFAULT_MEETING_TITLE

    def __repr__(self) -> str:
        return f"<Meeting(id={self.id}, session_id={self.session_id})>"

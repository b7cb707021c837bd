"""
SQLAlchemy models for survey invites.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meeting_feedback.shared.database import Base

if TYPE_CHECKING:
    from meeting_feedback.meetings.models import Meeting
    from meeting_feedback.surveys.models import SurveyResponse


class InviteState(str, Enum):
    """Survey invite lifecycle state."""

    PENDING = "pending"
    COMPLETED = "completed"


class SurveyInvite(Base):
    """One participant's survey credential for one meeting."""

    __tablename__ = "survey_invites"
    __table_args__ = (
        UniqueConstraint(
            "meeting_id",
            "participant_email",
            name="uq_survey_invites_meeting_email",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    meeting_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("meetings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    participant_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    participant_email: Mapped[str] = mapped_column(String(255), nullable=False)
    token: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    delivery_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    meeting: Mapped["Meeting"] = relationship("Meeting", back_populates="invites")
    response: Mapped["SurveyResponse | None"] = relationship(
        "SurveyResponse",
        back_populates="invite",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def state(self) -> InviteState:
        return InviteState.COMPLETED if self.completed_at is not None else InviteState.PENDING

    def __repr__(self) -> str:
        return f"<SurveyInvite(id={self.id}, meeting_id={self.meeting_id}, state={self.state})>"

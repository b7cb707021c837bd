"""
SQLAlchemy models for survey responses.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meeting_feedback.meetings.models import JSONDocument
from meeting_feedback.shared.database import Base

if TYPE_CHECKING:
    from meeting_feedback.invites.models import SurveyInvite

RATING_FIELDS: tuple[str, ...] = (
    "punctuality",
    "listening_understanding",
    "knowledge_expertise",
    "clarity_answers",
    "overall_value",
)
RATING_MIN = 1
RATING_MAX = 5


def _rating_check(field: str) -> CheckConstraint:
    return CheckConstraint(
        f"{field} >= {RATING_MIN} AND {field} <= {RATING_MAX}",
        name=f"ck_survey_responses_{field}_range",
    )


class SurveyResponse(Base):
    """A completed survey; immutable once written."""

    __tablename__ = "survey_responses"
    __table_args__ = tuple(_rating_check(field) for field in RATING_FIELDS)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    survey_invite_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("survey_invites.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    punctuality: Mapped[int] = mapped_column(Integer, nullable=False)
    listening_understanding: Mapped[int] = mapped_column(Integer, nullable=False)
    knowledge_expertise: Mapped[int] = mapped_column(Integer, nullable=False)
    clarity_answers: Mapped[int] = mapped_column(Integer, nullable=False)
    overall_value: Mapped[int] = mapped_column(Integer, nullable=False)
    most_valuable: Mapped[str | None] = mapped_column(Text, nullable=True)
    improvements: Mapped[str | None] = mapped_column(Text, nullable=True)
    response_data: Mapped[dict[str, Any] | None] = mapped_column(JSONDocument, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    invite: Mapped["SurveyInvite"] = relationship("SurveyInvite", back_populates="response")

    def __repr__(self) -> str:
        return f"<SurveyResponse(id={self.id}, survey_invite_id={self.survey_invite_id})>"

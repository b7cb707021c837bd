"""
Read model over completed survey responses.
"""

from typing import Any

from sqlalchemy import ColumnElement, func, or_, select

from meeting_feedback.invites.models import SurveyInvite
from meeting_feedback.meetings.models import Meeting
from meeting_feedback.shared.database import BaseRepository
from meeting_feedback.shared.exceptions import NotFoundError, ValidationError
from meeting_feedback.surveys.models import SurveyResponse

MAX_PAGE_SIZE = 200
DEFAULT_PAGE_SIZE = 50
# Ids are 32-bit INTEGER columns; OFFSET is a 64-bit BIGINT.
MAX_ID = 2**31 - 1
MAX_OFFSET = 2**63 - 1

RESPONSE_NOT_FOUND_MESSAGE = "Not found"

_meeting_title = Meeting.meeting_data["title"].as_string()

LIST_COLUMNS = (
    SurveyResponse.id,
    SurveyResponse.submitted_at,
    SurveyResponse.punctuality,
    SurveyResponse.listening_understanding,
    SurveyResponse.knowledge_expertise,
    SurveyResponse.clarity_answers,
    SurveyResponse.overall_value,
    SurveyResponse.most_valuable,
    SurveyResponse.improvements,
    SurveyResponse.response_data,
    SurveyInvite.participant_email,
    SurveyInvite.participant_name,
    Meeting.id.label("meeting_id"),
    _meeting_title.label("meeting_title"),
)

DETAIL_COLUMNS = (
    *SurveyResponse.__table__.columns,
    SurveyInvite.participant_email,
    SurveyInvite.participant_name,
    Meeting.id.label("meeting_id"),
    Meeting.meeting_data,
)


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ResponseQuery(BaseRepository):
    """Responses joined with their invite and meeting."""

    @staticmethod
    def _joined(*columns: Any) -> Any:
        return (
            select(*columns)
            .select_from(SurveyResponse)
            .join(SurveyInvite, SurveyResponse.survey_invite_id == SurveyInvite.id)
            .join(Meeting, SurveyInvite.meeting_id == Meeting.id)
        )

    @staticmethod
    def _search_filter(search: str) -> ColumnElement[bool]:
        pattern = f"%{_escape_like(search)}%"
        return or_(
            SurveyInvite.participant_email.ilike(pattern, escape="\\"),
            _meeting_title.ilike(pattern, escape="\\"),
        )

    async def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        search: str | None = None,
    ) -> dict[str, Any]:
        """One page of responses, most recent first.

        ``search`` is a case-insensitive substring match on the participant
        email or the meeting title. ``total`` counts every row under the same
        filter, independently of the page.
        """
        if page < 1:
            raise ValidationError("page must be at least 1", details={"page": page})
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(
                f"limit must be between 1 and {MAX_PAGE_SIZE}",
                details={"limit": limit},
            )
        if (page - 1) * limit > MAX_OFFSET:
            raise ValidationError("page is out of range", details={"page": page})

        data_stmt = self._joined(*LIST_COLUMNS)
        count_stmt = self._joined(func.count(SurveyResponse.id))
        if search:
            condition = self._search_filter(search)
            data_stmt = data_stmt.where(condition)
            count_stmt = count_stmt.where(condition)

        data_stmt = (
            data_stmt.order_by(SurveyResponse.submitted_at.desc(), SurveyResponse.id.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )

        rows = await self._execute(data_stmt, "list survey responses")
        results = [dict(row) for row in rows.mappings().all()]
        total = (await self._execute(count_stmt, "count survey responses")).scalar_one()

        return {"page": page, "limit": limit, "total": total, "results": results}

    async def get_one(self, response_id: int) -> dict[str, Any]:
        """Full response with its participant and meeting.

        Raises:
            NotFoundError: No response has this id.
        """
        if not 1 <= response_id <= MAX_ID:
            raise NotFoundError(RESPONSE_NOT_FOUND_MESSAGE, details={"id": response_id})
        stmt = self._joined(*DETAIL_COLUMNS).where(SurveyResponse.id == response_id).limit(1)
        result = await self._execute(stmt, "get survey response")
        row = result.mappings().one_or_none()
        if row is None:
            raise NotFoundError(RESPONSE_NOT_FOUND_MESSAGE, details={"id": response_id})
        return dict(row)
